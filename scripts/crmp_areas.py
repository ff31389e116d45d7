#!/usr/bin/env python
from __future__ import annotations

import argparse

import pandas as pd

from crmpclient import Client, PagingOptions


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch CRMP areas (/api/v1/areas.json)")
    parser.add_argument("area_class", help="Area classification, e.g. Postcode or Constituency")
    parser.add_argument("--containing", help="Only areas inside this area identifier", default="")
    parser.add_argument(
        "--memberships", action="store_true", help="Include memberships representing each area"
    )
    parser.add_argument("--page", type=int, default=0, help="First page to fetch (0-based)")
    parser.add_argument("--max-pages", type=int, default=None, help="Maximum pages to fetch")
    parser.add_argument("--limit", type=int, default=20, help="Rows to display")
    args = parser.parse_args()

    client = Client.from_env()
    options = PagingOptions(start_page=args.page, max_pages=args.max_pages)
    if args.containing:
        rows = client.area_containments(args.containing, args.area_class, options)
    elif args.memberships:
        rows = client.areas_with_memberships(args.area_class, options)
    else:
        rows = client.areas(args.area_class, options)

    df = pd.DataFrame(rows)
    if args.limit:
        print(df.head(args.limit).to_string(index=False))
    else:
        print(df.to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
