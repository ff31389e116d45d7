#!/usr/bin/env python
from __future__ import annotations

import argparse
import json

import pandas as pd

from crmpclient import Client, PagingOptions


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch CRMP lists, or the items of one list")
    parser.add_argument("--list-id", help="Print the items of this list instead", default="")
    parser.add_argument("--max-pages", type=int, default=None, help="Maximum pages to fetch")
    parser.add_argument("--jsonl", action="store_true", help="Stream one JSON object per line")
    parser.add_argument("--limit", type=int, default=20, help="Rows to display")
    args = parser.parse_args()

    client = Client.from_env()
    options = PagingOptions(max_pages=args.max_pages)

    if args.jsonl:
        # Streams page by page instead of loading everything first.
        if args.list_id:
            client.each_list_item(args.list_id, lambda item: print(json.dumps(item)), options)
        else:
            client.each_list(lambda item: print(json.dumps(item)), options)
        return 0

    rows = client.list_items(args.list_id, options) if args.list_id else client.lists(options)
    df = pd.DataFrame(rows)
    if args.limit:
        print(df.head(args.limit).to_string(index=False))
    else:
        print(df.to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
