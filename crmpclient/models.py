"""Value types used by the pagination engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from crmpclient.errors import InvalidResponseBodyError


@dataclass(frozen=True)
class PagingOptions:
    """Where to start paging and how many pages to fetch at most.

    `start_page` is 0-based. `max_pages=None` fetches every remaining page.
    """

    start_page: int = 0
    max_pages: int | None = None

    def __post_init__(self) -> None:
        if self.start_page < 0:
            raise ValueError(f"start_page must be >= 0, got {self.start_page}")
        if self.max_pages is not None and self.max_pages < 0:
            raise ValueError(f"max_pages must be >= 0 or None, got {self.max_pages}")

    def exhausted(self, pages_processed: int) -> bool:
        return self.max_pages is not None and pages_processed >= self.max_pages


@dataclass(frozen=True)
class PageResponse:
    """One page of a paged CRMP endpoint.

    `next_page` is None on the last page, and on endpoints which are not paged.
    """

    results: list[dict[str, Any]] = field(default_factory=list)
    next_page: int | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> PageResponse:
        """Build a page from a parsed response body.

        Missing or null `results` is read as an empty page and missing or null
        `next_page` as the last page. A payload which is not a JSON object is an
        empty last page.
        """
        if not isinstance(payload, dict):
            return cls()

        results = payload.get("results")
        if results is None:
            results = []
        if not isinstance(results, list):
            raise InvalidResponseBodyError(
                f"Expected 'results' to be a list, got {type(results).__name__}"
            )

        next_page = payload.get("next_page")
        if next_page is not None and (isinstance(next_page, bool) or not isinstance(next_page, int)):
            raise InvalidResponseBodyError(f"Expected 'next_page' to be an integer, got {next_page!r}")

        return cls(results=list(results), next_page=next_page)
