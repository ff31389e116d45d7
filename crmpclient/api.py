"""Low-level access to the CRMP API.

Applications should use :class:`crmpclient.client.Client` instead. This module
provides the HTTP wrapper and the paging helpers the client is built on.
"""

from __future__ import annotations

import contextlib
import json
import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from crmpclient.errors import HttpError, InvalidResponseBodyError
from crmpclient.models import PageResponse, PagingOptions

API_VERSION = "v1"


def _session_without_retries() -> requests.Session:
    # One attempt per call; failures go straight to the caller.
    sess = requests.Session()
    retries = Retry(total=0, read=0, connect=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retries)
    sess.mount("http://", adapter)
    sess.mount("https://", adapter)
    return sess


def build_headers(api_token: str) -> dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Token token={api_token}",
    }


class Api:
    """HTTP wrapper for the CRMP API with paging helpers.

    Every call is a single POST to `{base_uri}/api/v1/{path}` with the params as
    a JSON body.
    """

    def __init__(
        self,
        base_uri: str,
        api_token: str,
        *,
        timeout: float = 30.0,
        logger: logging.Logger | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.api_url = f"{base_uri.rstrip('/')}/api/{API_VERSION}"
        self.timeout = timeout
        self.headers = build_headers(api_token)
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.session = session or _session_without_retries()

    def raw_api_call(self, path: str, params: Mapping[str, Any]) -> Any:
        """POST to `path` and return the parsed JSON body.

        Raises:
            HttpError: If the response status is not 200.
            InvalidResponseBodyError: If the body is not valid JSON.
        """
        url = f"{self.api_url}/{path}"
        res = self.session.post(
            url, data=json.dumps(dict(params)), headers=self.headers, timeout=self.timeout
        )
        if res.status_code != 200:
            self._log_failure(path, params, res.status_code)
            raise HttpError(res.status_code, res.text)

        try:
            return res.json()
        except ValueError as e:
            self._log_failure(path, params, res.status_code)
            raise InvalidResponseBodyError(str(e)) from e

    def paged_api_call(
        self, path: str, params: Mapping[str, Any], options: PagingOptions | None = None
    ) -> Iterator[PageResponse]:
        """Yield each page of `path`, following `next_page` from the server.

        Starts at `options.start_page` and stops after `options.max_pages` pages or
        when the server returns no `next_page`. Un-paged endpoints ignore the
        `page` param and return no `next_page`, so they yield a single page.

        Raises:
            InvalidResponseBodyError: If `next_page` names a page already fetched.
        """
        options = options or PagingOptions()
        page: int | None = options.start_page
        pages_processed = 0
        fetched: set[int] = set()

        while page is not None and not options.exhausted(pages_processed):
            if page in fetched:
                raise InvalidResponseBodyError(
                    f"next_page {page} was already fetched from {path}"
                )
            fetched.add(page)
            # The engine's cursor always wins over a caller-supplied `page`.
            payload = self.raw_api_call(path, {**params, "page": page})
            response = PageResponse.from_payload(payload)
            self.logger.debug(
                f"Fetched page {page} of {path}: {len(response.results)} results, "
                f"next_page={response.next_page}"
            )
            yield response
            pages_processed += 1
            page = response.next_page

    def iter_api_call(
        self, path: str, params: Mapping[str, Any], options: PagingOptions | None = None
    ) -> Iterator[dict[str, Any]]:
        """Yield every result of every page, one page in memory at a time."""
        for single_page in self.paged_api_call(path, params, options):
            yield from single_page.results

    def each_api_call(
        self,
        path: str,
        params: Mapping[str, Any],
        options: PagingOptions | None,
        visit: Callable[[dict[str, Any]], Any],
    ) -> None:
        """Call `visit` once for each result across all pages.

        Exceptions raised by `visit` stop the traversal and propagate.
        """
        for item in self.iter_api_call(path, params, options):
            visit(item)

    def collect_api_call(
        self, path: str, params: Mapping[str, Any], options: PagingOptions | None = None
    ) -> list[dict[str, Any]]:
        """Return the results of all pages as one list.

        Note that this keeps every result in memory.
        """
        all_results: list[dict[str, Any]] = []
        for single_page in self.paged_api_call(path, params, options):
            all_results.extend(single_page.results)
        return all_results

    def _log_failure(self, path: str, params: Mapping[str, Any], status: int) -> None:
        # A broken log sink must not replace the error being raised.
        with contextlib.suppress(Exception):
            self.logger.error(
                f"CRMP API call to {path} with {dict(params)} failed with status {status}"
            )
