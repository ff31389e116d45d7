from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import requests

from crmpclient.api import Api
from crmpclient.config import get_configuration
from crmpclient.errors import ConfigurationError
from crmpclient.models import PagingOptions
from crmpclient.utils.env import API_TOKEN_KEY, BASE_URI_KEY, read_credentials

Visitor = Callable[[dict[str, Any]], Any]


def _created_at(item: dict[str, Any]) -> tuple[bool, Any]:
    # Missing timestamps first; the rest compare as the server sent them.
    value = item.get("created_at")
    return (value is not None, value)


class Client:
    """Calls the CRMP API endpoints, dealing with paging for you.

    Each paged endpoint has two methods, for example `lists` and `each_list`:

    - `lists` returns every list from every page as one list of dicts. Some of
      these objects are large, so this can use a lot of memory.
    - `each_list` calls `visit` once per list as pages arrive, keeping a single
      page in memory. Prefer it when you only need to act on each object.

    All paged methods accept `options` (a :class:`PagingOptions`) to set the
    0-based starting page and a maximum number of pages. By default every page
    is fetched.

    Examples:
        >>> client = Client("https://crmp.example.org", "secret")
        >>> for area in client.areas("Postcode"):
        ...     print(area["identifier"])
        >>> client.each_area("Postcode", lambda area: print(area["identifier"]))
    """

    def __init__(
        self,
        base_uri: str | None,
        api_token: str | None,
        *,
        timeout: float = 30.0,
        logger: logging.Logger | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not base_uri:
            raise ConfigurationError("No base_uri - pass as param or set a default with configure()")
        if not api_token:
            raise ConfigurationError("No api_token - pass as param or set a default with configure()")

        self.base_uri = base_uri
        if logger is None:
            logger = get_configuration().logger
        self.api = Api(base_uri, api_token, timeout=timeout, logger=logger, session=session)

    @classmethod
    def from_env(
        cls,
        uri_key: str = BASE_URI_KEY,
        token_key: str = API_TOKEN_KEY,
        dotenv: bool | str | Path = True,
        **kwargs: Any,
    ) -> Client:
        """Build a client from environment variables, reading `.env` if present."""
        base_uri, api_token = read_credentials(uri_key, token_key, dotenv)
        return cls(base_uri, api_token, **kwargs)

    # Non-paged endpoints

    def membership(self, identifier: str) -> Any:
        """Return a single membership, looked up by its unique identifier."""
        return self.api.raw_api_call("membership.json", {"identifier": identifier})

    # Paged endpoints

    def lists(self, options: PagingOptions | None = None) -> list[dict[str, Any]]:
        """Return all lists, oldest `created_at` first."""
        return sorted(self.api.collect_api_call("lists.json", {}, options), key=_created_at)

    def each_list(self, visit: Visitor, options: PagingOptions | None = None) -> None:
        self.api.each_api_call("lists.json", {}, options, visit)

    def list_items(self, list_id: Any, options: PagingOptions | None = None) -> list[dict[str, Any]]:
        """Return all items in the given list."""
        return self.api.collect_api_call("list/items.json", {"list_id": list_id}, options)

    def each_list_item(
        self, list_id: Any, visit: Visitor, options: PagingOptions | None = None
    ) -> None:
        self.api.each_api_call("list/items.json", {"list_id": list_id}, options, visit)

    def areas(self, area_class: str, options: PagingOptions | None = None) -> list[dict[str, Any]]:
        """Return all areas of an area classification, e.g. ``"Postcode"``."""
        return self.api.collect_api_call(
            "areas.json", {"area_classification": area_class}, options
        )

    def each_area(self, area_class: str, visit: Visitor, options: PagingOptions | None = None) -> None:
        self.api.each_api_call("areas.json", {"area_classification": area_class}, options, visit)

    def areas_with_memberships(
        self, area_class: str, options: PagingOptions | None = None
    ) -> list[dict[str, Any]]:
        """Return all areas of an area classification with the memberships representing them."""
        return self.api.collect_api_call(
            "areas/memberships.json", {"area_classification": area_class}, options
        )

    def each_area_with_memberships(
        self, area_class: str, visit: Visitor, options: PagingOptions | None = None
    ) -> None:
        self.api.each_api_call(
            "areas/memberships.json", {"area_classification": area_class}, options, visit
        )

    def area_containments(
        self,
        containing_area_identifier: str,
        contained_area_class: str,
        options: PagingOptions | None = None,
    ) -> list[dict[str, Any]]:
        """Return areas of `contained_area_class` inside the containing area.

        Each area also lists every area which contains it.
        """
        return self.api.collect_api_call(
            "areas/containments.json",
            _containment_params(containing_area_identifier, contained_area_class),
            options,
        )

    def each_area_containment(
        self,
        containing_area_identifier: str,
        contained_area_class: str,
        visit: Visitor,
        options: PagingOptions | None = None,
    ) -> None:
        self.api.each_api_call(
            "areas/containments.json",
            _containment_params(containing_area_identifier, contained_area_class),
            options,
            visit,
        )


def _containment_params(containing_area_identifier: str, contained_area_class: str) -> dict[str, str]:
    return {
        "containing_area": containing_area_identifier,
        "contained_area_classification": contained_area_class,
    }
