"""Client for the CRMP civic-data API.

This package provides:
- A `Client` covering memberships, lists, list items and areas
- Transparent paging, either collecting every page or visiting each result
- Process-wide defaults via `configure()`, used by `new()`
"""

from __future__ import annotations

from crmpclient.client import Client
from crmpclient.config import Configuration, configure, get_configuration
from crmpclient.errors import (
    ConfigurationError,
    CrmpClientError,
    HttpError,
    InvalidResponseBodyError,
)
from crmpclient.models import PageResponse, PagingOptions
from crmpclient.version import __version__


def configuration() -> Configuration:
    return get_configuration()


def new(base_uri: str | None = None, api_token: str | None = None) -> Client:
    """Return a new Client, using the passed params or the configured defaults."""
    config = get_configuration()
    return Client(
        base_uri if base_uri is not None else config.default_base_uri,
        api_token if api_token is not None else config.default_api_token,
        logger=config.logger,
    )


__all__ = [
    "Client",
    "Configuration",
    "ConfigurationError",
    "CrmpClientError",
    "HttpError",
    "InvalidResponseBodyError",
    "PageResponse",
    "PagingOptions",
    "__version__",
    "configuration",
    "configure",
    "new",
]
