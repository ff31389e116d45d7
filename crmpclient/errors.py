"""Exceptions raised by crmpclient."""

from __future__ import annotations


class CrmpClientError(Exception):
    """Base class for all crmpclient errors."""

    pass


class ConfigurationError(CrmpClientError, ValueError):
    """Raised when a client is built without a base URI or API token."""

    pass


class HttpError(CrmpClientError):
    """Raised when the CRMP API answers with a status other than 200."""

    def __init__(self, code: int, body: str) -> None:
        self.code = code
        self.body = body
        super().__init__(f"HTTP code [{code}], response body [{body}]")


class InvalidResponseBodyError(CrmpClientError):
    """Raised when a 200 response cannot be parsed as JSON."""

    pass
