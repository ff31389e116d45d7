"""Process-wide defaults for building clients.

The configuration is created lazily on first access and lives for the rest of
the process. Clients read it once, when they are constructed.

Examples:
    >>> import crmpclient
    >>> crmpclient.configure(
    ...     default_base_uri="https://crmp.example.org",
    ...     default_api_token="secret",
    ... )
    >>> client = crmpclient.new()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields

from crmpclient.errors import ConfigurationError

LOGGER_NAME = "crmpclient"


@dataclass
class Configuration:
    default_base_uri: str | None = None
    default_api_token: str | None = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(LOGGER_NAME))


_configuration: Configuration | None = None


def get_configuration() -> Configuration:
    """Return the process-wide configuration, creating it on first use."""
    global _configuration
    if _configuration is None:
        _configuration = Configuration()
    return _configuration


def configure(**settings: object) -> Configuration:
    """Update the process-wide configuration.

    Args:
        **settings: Any of `default_base_uri`, `default_api_token`, `logger`.

    Returns:
        The updated configuration.

    Raises:
        ConfigurationError: If an unknown setting is passed.
    """
    config = get_configuration()
    known = {f.name for f in fields(Configuration)}
    unknown = sorted(set(settings) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration settings: {', '.join(unknown)}")

    for name, value in settings.items():
        setattr(config, name, value)
    return config


def reset_configuration() -> None:
    """Drop the process-wide configuration so the next access starts fresh."""
    global _configuration
    _configuration = None
