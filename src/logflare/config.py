"""
Client Configuration
====================
Configuration record for the Logflare client.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import httpx

from logflare.exceptions import ConfigError, LogflareError

DEFAULT_API_URL = "https://api.logflare.app"

ErrorCallback = Callable[[dict[str, Any], LogflareError], None]


@dataclass(frozen=True)
class ClientOptions:
    """
    Configuration for the Logflare client.

    Attributes:
        source_token: Identifier of the Logflare source receiving the events
        api_key: Ingest API key
        api_url: Base URL of the Logflare API (defaults to production)
        on_error: Called with (payload, error) whenever a send fails
        debug: Log a diagnostic line for every failed send
    """

    source_token: str
    api_key: str = field(repr=False)
    api_url: Optional[str] = None
    on_error: Optional[ErrorCallback] = None
    debug: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.source_token:
            raise ConfigError("source token not configured")
        if not self.api_key:
            raise ConfigError("API key not configured")
        if self.api_url is not None:
            _validate_api_url(self.api_url)

    @property
    def resolved_api_url(self) -> str:
        return self.api_url or DEFAULT_API_URL


def _validate_api_url(url: str) -> None:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ConfigError(f"invalid API URL {url!r}", cause=exc) from exc

    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigError(
            f"invalid API URL {url!r}: expected an absolute http(s) URL "
            f"like {DEFAULT_API_URL}"
        )
