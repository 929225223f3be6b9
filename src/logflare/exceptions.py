"""
Exceptions
==========
Error taxonomy raised by the Logflare client.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ResponseInfo:
    """Status line and headers of a received HTTP response."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)


class LogflareError(Exception):
    """
    Base class for every error raised by the client.

    Attributes:
        message: Human-readable description
        cause: Underlying exception, if any
        response: Response metadata, if a response was received
        data: Parsed JSON response body, if it could be parsed
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        response: Optional[ResponseInfo] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.response = response
        self.data = data


class ConfigError(LogflareError):
    """Invalid client configuration."""


class SerializationError(LogflareError):
    """The batch could not be serialized to JSON."""


class RequestError(LogflareError):
    """The request could not be built."""


class TransportError(LogflareError):
    """No response was obtained from the server."""


class ResponseError(LogflareError):
    """A response was received but it is unsuccessful or malformed."""

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response else None
