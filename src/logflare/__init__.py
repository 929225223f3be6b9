"""
Logflare
========
Python client for sending batched log events to the Logflare API.
"""

from logflare.client import LogflareClient, create_client
from logflare.config import DEFAULT_API_URL, ClientOptions
from logflare.exceptions import (
    ConfigError,
    LogflareError,
    RequestError,
    ResponseError,
    ResponseInfo,
    SerializationError,
    TransportError,
)
from logflare.models import LogEvent, LogflareResponse

__version__ = "1.0.0"

__all__ = [
    "LogflareClient",
    "ClientOptions",
    "create_client",
    "DEFAULT_API_URL",
    "LogEvent",
    "LogflareResponse",
    "ResponseInfo",
    "LogflareError",
    "ConfigError",
    "SerializationError",
    "RequestError",
    "TransportError",
    "ResponseError",
]
