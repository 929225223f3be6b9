"""
Logflare Client
===============
Async client for sending log events to the Logflare ingestion API.
"""

import json
import logging
from collections.abc import Sequence
from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError

from logflare.config import ClientOptions, ErrorCallback
from logflare.exceptions import (
    LogflareError,
    RequestError,
    ResponseError,
    ResponseInfo,
    SerializationError,
    TransportError,
)
from logflare.models import LogEvent, LogflareResponse

# Routed through stdlib logging so host applications control the output.
logger = structlog.wrap_logger(
    logging.getLogger(__name__),
    processors=[structlog.stdlib.render_to_log_kwargs],
    wrapper_class=structlog.stdlib.BoundLogger,
)

INGEST_PATH = "/api/logs"

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/plain, */*",
}


class _SharedTransport(httpx.AsyncBaseTransport):
    """Caller-owned transport that outlives the per-call AsyncClient."""

    def __init__(self, transport: httpx.AsyncBaseTransport):
        self._transport = transport

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return await self._transport.handle_async_request(request)

    async def aclose(self) -> None:
        # Closed by its owner, never by a send.
        pass


class LogflareClient:
    """
    Client for posting log events to a Logflare source.

    Every send performs exactly one POST and either returns the parsed
    response or raises a LogflareError subclass. Nothing is queued,
    retried or kept open between calls, so a single instance can be shared
    by concurrent tasks.
    """

    def __init__(
        self,
        options: ClientOptions,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Logflare client.

        Args:
            options: Validated client configuration
            transport: HTTP transport to send requests through (httpx default if not provided)
        """
        self._source_token = options.source_token
        self._api_key = options.api_key
        self._api_url = options.resolved_api_url
        self._on_error: Optional[ErrorCallback] = options.on_error
        self._debug = options.debug
        self._transport = _SharedTransport(transport) if transport is not None else None

    @property
    def source_token(self) -> str:
        return self._source_token

    @property
    def api_url(self) -> str:
        return self._api_url

    def __repr__(self) -> str:
        return f"LogflareClient(source_token={self._source_token!r}, api_url={self._api_url!r})"

    async def send_event(self, event: LogEvent) -> LogflareResponse:
        """Send a single event as a one-element batch."""
        return await self.send_events([event])

    async def send_events(self, batch: Sequence[LogEvent]) -> LogflareResponse:
        """
        Send a batch of events to the ingestion endpoint.

        Args:
            batch: Events to send, in order. An empty batch is sent as-is.

        Returns:
            The message returned by the server

        Raises:
            TypeError: The batch is not a list or tuple
            SerializationError: The batch is not JSON-serializable
            RequestError: The ingestion URL could not be built
            TransportError: The request failed before a response was received
            ResponseError: The response was unsuccessful or malformed
        """
        if not isinstance(batch, (list, tuple)):
            raise TypeError(
                f"batch must be a list or tuple of events, not {type(batch).__name__}"
            )

        payload = {"batch": batch}

        try:
            request = self._build_request(payload)
            response = await self._perform(request)
            return self._interpret(request, response)
        except LogflareError as exc:
            self._report_failure(payload, exc)
            raise

    def build_request(self, batch: Sequence[LogEvent]) -> httpx.Request:
        """Build the ingestion request for a batch without sending it."""
        return self._build_request({"batch": batch})

    def _build_request(self, payload: dict[str, Any]) -> httpx.Request:
        try:
            url = httpx.URL(self._api_url).join(INGEST_PATH)
            url = url.copy_merge_params(
                {"api_key": self._api_key, "source": self._source_token}
            )
        except (httpx.InvalidURL, ValueError) as exc:
            raise RequestError("invalid URL", cause=exc) from exc

        try:
            body = json.dumps(payload, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError, RecursionError) as exc:
            raise SerializationError(
                f"JSON serialization failed: {exc}", cause=exc
            ) from exc

        return httpx.Request("POST", url, headers=REQUEST_HEADERS, content=body)

    async def _perform(self, request: httpx.Request) -> httpx.Response:
        try:
            # An injected transport handles every request, env proxies included.
            async with httpx.AsyncClient(
                transport=self._transport, trust_env=self._transport is None
            ) as client:
                return await client.send(request)
        except httpx.HTTPError as exc:
            raise TransportError(f"network request failed: {exc}", cause=exc) from exc
        except Exception as exc:
            raise LogflareError(f"unknown error: {exc}", cause=exc) from exc

    def _interpret(
        self, request: httpx.Request, response: httpx.Response
    ) -> LogflareResponse:
        data = _parse_json(response)

        if not 100 <= response.status_code < 600:
            raise ResponseError("invalid response", data=data)

        info = ResponseInfo(
            status_code=response.status_code,
            headers=dict(response.headers),
        )

        if not response.is_success:
            raise ResponseError(
                f'network response was not ok for "{request.url}"',
                response=info,
                data=data,
            )

        try:
            return LogflareResponse.model_validate(data)
        except ValidationError as exc:
            raise ResponseError(
                "invalid JSON response", cause=exc, response=info, data=data
            ) from exc

    def _report_failure(self, payload: dict[str, Any], error: LogflareError) -> None:
        if self._debug:
            logger.warning(
                "Logflare API request failed",
                error=error.message,
                error_type=type(error).__name__,
                status_code=error.response.status_code if error.response else None,
            )

        if self._on_error is None:
            return

        try:
            self._on_error(payload, error)
        except Exception:
            logger.exception("Logflare on_error callback failed")


def _parse_json(response: httpx.Response) -> Any:
    """Parse the response body, returning None when it is not JSON."""
    try:
        return response.json()
    except ValueError:
        return None


def create_client(
    source_token: str,
    api_key: str,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    **kwargs: Any,
) -> LogflareClient:
    """Create a client from keyword options (see ClientOptions)."""
    options = ClientOptions(source_token=source_token, api_key=api_key, **kwargs)
    return LogflareClient(options, transport=transport)
