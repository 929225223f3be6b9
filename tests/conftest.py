"""
Test Configuration
==================
Pytest fixtures for Logflare client tests.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from logflare import ClientOptions, LogflareClient

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it receives."""

    def __init__(self, handler: Handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def sent_payloads(self) -> list[Any]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def error_calls() -> list[tuple[dict, Exception]]:
    """Collected (payload, error) pairs passed to on_error."""
    return []


@pytest.fixture
def options(error_calls: list) -> ClientOptions:
    """Client options with an on_error hook that records its calls."""
    return ClientOptions(
        source_token="test-source",
        api_key="test-key",
        on_error=lambda payload, error: error_calls.append((payload, error)),
    )


@pytest.fixture
def make_client(options: ClientOptions) -> Callable[[Handler], tuple[LogflareClient, RecordingTransport]]:
    """Build a client whose requests are answered by the given handler."""

    def factory(handler: Handler) -> tuple[LogflareClient, RecordingTransport]:
        transport = RecordingTransport(handler)
        return LogflareClient(options, transport=transport), transport

    return factory


@pytest.fixture
def sample_events() -> list[dict]:
    """Sample batch of log events."""
    return [
        {"message": "user signed in", "metadata": {"user_id": 42, "admin": False}},
        {"message": "cache miss", "metadata": {"keys": ["a", "b"], "ratio": 0.25, "region": None}},
    ]
