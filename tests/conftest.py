"""Shared fixtures for the GA4 client tests."""

import json
import random
from typing import Callable

import httpx
import pytest

from ga4 import Environment, GA4Client


class RecordingStream(httpx.SyncByteStream):
    """Response body that remembers whether it was consumed."""

    def __init__(self, content: bytes):
        self.content = content
        self.consumed = False

    def __iter__(self):
        self.consumed = True
        yield self.content


class MockEndpoint:
    """Collection endpoint double that records every request."""

    def __init__(self, status_code: int = 204, content: bytes = b""):
        self.status_code = status_code
        self.stream = RecordingStream(content)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, stream=self.stream)

    @property
    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


class FakeMonotonic:
    """Monotonic clock that only moves when told to."""

    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def endpoint_factory():
    return MockEndpoint


@pytest.fixture
def monotonic():
    return FakeMonotonic()


@pytest.fixture
def environment():
    return Environment(os="testos", arch="testarch", version="9.9.9")


@pytest.fixture
def diagnostics():
    return []


@pytest.fixture
def make_client(environment, diagnostics):
    """Build a client wired to a request handler such as a MockEndpoint."""
    clients = []

    def _make(mock: Callable[[httpx.Request], httpx.Response], user_id: str = "", debug: bool = False, **kwargs):
        kwargs.setdefault("environment", environment)
        kwargs.setdefault("rng", random.Random(42))
        kwargs.setdefault("clock", lambda: 1700000000.5)
        kwargs.setdefault("diagnostic", diagnostics.append)
        client = GA4Client(
            "G-TEST123",
            "secret1",
            user_id,
            debug,
            transport=httpx.MockTransport(mock),
            **kwargs,
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
