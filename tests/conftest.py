"""Shared test fixtures for restwrap.

Provides a controllable clock for cache expiry, a recording
:class:`httpx.MockTransport` backend, ready-made clients wired to it, and
isolation of the global output manager and ``RESTWRAP_*`` environment.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import httpx
import pytest

from restwrap.client import AsyncClient, SyncClient
from restwrap.output import OutputManager, reset_output, set_output


BASE_URL = "https://api.example.com/v1"
API_KEY = "test-key"


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _quiet_output():
    """Install a quiet, colourless OutputManager and reset it afterwards."""
    set_output(OutputManager(no_color=True, quiet=True))
    yield
    reset_output()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear RESTWRAP_* variables that might leak into tests."""
    for var in [
        "RESTWRAP_API_KEY",
        "RESTWRAP_API_KEY_SOURCE",
        "RESTWRAP_BASE_URL",
        "RESTWRAP_CACHE_TTL",
    ]:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# ---------------------------------------------------------------------------
# Mock backend
# ---------------------------------------------------------------------------


class Backend:
    """Records every request and answers through a swappable handler.

    By default every request gets ``200`` with a JSON body echoing the method
    and path plus a call counter, so repeated network calls are observable
    in the payload.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Optional[Callable[[httpx.Request], httpx.Response]] = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.handler is not None:
            return self.handler(request)
        return httpx.Response(
            200,
            json={
                "method": request.method,
                "path": request.url.raw_path.decode(),
                "call": len(self.requests),
            },
        )

    @property
    def calls(self) -> int:
        return len(self.requests)

    def respond(self, status_code: int = 200, json_body: Any = None, **kwargs: Any) -> None:
        """Answer all further requests with a fixed response."""

        def handler(request: httpx.Request) -> httpx.Response:
            if json_body is not None:
                return httpx.Response(status_code, json=json_body, **kwargs)
            return httpx.Response(status_code, **kwargs)

        self.handler = handler

    def fail_with(self, exc: Exception) -> None:
        """Raise *exc* for all further requests."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise exc

        self.handler = handler

    def reset_handler(self) -> None:
        self.handler = None

    def body_of(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def backend() -> Backend:
    return Backend()


@pytest.fixture
def client(backend: Backend, clock: FakeClock) -> SyncClient:
    """SyncClient wired to the mock backend with a 300 s TTL."""
    c = SyncClient(
        api_key=API_KEY,
        base_url=BASE_URL,
        cache_ttl=300_000,
        clock=clock,
        http_transport=httpx.MockTransport(backend),
    )
    yield c
    c.close()


@pytest.fixture
def make_async_client(backend: Backend, clock: FakeClock) -> Callable[..., AsyncClient]:
    """Factory for AsyncClients wired to the mock backend.

    Async clients must be built inside the running event loop, so tests
    receive a factory instead of an instance.
    """

    def factory(**kwargs: Any) -> AsyncClient:
        params: dict[str, Any] = {
            "api_key": API_KEY,
            "base_url": BASE_URL,
            "cache_ttl": 300_000,
            "clock": clock,
            "http_transport": httpx.MockTransport(backend),
        }
        params.update(kwargs)
        return AsyncClient(**params)

    return factory
