# tests/conftest.py
# Fixtures for driving matrix_client against an in-memory homeserver.
from __future__ import annotations

import os
from typing import Callable, List, Optional

import httpx
import pytest

from tests.helpers import Recorder


# ---- helpers ----------------------------------------------------------------
def _env_first(keys: List[str], default: Optional[str] = None) -> Optional[str]:
    """
    Return the first non-empty environment value from the provided keys.
    """
    for k in keys:
        v = os.getenv(k)
        if v:
            return v
    return default


# ---- pytest markers ----------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "live: test that may hit a real Matrix homeserver")


# ---- fixtures ----------------------------------------------------------------
@pytest.fixture
def mock_transport_factory() -> (
    Callable[[Callable[[httpx.Request], httpx.Response]], httpx.MockTransport]
):
    """
    Factory returning an httpx.MockTransport from a handler function.

    Usage:
        def handler(request: httpx.Request) -> httpx.Response: ...
        transport = mock_transport_factory(handler)
        client = Client.new("http://localhost:8008", transport=transport)
    """

    def _factory(
        handler: Callable[[httpx.Request], httpx.Response],
    ) -> httpx.MockTransport:
        return httpx.MockTransport(handler)

    return _factory


@pytest.fixture
def recorder() -> Recorder:
    """A handler that records requests and replays queued responses."""
    return Recorder()


@pytest.fixture
def transport(mock_transport_factory, recorder: Recorder) -> httpx.MockTransport:
    return mock_transport_factory(recorder)


@pytest.fixture
def homeserver() -> str:
    """
    Homeserver URL used by the tests. Only ever reached through a mock transport.
    """
    return _env_first(["MATRIX_TEST_HOMESERVER"], "https://matrix.org")
