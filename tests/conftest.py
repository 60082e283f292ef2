# tests/conftest.py
from __future__ import annotations

from typing import Callable

import httpx
import pytest


@pytest.fixture
def mock_http(monkeypatch) -> Callable[[Callable], None]:
    """Route every ``httpx.AsyncClient`` through ``handler``."""

    def install(handler: Callable[[httpx.Request], httpx.Response]) -> None:
        transport = httpx.MockTransport(handler)
        real_client = httpx.AsyncClient
        monkeypatch.setattr(
            httpx,
            "AsyncClient",
            lambda **kw: real_client(transport=transport, **kw),
        )

    return install
