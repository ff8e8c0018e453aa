from __future__ import annotations

from typing import Callable

import httpx
import pytest

from core.services import request_pipeline

Handler = Callable[[httpx.Request], httpx.Response]


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was asked to send."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture(autouse=True)
def _plain_terminal(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("FORCE_COLOR", "TTY_COMPATIBLE", "TTY_INTERACTIVE"):
        monkeypatch.delenv(name, raising=False)
    for name in ("REQPEEK_HTTP_TIMEOUT_SECONDS", "REQPEEK_LOG_LEVEL", "REQPEEK_FOLLOW_REDIRECTS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def install_transport(monkeypatch: pytest.MonkeyPatch) -> Callable[[Handler], RecordingTransport]:
    """Route the pipeline's own client through a recording mock transport."""

    def _install(handler: Handler) -> RecordingTransport:
        transport = RecordingTransport(handler)
        monkeypatch.setattr(
            request_pipeline,
            "build_async_client",
            lambda settings=None: httpx.AsyncClient(transport=transport),
        )
        return transport

    return _install
