"""httpx wrapper.

- Standardizes timeout, User-Agent and redirect policy for the single
  request a run makes.
- Accepts a custom transport so tests can plug in `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the configured defaults.

    The caller owns the client and is expected to use it as an async context
    manager for the lifetime of the request.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        max_redirects=settings.max_redirects,
        headers=headers,
        transport=transport,
    )
