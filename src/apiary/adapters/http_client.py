"""httpx wrapper.

Why a wrapper:
- Standardizes timeouts and headers for every API call.
- Makes testing easy: tests hand an `httpx.MockTransport` to the same builder.
"""

from __future__ import annotations

import httpx

from apiary.core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the API defaults.

    Why a builder:
    - Centralizes timeouts/headers so the fetcher and `doctor` behave the same.
    - Lets tests inject a transport without touching the fetcher.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
