"""
Pytest configuration and shared fixtures.

Fixtures available to all tests:
  • settings          — AppSettings isolated from any .env file
  • api               — fake W3C API (httpx.MockTransport) with a request log
  • placeholders(...) — build Placeholder objects from names
"""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from apiary.adapters.http_client import build_async_client
from apiary.core.config import AppSettings
from apiary.core.domain.requests import Placeholder

API_KEY = "KEY"
BASE_URL = "https://api.w3.org/"


def full(url: str) -> str:
    """The URL the fetcher actually requests for `url`."""

    separator = "&" if "?" in url else "?"
    return f"{url}{separator}apikey={API_KEY}&embed=true"


class FakeApi:
    """Serves canned JSON bodies keyed by the credentialed URL and logs every request."""

    def __init__(self) -> None:
        self.routes: dict[str, Callable[[], httpx.Response]] = {}
        self.requested: list[str] = []

    def json(self, url: str, payload: Any) -> None:
        self.routes[full(url)] = lambda: httpx.Response(200, json=payload)

    def raw(self, url: str, body: str, status_code: int = 200) -> None:
        self.routes[full(url)] = lambda: httpx.Response(status_code, text=body)

    def calls(self, url: str) -> int:
        return self.requested.count(full(url))

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, text=json.dumps({"message": "not found"}))
        return route()

    def client(self, settings: AppSettings) -> httpx.AsyncClient:
        return build_async_client(settings, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, base_url=BASE_URL, api_key=None)


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def placeholders() -> Callable[..., list[Placeholder]]:
    def _factory(*names: str) -> list[Placeholder]:
        return [Placeholder(name=name, targets=[name]) for name in names]

    return _factory
