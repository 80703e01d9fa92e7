"""URL -> flattened resource memoization.

Entries are keyed by the exact request URL, credential and embed parameters
included. The cache also remembers the single in-flight load per URL so that
concurrent misses await one request instead of racing. It lives as long as its
orchestrator and is never evicted.
"""

from __future__ import annotations

import asyncio
from typing import Any


class ResourceCache:
    def __init__(self) -> None:
        self._resources: dict[str, Any] = {}
        self._in_flight: dict[str, asyncio.Future[Any]] = {}

    def __contains__(self, url: object) -> bool:
        return url in self._resources

    def get(self, url: str) -> Any | None:
        return self._resources.get(url)

    def put(self, url: str, resource: Any) -> None:
        self._resources[url] = resource

    def in_flight(self, url: str) -> asyncio.Future[Any] | None:
        return self._in_flight.get(url)

    def track(self, url: str, load: asyncio.Future[Any]) -> None:
        self._in_flight[url] = load
        load.add_done_callback(lambda done: self._forget(url, done))

    def _forget(self, url: str, load: asyncio.Future[Any]) -> None:
        if self._in_flight.get(url) is load:
            del self._in_flight[url]
