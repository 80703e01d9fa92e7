"""Fetching, envelope normalization and cache population.

The transport is an injected `httpx.AsyncClient`; this module owns what happens
around it: credentials in the query string, one in-flight request per URL, JSON
parsing, flattening, caching, then handing the resource to the resolver and
following whatever link stubs it reports.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from apiary.core.domain.requests import RequestSet
from apiary.core.errors import FetchError
from apiary.core.services.cache import ResourceCache
from apiary.core.services.envelope import flatten
from apiary.core.services.resolver import Follow, Resolver

logger = logging.getLogger(__name__)


def with_credentials(url: str, api_key: str) -> str:
    """Append the API key and the embed flag, respecting an existing query string."""

    separator = "&" if "?" in url else "?"
    return f"{url}{separator}apikey={api_key}&embed=true"


class Fetcher:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        api_key: str,
        resolver: Resolver,
        cache: ResourceCache | None = None,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._resolver = resolver
        self._cache = cache if cache is not None else ResourceCache()
        self.requests_issued = 0

    @property
    def cache(self) -> ResourceCache:
        return self._cache

    async def fetch(self, url: str, requests: RequestSet, *, trail: frozenset[str] = frozenset()) -> None:
        """Resolve `url` and crawl it against the requests live at this moment."""

        full_url = with_credentials(url, self._api_key)
        if full_url in trail:
            logger.debug("Skipping %s: already on the current link chain", url)
            return

        if full_url in self._cache:
            resource = self._cache.get(full_url)
        else:
            resource = await self._load(full_url)

        follows = self._resolver.crawl(resource, requests)
        await self._follow(follows, trail | {full_url})

    async def _load(self, full_url: str) -> Any:
        load = self._cache.in_flight(full_url)
        if load is None:
            load = asyncio.ensure_future(self._request(full_url))
            self._cache.track(full_url, load)
        else:
            logger.debug("Joining in-flight request for %s", full_url)
        return await asyncio.shield(load)

    async def _request(self, full_url: str) -> Any:
        self.requests_issued += 1
        logger.debug("GET %s", full_url)
        try:
            response = await self._client.get(full_url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise FetchError(full_url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(full_url, f"transport error: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(full_url, "response body is not valid JSON") from exc

        resource = flatten(payload)
        self._cache.put(full_url, resource)
        return resource

    async def _follow(self, follows: list[Follow], trail: frozenset[str]) -> None:
        if not follows:
            return
        results = await asyncio.gather(
            *(self.fetch(follow.url, follow.requests, trail=trail) for follow in follows),
            return_exceptions=True,
        )
        errors = [result for result in results if isinstance(result, BaseException)]
        for error in errors[1:]:
            logger.error("Fetch failed: %s", error)
        if errors:
            raise errors[0]
