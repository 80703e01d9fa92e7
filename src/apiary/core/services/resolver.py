"""Resource crawling.

`crawl` walks the pending requests against one flattened resource and decides,
per key, whether the value is inline (rendered now), a link stub (returned as a
`Follow` for the fetcher) or whether the key is a `prefix@rest` request that
must descend into a sub-resource. It never awaits, so everything it renders
happens within a single step of the event loop.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from apiary.core.domain.requests import RequestSet
from apiary.core.services.envelope import is_link_stub
from apiary.core.services.renderer import Renderer

logger = logging.getLogger(__name__)

PREFIX_SEPARATOR = "@"


@dataclass(frozen=True)
class Follow:
    """A link stub to fetch, with the request view it was found under."""

    url: str
    requests: RequestSet


class Resolver:
    def __init__(self, renderer: Renderer) -> None:
        self._renderer = renderer

    def crawl(self, resource: Any, requests: RequestSet) -> list[Follow]:
        follows: list[Follow] = []
        if not isinstance(resource, Mapping):
            return follows

        for key in requests.pending_keys():
            # An earlier key in this pass may have resolved the same placeholder.
            if not requests.is_pending(key):
                continue
            if key in resource:
                value = resource[key]
                if is_link_stub(value):
                    logger.debug("Field %r is a link stub, following %s", key, value["href"])
                    follows.append(Follow(url=str(value["href"]), requests=requests))
                else:
                    self._renderer.inject(requests, key, value)
            elif PREFIX_SEPARATOR in key:
                prefix, rest = key.split(PREFIX_SEPARATOR, 1)
                follows.extend(self.crawl(resource.get(prefix), requests.renamed(key, rest)))
        return follows
