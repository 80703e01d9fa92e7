"""Page resolution orchestration.

This module owns everything one page resolution needs: the request set, the
resource cache and the hooks towards the document. Nothing is kept in module
globals, so several pages can be resolved side by side (or in tests) without
sharing state. The CLI and any other entry-point only call `resolve_document`
or `Orchestrator.resolve`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Sequence

import httpx

from apiary.adapters.http_client import build_async_client
from apiary.core.config import AppSettings
from apiary.core.domain.entity_type import EntityType
from apiary.core.domain.models import PageMetadata, Resolution
from apiary.core.domain.requests import Placeholder, RequestSet
from apiary.core.errors import MissingMetadataError
from apiary.core.interfaces.document import Document
from apiary.core.services.cache import ResourceCache
from apiary.core.services.fetcher import Fetcher
from apiary.core.services.renderer import Renderer
from apiary.core.services.resolver import Resolver

logger = logging.getLogger(__name__)


@dataclass
class ResolveHooks:
    """Optional callbacks for the layers around the core (document, progress)."""

    resolved: Callable[[Placeholder, Resolution], None] | None = None


@dataclass
class ResolveResult:
    """Output of one page resolution."""

    metadata: PageMetadata
    placeholders: list[Placeholder]
    root_url: str | None = None
    resolutions: list[Resolution] = field(default_factory=list)
    requests_issued: int = 0

    @property
    def unresolved(self) -> list[Placeholder]:
        return [p for p in self.placeholders if p.pending]

    @property
    def complete(self) -> bool:
        return not self.unresolved


def root_url(settings: AppSettings, entity_type: EntityType, entity_id: str) -> str:
    return f"{settings.base_url.rstrip('/')}/{entity_type.collection}/{entity_id}"


class Orchestrator:
    def __init__(
        self,
        *,
        settings: AppSettings,
        client: httpx.AsyncClient,
        cache: ResourceCache | None = None,
        hooks: ResolveHooks | None = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._cache = cache if cache is not None else ResourceCache()
        self._hooks = hooks or ResolveHooks()

    async def resolve(self, metadata: PageMetadata, placeholders: Sequence[Placeholder]) -> ResolveResult:
        missing = metadata.missing_fields()
        if missing:
            raise MissingMetadataError(metadata, missing)

        result = ResolveResult(metadata=metadata, placeholders=list(placeholders))
        if not result.placeholders:
            logger.info("No placeholders to resolve")
            return result

        def on_resolved(placeholder: Placeholder, resolution: Resolution) -> None:
            result.resolutions.append(resolution)
            if self._hooks.resolved:
                self._hooks.resolved(placeholder, resolution)

        renderer = Renderer(user_profile_url=self._settings.user_profile_url, on_resolved=on_resolved)
        fetcher = Fetcher(
            client=self._client,
            api_key=metadata.api_key or "",
            resolver=Resolver(renderer),
            cache=self._cache,
        )

        result.root_url = root_url(self._settings, metadata.entity_type, metadata.entity_id)
        logger.info("Resolving %d placeholder(s) from %s", len(result.placeholders), result.root_url)
        try:
            await fetcher.fetch(result.root_url, RequestSet.from_placeholders(result.placeholders))
        finally:
            result.requests_issued = fetcher.requests_issued

        for placeholder in result.unresolved:
            logger.debug("Placeholder %r was not found in any visited resource", placeholder.name)
        return result


async def resolve_document(
    document: Document,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
    hooks: ResolveHooks | None = None,
) -> ResolveResult:
    """Discover, resolve and write back every placeholder of `document`."""

    settings = settings or AppSettings()
    hooks = hooks or ResolveHooks()

    metadata = document.metadata()
    if not metadata.api_key and settings.api_key:
        metadata = metadata.model_copy(update={"api_key": settings.api_key})

    def apply(placeholder: Placeholder, resolution: Resolution) -> None:
        document.apply(placeholder)
        if hooks.resolved:
            hooks.resolved(placeholder, resolution)

    placeholders = document.placeholders()
    if client is not None:
        orchestrator = Orchestrator(settings=settings, client=client, hooks=ResolveHooks(resolved=apply))
        return await orchestrator.resolve(metadata, placeholders)

    async with build_async_client(settings) as own_client:
        orchestrator = Orchestrator(settings=settings, client=own_client, hooks=ResolveHooks(resolved=apply))
        return await orchestrator.resolve(metadata, placeholders)
