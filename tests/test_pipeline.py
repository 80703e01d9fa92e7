"""
Integration tests for apiary.core.services.pipeline.

Tests cover:
  • End-to-end resolution: inline field, followed link, grouped list
  • Missing metadata fails before any request
  • Empty placeholder set issues no request
  • resolve_document applies fragments through the Document protocol
"""

from __future__ import annotations

import pytest

from apiary.core.domain.entity_type import EntityType
from apiary.core.domain.models import PageMetadata
from apiary.core.domain.requests import Placeholder
from apiary.core.errors import FetchError, MissingMetadataError
from apiary.core.interfaces.document import Document
from apiary.core.services.pipeline import Orchestrator, ResolveHooks, resolve_document, root_url
from conftest import API_KEY

DOMAIN = "https://api.w3.org/domains/41481"
GROUPS = "https://api.w3.org/domains/41481/groups"

METADATA = PageMetadata(api_key=API_KEY, entity_type=EntityType.DOMAIN, entity_id="41481")


class FakeDocument:
    def __init__(self, metadata: PageMetadata, names: list[str]) -> None:
        self._metadata = metadata
        self._placeholders = [Placeholder(name=name, targets=[f"#{name}"]) for name in names]
        self.applied: dict[str, str | None] = {}

    def metadata(self) -> PageMetadata:
        return self._metadata

    def placeholders(self) -> list[Placeholder]:
        return self._placeholders

    def apply(self, placeholder: Placeholder) -> None:
        self.applied[placeholder.name] = placeholder.fragment


def test_root_url(settings):
    assert root_url(settings, EntityType.GROUP, "68239") == "https://api.w3.org/groups/68239"


def test_fake_document_satisfies_protocol():
    assert isinstance(FakeDocument(METADATA, []), Document)


@pytest.mark.asyncio
async def test_end_to_end(api, settings, placeholders):
    api.json(DOMAIN, {"name": "Acme", "groups": {"href": GROUPS}})
    api.json(GROUPS, {"_embedded": {"groups": [{"name": "G1", "_links": {"homepage": {"href": "H1"}}}]}})
    seen = []
    async with api.client(settings) as client:
        orchestrator = Orchestrator(
            settings=settings,
            client=client,
            hooks=ResolveHooks(resolved=lambda p, r: seen.append(r.key)),
        )
        result = await orchestrator.resolve(METADATA, placeholders("name", "groups"))

    fragments = {p.name: p.fragment for p in result.placeholders}
    assert fragments == {"name": "Acme", "groups": '<ul><li><a href="H1">G1</a></li></ul>'}
    assert seen == ["name", "groups"]
    assert result.complete
    assert result.root_url == DOMAIN
    assert result.requests_issued == 2


@pytest.mark.asyncio
async def test_missing_metadata_fails_before_network(api, settings, placeholders):
    async with api.client(settings) as client:
        orchestrator = Orchestrator(settings=settings, client=client)
        with pytest.raises(MissingMetadataError) as excinfo:
            await orchestrator.resolve(PageMetadata(api_key=API_KEY), placeholders("name"))

    assert excinfo.value.missing == ["entity_type", "entity_id"]
    assert api.requested == []


@pytest.mark.asyncio
async def test_no_placeholders_no_request(api, settings):
    async with api.client(settings) as client:
        result = await Orchestrator(settings=settings, client=client).resolve(METADATA, [])

    assert api.requested == []
    assert result.root_url is None


@pytest.mark.asyncio
async def test_unresolved_placeholders_reported(api, settings, placeholders):
    api.json(DOMAIN, {"name": "Acme"})
    async with api.client(settings) as client:
        result = await Orchestrator(settings=settings, client=client).resolve(
            METADATA, placeholders("name", "description")
        )

    assert [p.name for p in result.unresolved] == ["description"]
    assert not result.complete


@pytest.mark.asyncio
async def test_resolve_document_applies_fragments(api, settings):
    api.json(DOMAIN, {"name": "Acme", "_embedded": {"lead": {"name": "Ada", "email": "ada@w3.org"}}})
    document = FakeDocument(METADATA, ["name", "lead@email", "missing"])
    async with api.client(settings) as client:
        result = await resolve_document(document, settings=settings, client=client)

    assert document.applied == {"name": "Acme", "lead@email": "ada@w3.org"}
    assert [p.name for p in result.unresolved] == ["missing"]


@pytest.mark.asyncio
async def test_resolve_document_falls_back_to_configured_key(api, settings):
    api.json(DOMAIN, {"name": "Acme"})
    keyless = METADATA.model_copy(update={"api_key": None})
    document = FakeDocument(keyless, ["name"])
    configured = settings.model_copy(update={"api_key": API_KEY})
    async with api.client(configured) as client:
        await resolve_document(document, settings=configured, client=client)

    assert document.applied == {"name": "Acme"}


@pytest.mark.asyncio
async def test_fetch_error_propagates(api, settings, placeholders):
    api.raw(DOMAIN, "bad gateway", status_code=502)
    async with api.client(settings) as client:
        with pytest.raises(FetchError, match="HTTP 502"):
            await Orchestrator(settings=settings, client=client).resolve(METADATA, placeholders("name"))
