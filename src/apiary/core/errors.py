"""Apiary exceptions.

Only two failures are surfaced: missing page metadata (fatal, raised before any
network activity) and a failed fetch (local to one URL). A field that never shows
up in any resource is not an error; its placeholder simply stays pending.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from apiary.core.domain.models import PageMetadata


class ApiaryError(Exception):
    """Base class for every error raised by Apiary."""


class MissingMetadataError(ApiaryError):
    """The page does not declare an API key, an entity type or an entity id."""

    def __init__(self, metadata: PageMetadata, missing: list[str]) -> None:
        self.metadata = metadata
        self.missing = missing
        super().__init__(f"could not get all necessary metadata (missing: {', '.join(missing)})")


class FetchError(ApiaryError):
    """A request failed at the transport level, returned an error status or a non-JSON body."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{reason} ({url})")
