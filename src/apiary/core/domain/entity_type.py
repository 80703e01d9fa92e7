"""Entity types a page can be about.

Kept in the domain layer so the HTML adapter, the orchestrator and the CLI share a
single source of truth for the `data-*-id` attributes and the API collections.
"""

from __future__ import annotations

from enum import Enum


class EntityType(str, Enum):
    """Kinds of W3C API entity a page can be bound to."""

    DOMAIN = "domain"
    GROUP = "group"
    USER = "user"

    @property
    def collection(self) -> str:
        """API collection segment, e.g. `groups` in `/groups/{id}`."""

        return f"{self.value}s"

    @property
    def attribute(self) -> str:
        """HTML attribute carrying the entity id, e.g. `data-group-id`."""

        return f"data-{self.value}-id"
