"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the core
  to I/O libraries.
- Resolutions can be exported as JSON straight from `model_dump`.

Note:
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from apiary.core.domain.entity_type import EntityType


class ValueKind(str, Enum):
    """Runtime shape of a resource field value."""

    SCALAR = "scalar"
    LINK_STUB = "link_stub"
    LINK = "link"
    LIST = "list"
    UNKNOWN = "unknown"


class EntityKind(str, Enum):
    """Shape of a list item, in the priority order used to render it."""

    GROUP = "group"
    USER = "user"
    SPEC = "spec"
    NAMED = "named"
    TITLED = "titled"
    UNKNOWN = "unknown"


class PageMetadata(BaseModel):
    """The (api key, entity type, entity id) triple a page declares.

    Every field is optional so partial discovery can be reported to the user
    before failing.
    """

    api_key: str | None = Field(
        default=None,
        description="Credential appended to every API request.",
    )
    entity_type: EntityType | None = Field(
        default=None,
        description="Kind of entity the page is about.",
    )
    entity_id: str | None = Field(
        default=None,
        description="Identifier of the entity within its collection.",
    )

    def missing_fields(self) -> list[str]:
        return [name for name in ("api_key", "entity_type", "entity_id") if not getattr(self, name)]


class Resolution(BaseModel):
    """A placeholder that received its value."""

    placeholder: str = Field(
        ...,
        min_length=1,
        description="Placeholder name as written in the page (e.g. `lead@name`).",
    )
    key: str = Field(
        ...,
        min_length=1,
        description="Field name the value was found under (e.g. `name`).",
    )
    kind: ValueKind = Field(
        ...,
        description="Shape the value was classified as.",
    )
    fragment: str | None = Field(
        default=None,
        description="Rendered HTML fragment; None when the shape produces no output.",
    )
