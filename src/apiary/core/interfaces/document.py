"""Contract for the documents Apiary fills in.

Why Protocol:
- Structural contract (duck typing) without a rigid base class.
- The pipeline can drive a BeautifulSoup page, an in-memory fake in tests, or any
  other DOM wrapper without knowing which.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from apiary.core.domain.models import PageMetadata
from apiary.core.domain.requests import Placeholder


@runtime_checkable
class Document(Protocol):
    """Minimal surface a page must offer to be resolved.

    Design rules:
    - Discovery (`metadata`, `placeholders`) is synchronous and network-free.
    - `apply` is called once per resolved placeholder, right after resolution.
    """

    def metadata(self) -> PageMetadata:
        """Return the (api key, entity type, entity id) triple declared by the page."""

        ...

    def placeholders(self) -> list[Placeholder]:
        """Return every placeholder found in the page, with its bound elements."""

        ...

    def apply(self, placeholder: Placeholder) -> None:
        """Write the placeholder's fragment to its elements and mark them done."""

        ...
