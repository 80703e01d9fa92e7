"""Placeholders and the field-request views the resolver walks.

A `Placeholder` is the binding between a name in the page and the elements that
display it; it carries its own resolution state. A `RequestSet` maps lookup keys
to placeholders. Views are copy-on-write: descending into `prefix@rest` builds a
new view where the key is renamed, while resolution state stays shared through
the placeholder objects, so every view sees a field disappear once resolved.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping


class ResolutionState(str, Enum):
    PENDING = "pending"
    RESOLVED = "resolved"


@dataclass(eq=False)
class Placeholder:
    """A named hook in the document, possibly bound to several elements."""

    name: str
    targets: list[Any] = field(default_factory=list)
    state: ResolutionState = ResolutionState.PENDING
    resolved_key: str | None = None
    fragment: str | None = None

    @property
    def pending(self) -> bool:
        return self.state is ResolutionState.PENDING

    def resolve(self, key: str, fragment: str | None) -> None:
        self.state = ResolutionState.RESOLVED
        self.resolved_key = key
        self.fragment = fragment


class RequestSet:
    """Ordered, copy-on-write mapping of lookup key -> placeholder."""

    def __init__(self, entries: Mapping[str, Placeholder] | None = None) -> None:
        self._entries: dict[str, Placeholder] = dict(entries or {})

    @classmethod
    def from_placeholders(cls, placeholders: Iterable[Placeholder]) -> "RequestSet":
        return cls({p.name: p for p in placeholders})

    def pending_keys(self) -> list[str]:
        """Snapshot of the keys still waiting for a value, in insertion order."""

        return [key for key, placeholder in self._entries.items() if placeholder.pending]

    def is_pending(self, key: str) -> bool:
        placeholder = self._entries.get(key)
        return placeholder is not None and placeholder.pending

    def placeholder(self, key: str) -> Placeholder:
        return self._entries[key]

    def renamed(self, old: str, new: str) -> "RequestSet":
        """New view where `old` becomes `new` at the same position.

        An existing `new` entry is shadowed in the returned view only.
        """

        target = self._entries[old]
        entries: dict[str, Placeholder] = {}
        for key, placeholder in self._entries.items():
            if key == old:
                entries[new] = target
            elif key != new:
                entries[key] = placeholder
        return RequestSet(entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.pending_keys())

    def __len__(self) -> int:
        return len(self.pending_keys())

    def __repr__(self) -> str:
        return f"RequestSet({self.pending_keys()!r})"
