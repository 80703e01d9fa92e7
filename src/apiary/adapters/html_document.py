"""HTML pages as Apiary documents (BeautifulSoup).

Page conventions:
- `<html data-api-key="...">` declares the credential (only if it is unique).
- The first element with `data-domain-id`, `data-group-id` or `data-user-id`
  (checked in that order) tells which entity the page is about.
- Any element with a class `apiary-<field>` is a placeholder for `<field>`;
  `<field>` may be `prefix@rest` to reach inside a nested object.
- Resolved elements get their content replaced and the `apiary-done` class.
"""

from __future__ import annotations

import re
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from apiary.core.domain.entity_type import EntityType
from apiary.core.domain.models import PageMetadata
from apiary.core.domain.requests import Placeholder

PLACEHOLDER_CLASS_RE = re.compile(r"^apiary-([\w\-@]+)$")
DONE_CLASS = "apiary-done"


class HtmlDocument:
    """A parsed HTML page implementing `core.interfaces.document.Document`."""

    def __init__(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "html.parser")
        self._placeholders: list[Placeholder] | None = None

    @classmethod
    def from_path(cls, path: Path) -> "HtmlDocument":
        return cls(path.read_text(encoding="utf-8"))

    def metadata(self) -> PageMetadata:
        api_key = None
        keyed = self._soup.find_all("html", attrs={"data-api-key": True})
        if len(keyed) == 1:
            api_key = str(keyed[0]["data-api-key"]).strip() or None

        for entity_type in EntityType:
            element = self._soup.find(attrs={entity_type.attribute: True})
            if element is not None:
                entity_id = str(element[entity_type.attribute]).strip() or None
                return PageMetadata(api_key=api_key, entity_type=entity_type, entity_id=entity_id)
        return PageMetadata(api_key=api_key)

    def placeholders(self) -> list[Placeholder]:
        """Placeholders in document order; discovered once, then reused."""

        if self._placeholders is not None:
            return self._placeholders

        by_name: dict[str, Placeholder] = {}
        for element in self._soup.find_all(class_=True):
            for css_class in element.get("class", []):
                if css_class == DONE_CLASS:
                    continue
                match = PLACEHOLDER_CLASS_RE.match(css_class)
                if match:
                    name = match.group(1)
                    by_name.setdefault(name, Placeholder(name=name)).targets.append(element)
        self._placeholders = list(by_name.values())
        return self._placeholders

    def apply(self, placeholder: Placeholder) -> None:
        for element in placeholder.targets:
            if not isinstance(element, Tag):
                continue
            if placeholder.fragment is not None:
                element.clear()
                fragment = BeautifulSoup(placeholder.fragment, "html.parser")
                for node in list(fragment.contents):
                    element.append(node.extract())
            classes = element.get("class", [])
            if DONE_CLASS not in classes:
                element["class"] = [*classes, DONE_CLASS]

    def render(self) -> str:
        return str(self._soup)
