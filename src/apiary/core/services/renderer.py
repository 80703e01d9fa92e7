"""Value classification and HTML fragment rendering.

Rendering happens in two steps. A value is classified once into a `ValueKind`
(list items into an `EntityKind`), then a pure function per kind produces the
fragment from a small Jinja2 template. Autoescaping is on, so API text is
always inserted as text.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, NamedTuple

from jinja2 import DictLoader, Environment, select_autoescape

from apiary.core.domain.models import EntityKind, Resolution, ValueKind
from apiary.core.domain.requests import Placeholder, RequestSet
from apiary.core.services.envelope import is_link_stub

logger = logging.getLogger(__name__)

PHOTO_RANK: dict[str, int] = {
    "tiny": 0,
    "thumbnail": 1,
    "large": 2,
}

_TEMPLATES = {
    "text.html": "{{ value }}",
    "link.html": '<a href="{{ href }}">{{ label }}</a>',
    "photo.html": '<img alt="Portrait" src="{{ src }}">',
    "list.html": (
        "<ul>{% for item in items %}<li>"
        '{% if item.href is not none %}<a href="{{ item.href }}">{{ item.label }}</a>'
        "{% else %}{{ item.label }}{% endif %}"
        "</li>{% endfor %}</ul>"
    ),
}

_env = Environment(
    loader=DictLoader(_TEMPLATES),
    autoescape=select_autoescape(["html"]),
)


class ListItem(NamedTuple):
    label: str
    href: str | None = None


def _text(value: Any) -> str:
    # Integral floats print like the API's JavaScript clients do: 3.0 -> "3".
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def classify_value(value: Any) -> ValueKind:
    if isinstance(value, bool):
        return ValueKind.UNKNOWN
    if isinstance(value, (str, int, float)):
        return ValueKind.SCALAR
    if isinstance(value, list):
        return ValueKind.LIST
    if isinstance(value, Mapping):
        if is_link_stub(value):
            return ValueKind.LINK_STUB
        if "href" in value:
            return ValueKind.LINK
    return ValueKind.UNKNOWN


def classify_entity(item: Any) -> EntityKind:
    """Pick the first matching shape; the order of the checks is the priority."""

    if not isinstance(item, Mapping):
        return EntityKind.UNKNOWN
    links = item.get("_links")
    homepage = links.get("homepage") if isinstance(links, Mapping) else None
    if isinstance(homepage, Mapping) and "href" in homepage and "name" in item:
        return EntityKind.GROUP
    if item.get("discr") == "user" and "id" in item and "name" in item:
        return EntityKind.USER
    if "shortlink" in item and "title" in item:
        return EntityKind.SPEC
    if "name" in item:
        return EntityKind.NAMED
    if "title" in item:
        return EntityKind.TITLED
    return EntityKind.UNKNOWN


def largest_photo(candidates: list[Any]) -> Mapping[str, Any] | None:
    """Return the entry with the highest-ranked size name, first one on ties."""

    largest: Mapping[str, Any] | None = None
    for candidate in candidates:
        if not isinstance(candidate, Mapping):
            continue
        href, name = candidate.get("href"), candidate.get("name")
        if not href or not isinstance(name, str) or name not in PHOTO_RANK:
            continue
        if largest is None or PHOTO_RANK[name] > PHOTO_RANK[largest["name"]]:
            largest = candidate
    return largest


def render_scalar(value: Any) -> str:
    return _env.get_template("text.html").render(value=_text(value))


def render_link(value: Mapping[str, Any]) -> str | None:
    # A link without a name has no label to show; left unrendered on purpose.
    if "name" not in value:
        return None
    return _env.get_template("link.html").render(href=_text(value["href"]), label=_text(value["name"]))


def render_photo(candidates: list[Any]) -> str | None:
    photo = largest_photo(candidates)
    if photo is None:
        return None
    return _env.get_template("photo.html").render(src=_text(photo["href"]))


def list_item(item: Any, *, user_profile_url: str) -> ListItem | None:
    kind = classify_entity(item)
    if kind is EntityKind.GROUP:
        return ListItem(label=_text(item["name"]), href=_text(item["_links"]["homepage"]["href"]))
    if kind is EntityKind.USER:
        return ListItem(label=_text(item["name"]), href=f"{user_profile_url}{_text(item['id'])}")
    if kind is EntityKind.SPEC:
        return ListItem(label=_text(item["title"]), href=_text(item["shortlink"]))
    if kind is EntityKind.NAMED:
        return ListItem(label=_text(item["name"]))
    if kind is EntityKind.TITLED:
        return ListItem(label=_text(item["title"]))
    return None


def render_list(items: list[Any], *, user_profile_url: str) -> str:
    photo = render_photo(items)
    if photo is not None:
        return photo
    rendered = [list_item(item, user_profile_url=user_profile_url) for item in items]
    return _env.get_template("list.html").render(items=[item for item in rendered if item is not None])


def render_value(value: Any, *, user_profile_url: str, kind: ValueKind | None = None) -> str | None:
    """Render `value` as an HTML fragment, or None when its shape has no rendering."""

    kind = kind or classify_value(value)
    if kind is ValueKind.SCALAR:
        return render_scalar(value)
    if kind is ValueKind.LIST:
        return render_list(value, user_profile_url=user_profile_url)
    if kind in (ValueKind.LINK, ValueKind.LINK_STUB):
        return render_link(value)
    return None


class Renderer:
    """Turns inline values into fragments and resolves their placeholders."""

    def __init__(
        self,
        *,
        user_profile_url: str,
        on_resolved: Callable[[Placeholder, Resolution], None] | None = None,
    ) -> None:
        self._user_profile_url = user_profile_url
        self._on_resolved = on_resolved

    def inject(self, requests: RequestSet, key: str, value: Any) -> Resolution:
        placeholder = requests.placeholder(key)
        kind = classify_value(value)
        fragment = render_value(value, user_profile_url=self._user_profile_url, kind=kind)
        if fragment is None:
            logger.debug("Placeholder %r resolved to a %s value with no rendering", placeholder.name, kind.value)

        placeholder.resolve(key, fragment)
        resolution = Resolution(placeholder=placeholder.name, key=key, kind=kind, fragment=fragment)
        if self._on_resolved:
            self._on_resolved(placeholder, resolution)
        return resolution
