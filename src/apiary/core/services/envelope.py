"""Hypermedia envelope normalization.

The API wraps related data in `_links` and `_embedded` containers. Crawling is
simpler on a single level, so their children are hoisted to the top of the
resource (overwriting same-named keys) and the containers are dropped. Nested
objects keep their own envelopes; list items still expose `_links.homepage`.
"""

from __future__ import annotations

from typing import Any

ENVELOPE_KEYS: tuple[str, ...] = ("_links", "_embedded")


def flatten(payload: Any) -> Any:
    """Return a flattened copy of `payload`; anything but a dict is returned as is."""

    if not isinstance(payload, dict):
        return payload

    resource = dict(payload)
    for container in ENVELOPE_KEYS:
        if container not in resource:
            continue
        children = resource.pop(container)
        if isinstance(children, dict):
            resource.update(children)
    return resource


def is_link_stub(value: Any) -> bool:
    """True for `{"href": ...}` and nothing else: a value that must be fetched."""

    return isinstance(value, dict) and len(value) == 1 and "href" in value
