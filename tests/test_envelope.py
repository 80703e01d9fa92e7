"""
Unit tests for apiary.core.services.envelope.

Tests cover:
  • Hoisting of _links / _embedded children
  • Idempotence and non-dict payloads
  • Link stub recognition
"""

from __future__ import annotations

from apiary.core.services.envelope import ENVELOPE_KEYS, flatten, is_link_stub


class TestFlatten:
    def test_hoists_links_and_embedded(self):
        payload = {
            "name": "Acme",
            "_links": {"self": {"href": "S"}, "lead": {"href": "L"}},
            "_embedded": {"groups": [{"name": "G1"}]},
        }
        resource = flatten(payload)
        assert resource == {
            "name": "Acme",
            "self": {"href": "S"},
            "lead": {"href": "L"},
            "groups": [{"name": "G1"}],
        }
        assert not any(key in resource for key in ENVELOPE_KEYS)

    def test_idempotent(self):
        payload = {"id": 1, "_links": {"self": {"href": "S"}}, "_embedded": {"chairs": []}}
        assert flatten(flatten(payload)) == flatten(payload)

    def test_children_overwrite_top_level(self):
        resource = flatten({"lead": "inline", "_links": {"lead": {"href": "L"}}})
        assert resource["lead"] == {"href": "L"}

    def test_embedded_wins_over_links(self):
        resource = flatten({"_links": {"groups": {"href": "U"}}, "_embedded": {"groups": [{"name": "G"}]}})
        assert resource["groups"] == [{"name": "G"}]

    def test_nested_envelopes_untouched(self):
        item = {"name": "G1", "_links": {"homepage": {"href": "H1"}}}
        resource = flatten({"_embedded": {"groups": [item]}})
        assert resource["groups"][0]["_links"] == {"homepage": {"href": "H1"}}

    def test_does_not_mutate_input(self):
        payload = {"_links": {"self": {"href": "S"}}}
        flatten(payload)
        assert "_links" in payload

    def test_non_dict_payload_returned_as_is(self):
        assert flatten([1, 2]) == [1, 2]
        assert flatten("text") == "text"
        assert flatten(None) is None


class TestIsLinkStub:
    def test_href_only(self):
        assert is_link_stub({"href": "U"})

    def test_href_with_name_is_inline(self):
        assert not is_link_stub({"href": "U", "name": "N"})

    def test_other_shapes(self):
        assert not is_link_stub({"name": "N"})
        assert not is_link_stub([{"href": "U"}])
        assert not is_link_stub("U")
        assert not is_link_stub({})
