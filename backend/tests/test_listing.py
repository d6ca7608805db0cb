"""
List Normalizer Unit Tests
===========================

What we test:
    ✅ Key aliases (title → name, details → description)
    ✅ Nameless items dropped with order preserved
    ✅ JSON text input and non-list input
    ✅ Already canonical lists are stable
"""

import logging

from portal.transforms import normalize_list_item, normalize_list_items


class TestNormalizeListItem:

    def test_title_and_details_aliases(self):
        item = normalize_list_item({"title": "Oven", "details": "600°C"})
        assert item == {
            "name": "Oven",
            "description": "600°C",
            "image": None,
            "specifications": None,
        }

    def test_details_preferred_over_description(self):
        item = normalize_list_item({"name": "A", "details": "d", "description": "x"})
        assert item["description"] == "d"

    def test_specifications_json_text_is_decoded(self):
        item = normalize_list_item({"name": "A", "specifications": '{"zoom": "10x"}'})
        assert item["specifications"] == {"zoom": "10x"}

    def test_malformed_specifications_become_none(self):
        item = normalize_list_item({"name": "A", "specifications": "{oops"})
        assert item["specifications"] is None

    def test_nameless_and_non_mapping_items_are_dropped(self):
        assert normalize_list_item({"description": "no name"}) is None
        assert normalize_list_item({"name": ""}) is None
        assert normalize_list_item("Oven") is None


class TestNormalizeListItems:

    def test_drops_middle_item_and_keeps_order(self):
        raw = [
            {"title": "A", "details": "x"},
            {"description": "no name"},
            {"name": "B", "specifications": '{"k":1}'},
        ]
        assert normalize_list_items(raw) == [
            {"name": "A", "description": "x", "image": None, "specifications": None},
            {"name": "B", "description": None, "image": None, "specifications": {"k": 1}},
        ]

    def test_json_text_input(self):
        raw = '[{"name": "Furnace", "image": "/f.png"}]'
        assert normalize_list_items(raw) == [
            {"name": "Furnace", "description": None, "image": "/f.png", "specifications": None}
        ]

    def test_non_list_input_yields_empty_list(self):
        assert normalize_list_items(None) == []
        assert normalize_list_items('{"name": "A"}') == []
        assert normalize_list_items("not json") == []

    def test_canonical_list_is_stable(self):
        once = normalize_list_items([{"title": "A", "specifications": {"k": [1, 2]}}])
        assert normalize_list_items(once) == once

    def test_dropped_items_logged_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="portal.transforms.listing"):
            normalize_list_items([{"name": "A"}, {}, {"title": None}])
        assert any("Dropped 2 list item" in r.getMessage() for r in caplog.records)
