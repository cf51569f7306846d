"""
Unit tests for TagIndex.
"""
import logging

import pytest

from multitag.services.tag_index import TagIndex


class ValueEqual:
    """Host object whose instances all compare equal."""

    def __eq__(self, other):
        return isinstance(other, ValueEqual)

    __hash__ = None


def assert_consistent(index, objects, tags):
    """has_tag and objects_with_tag must agree for every pair."""
    for obj in objects:
        for tag in tags:
            in_reverse = any(o is obj for o in index.objects_with_tag(tag))
            assert index.has_tag(obj, tag) == in_reverse, (obj, tag)


class TestRegistration:
    """Register / unregister behavior."""

    def test_register_creates_entry(self, index):
        obj = object()
        index.register_tags(obj, ["enemy", "boss"])

        assert index.tags_of(obj) == ["enemy", "boss"]
        assert index.objects_with_tag("enemy") == [obj]
        assert obj in index

    def test_register_is_idempotent(self, index):
        obj = object()
        index.register_tags(obj, ["enemy"])
        index.register_tags(obj, ["enemy"])
        index.register_tag(obj, "enemy")

        assert index.tags_of(obj) == ["enemy"]
        assert index.objects_with_tag("enemy") == [obj]

    def test_register_appends_new_tags(self, index):
        obj = object()
        index.register_tags(obj, ["enemy"])
        index.register_tags(obj, ["enemy", "boss"])

        assert index.tags_of(obj) == ["enemy", "boss"]
        assert index.objects_with_tag("boss") == [obj]

    def test_register_empty_is_noop(self, index):
        obj = object()
        index.register_tags(obj, [])

        assert obj not in index
        assert len(index) == 0

    def test_register_duplicates_cleaned_with_warning(self, index, caplog):
        obj = object()
        with caplog.at_level(logging.WARNING):
            index.register_tags(obj, ["a", "b", "a"])

        assert index.tags_of(obj) == ["a", "b"]
        assert index.objects_with_tag("a") == [obj]
        assert "duplicates" in caplog.text

    def test_register_empty_tag_dropped_with_warning(self, index, caplog):
        obj = object()
        with caplog.at_level(logging.WARNING):
            index.register_tags(obj, ["", "enemy"])

        assert index.tags_of(obj) == ["enemy"]
        assert index.objects_with_tag("") == []
        assert "" not in index.known_tags()
        assert "empty" in caplog.text

    def test_register_only_empty_tag_creates_nothing(self, index):
        obj = object()
        index.register_tag(obj, "")

        assert obj not in index
        assert index.known_tags() == []

    def test_unregister_removes_tags(self, index):
        obj = object()
        index.register_tags(obj, ["enemy", "boss"])
        index.unregister_tags(obj, ["boss"])

        assert index.tags_of(obj) == ["enemy"]
        assert index.objects_with_tag("boss") == []

    def test_unregister_last_tag_drops_object(self, index):
        obj = object()
        index.register_tags(obj, ["enemy"])
        index.unregister_tag(obj, "enemy")

        assert obj not in index
        assert index.known_objects() == []
        assert index.tags_of(obj) == []
        # Empty Object Set stays in place
        assert "enemy" in index.known_tags()
        assert index.objects_with_tag("enemy") == []

    def test_unregister_absent_tag_is_noop(self, index):
        obj = object()
        index.register_tags(obj, ["enemy"])
        index.unregister_tags(obj, ["ghost"])

        assert index.tags_of(obj) == ["enemy"]

    def test_unregister_untagged_object_warns(self, index, caplog):
        with caplog.at_level(logging.WARNING):
            index.unregister_tags(object(), ["enemy"])

        assert "didn't have any" in caplog.text

    def test_unregister_all(self, index):
        obj = object()
        other = object()
        index.register_tags(obj, ["enemy", "boss"])
        index.register_tags(other, ["enemy"])

        index.unregister_all(obj)

        assert index.tags_of(obj) == []
        assert index.objects_with_tag("enemy") == [other]
        assert index.objects_with_tag("boss") == []

    def test_unregister_all_unknown_is_silent(self, index, caplog):
        with caplog.at_level(logging.WARNING):
            index.unregister_all(object())

        assert caplog.text == ""

    def test_clear(self, index):
        obj = object()
        index.register_tags(obj, ["enemy"])
        index.clear()

        assert len(index) == 0
        assert index.known_tags() == []
        assert index.objects_with_tag("enemy") == []


class TestQueries:
    """Membership and lookup queries."""

    @pytest.fixture
    def populated(self, index):
        o1, o2 = object(), object()
        index.register_tags(o1, ["enemy", "boss"])
        index.register_tags(o2, ["enemy"])
        return index, o1, o2

    def test_enemy_boss_scenario(self, populated):
        index, o1, o2 = populated

        assert index.objects_with_tag("enemy") == [o1, o2]
        assert index.objects_with_tag("boss") == [o1]
        assert index.has_all_tags(o1, {"enemy", "boss"})
        assert not index.has_all_tags(o2, {"enemy", "boss"})
        assert not index.has_any_tag(o2, {"boss", "rare"})

    def test_unregister_all_scenario(self, populated):
        index, o1, o2 = populated
        index.unregister_all(o1)

        assert index.objects_with_tag("enemy") == [o2]
        assert index.objects_with_tag("boss") == []

    def test_has_tag_unknown_object(self, index):
        assert not index.has_tag(object(), "enemy")

    def test_has_any_tag(self, populated):
        index, o1, _ = populated

        assert index.has_any_tag(o1, ["rare", "boss"])
        assert not index.has_any_tag(o1, [])
        assert not index.has_any_tag(object(), ["enemy"])

    def test_has_all_tags_empty_is_vacuously_true(self, populated):
        index, o1, _ = populated

        assert index.has_all_tags(o1, [])
        assert index.has_all_tags(object(), [])

    def test_has_all_tags_unknown_object(self, index):
        assert not index.has_all_tags(object(), ["enemy"])

    def test_has_all_tags_repeated_candidates(self, populated):
        index, o1, _ = populated
        assert index.has_all_tags(o1, ["enemy", "enemy"])

    def test_unknown_tag_returns_empty(self, index):
        assert index.objects_with_tag("nothing") == []

    def test_returned_lists_are_copies(self, populated):
        index, o1, _ = populated

        index.tags_of(o1).append("hacked")
        index.objects_with_tag("boss").clear()

        assert index.tags_of(o1) == ["enemy", "boss"]
        assert index.objects_with_tag("boss") == [o1]


class TestIdentityKeys:
    """Objects are keyed by identity, not equality."""

    def test_value_equal_objects_are_distinct(self, index):
        a, b = ValueEqual(), ValueEqual()
        index.register_tags(a, ["x"])

        assert index.has_tag(a, "x")
        assert not index.has_tag(b, "x")
        assert len(index.objects_with_tag("x")) == 1
        assert index.objects_with_tag("x")[0] is a


class TestConsistency:
    """Bidirectional consistency across mixed operations."""

    def test_consistency_after_mixed_operations(self):
        index = TagIndex()
        objects = [object() for _ in range(4)]
        tags = ["a", "b", "c"]

        index.register_tags(objects[0], ["a", "b"])
        index.register_tags(objects[1], ["b", "c"])
        index.register_tags(objects[2], ["a"])
        assert_consistent(index, objects, tags)

        index.unregister_tags(objects[1], ["b"])
        index.register_tags(objects[0], ["c"])
        assert_consistent(index, objects, tags)

        index.unregister_all(objects[0])
        index.unregister_tags(objects[3], ["a"])
        index.register_tags(objects[2], ["a", "b"])
        assert_consistent(index, objects, tags)

        index.unregister_tags(objects[2], ["a", "b"])
        assert_consistent(index, objects, tags)
        assert objects[2] not in index
