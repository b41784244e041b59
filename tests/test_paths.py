"""Tests for dotted property paths and folded mappings."""

from __future__ import annotations

import pytest

from paged_query.paths import (
    deep_merge,
    fold,
    format_path,
    is_nested,
    parent_path,
    parse_path,
)

# -- parsing -----------------------------------------------------------------


def test_parse_path_splits_on_dots():
    assert parse_path("nested.createdAt") == ("nested", "createdAt")
    assert parse_path("id") == ("id",)


@pytest.mark.parametrize("raw", ["", "a..b", ".a", "a."])
def test_parse_path_rejects_empty_segments(raw):
    with pytest.raises(ValueError, match="Invalid property path"):
        parse_path(raw)


def test_format_path_is_inverse_of_parse():
    assert format_path(parse_path("a.b.c")) == "a.b.c"


def test_parent_path():
    assert parent_path(("id",)) is None
    assert parent_path(("a", "b", "c")) == ("a", "b")
    assert is_nested(("a", "b"))
    assert not is_nested(("a",))


# -- folding -----------------------------------------------------------------


def test_fold_builds_nested_mapping():
    assert fold(("a",), 1) == {"a": 1}
    assert fold(("a", "b", "c"), "v") == {"a": {"b": {"c": "v"}}}


def test_fold_rejects_empty_path():
    with pytest.raises(ValueError):
        fold((), 1)


# -- deep_merge --------------------------------------------------------------


def test_deep_merge_combines_siblings():
    merged = deep_merge({"a": {"b": 1}}, {"a": {"c": 2}})
    assert merged == {"a": {"b": 1, "c": 2}}


def test_deep_merge_leaf_collision_last_write_wins():
    assert deep_merge({"a": {"b": 1}}, {"a": {"b": 2}}) == {"a": {"b": 2}}


def test_deep_merge_mapping_replaces_true_flag():
    assert deep_merge({"a": True}, {"a": {"b": True}}) == {"a": {"b": True}}
    assert deep_merge({"a": {"b": True}}, {"a": True}) == {"a": {"b": True}}


def test_deep_merge_does_not_mutate_inputs():
    base = {"a": {"b": 1}}
    other = {"a": {"c": 2}}
    deep_merge(base, other)
    assert base == {"a": {"b": 1}}
    assert other == {"a": {"c": 2}}
