"""Tests for relation extraction from nested sort and filter properties."""

from __future__ import annotations

from paged_query.relations import extract_relations, fold_relations


def test_extracts_parent_paths_from_sort_and_where():
    relations = extract_relations(
        "nested.createdAt:DESC",
        "author.name:eq:x;id:eq:1|author.profile.age:gt:3",
    )
    assert relations == ["nested", "author", "author.profile"]


def test_top_level_properties_contribute_nothing():
    assert extract_relations("id:asc,name:desc", "id:eq:1;name:like:x") == []
    assert extract_relations() == []


def test_relations_are_deduplicated():
    assert extract_relations("a.b:asc,a.c:desc", "a.d:eq:1") == ["a"]


def test_values_with_dots_are_ignored():
    assert extract_relations(where="version:eq:1.2.3") == []


def test_fold_relations_nests_flags():
    assert fold_relations(["author", "author.profile", "nested"]) == {
        "author": {"profile": True},
        "nested": True,
    }


def test_fold_relations_order_independent():
    assert fold_relations(["author.profile", "author"]) == fold_relations(
        ["author", "author.profile"]
    )
