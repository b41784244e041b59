"""Tests for filter rule tokens and sort directions."""

from __future__ import annotations

import pytest

from paged_query.rules import (
    LIST_VALUED_RULES,
    NO_VALUE_RULES,
    RANGE_VALUED_RULES,
    FilterRule,
    SortOrder,
)

# -- FilterRule --------------------------------------------------------------


def test_every_rule_resolves_from_its_token():
    for rule in FilterRule:
        assert FilterRule.from_token(rule.token) is rule


def test_nineteen_rule_tokens():
    assert len(FilterRule) == 19
    assert {rule.token for rule in FilterRule} >= {
        "eq",
        "notEq",
        "iLike",
        "notILike",
        "arrayNotContains",
        "jsonContains",
    }


@pytest.mark.parametrize("token", ["bogus", "EQ", "ilike", "", None])
def test_unknown_token_is_none(token):
    assert FilterRule.from_token(token) is None


def test_rule_groupings_are_disjoint():
    assert not NO_VALUE_RULES & LIST_VALUED_RULES
    assert not NO_VALUE_RULES & RANGE_VALUED_RULES
    assert not LIST_VALUED_RULES & RANGE_VALUED_RULES


# -- SortOrder ---------------------------------------------------------------


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("asc", SortOrder.ASC),
        ("ASC", SortOrder.ASC),
        ("Desc", SortOrder.DESC),
        ("desc", SortOrder.DESC),
    ],
)
def test_sort_order_parse_is_case_insensitive(text, expected):
    assert SortOrder.parse(text) is expected


def test_sort_order_emits_upper_case():
    assert SortOrder.parse("desc").value == "DESC"
    assert SortOrder.DESC == "DESC"


def test_sort_order_rejects_unknown_direction():
    with pytest.raises(ValueError, match="Unknown sort direction"):
        SortOrder.parse("up")
