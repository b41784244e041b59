"""Tests for structured comparison operators."""

from __future__ import annotations

import pytest

from paged_query import operators as ops
from paged_query.operators import FindOperator, OperatorType


def test_negate_wraps_positive_operator():
    negated = ops.equal("1").negate()
    assert negated.type is OperatorType.NOT
    assert negated.value == ops.equal("1")
    assert negated.is_negated
    assert not ops.equal("1").is_negated


def test_not_helper_matches_negate():
    assert ops.not_(ops.in_(["a"])) == ops.in_(["a"]).negate()


def test_not_requires_an_operator():
    with pytest.raises(TypeError, match="NOT must wrap"):
        FindOperator(OperatorType.NOT, "1")


def test_to_dict_recurses_into_negation():
    assert ops.between("1", "5").negate().to_dict() == {
        "type": "not",
        "value": {"type": "between", "value": ["1", "5"]},
    }


def test_is_null_has_no_operand():
    assert ops.is_null().to_dict() == {"type": "isNull", "value": None}


def test_operators_are_immutable():
    operator = ops.equal("1")
    with pytest.raises(AttributeError):
        operator.value = "2"  # type: ignore[misc]
