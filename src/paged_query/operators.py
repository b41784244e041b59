"""
Structured comparison operators.

A compiled filter is a nested mapping whose leaves are :class:`FindOperator`
instances. Negated rules are not separate primitives: they wrap the positive
operator in ``OperatorType.NOT`` so both forms stay symmetric.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OperatorType(str, Enum):
    """Operator kinds understood by data-access adapters."""

    EQUAL = "equal"
    MORE_THAN = "moreThan"
    MORE_THAN_OR_EQUAL = "moreThanOrEqual"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    LIKE = "like"
    ILIKE = "ilike"
    IN = "in"
    IS_NULL = "isNull"
    BETWEEN = "between"
    ARRAY_CONTAINS = "arrayContains"
    JSON_CONTAINS = "jsonContains"
    NOT = "not"


@dataclass(frozen=True)
class FindOperator:
    """A single comparison: operator kind plus its operand.

    For ``NOT`` the operand is the wrapped :class:`FindOperator`.
    """

    type: OperatorType
    value: Any = None

    def __post_init__(self) -> None:
        if self.type is OperatorType.NOT and not isinstance(self.value, FindOperator):
            raise TypeError("NOT must wrap another FindOperator")

    def negate(self) -> FindOperator:
        return FindOperator(OperatorType.NOT, self)

    @property
    def is_negated(self) -> bool:
        return self.type is OperatorType.NOT

    def to_dict(self) -> dict[str, Any]:
        value = self.value
        if isinstance(value, FindOperator):
            value = value.to_dict()
        elif isinstance(value, tuple):
            value = list(value)
        return {"type": self.type.value, "value": value}


def equal(value: Any) -> FindOperator:
    return FindOperator(OperatorType.EQUAL, value)


def more_than(value: Any) -> FindOperator:
    return FindOperator(OperatorType.MORE_THAN, value)


def more_than_or_equal(value: Any) -> FindOperator:
    return FindOperator(OperatorType.MORE_THAN_OR_EQUAL, value)


def less_than(value: Any) -> FindOperator:
    return FindOperator(OperatorType.LESS_THAN, value)


def less_than_or_equal(value: Any) -> FindOperator:
    return FindOperator(OperatorType.LESS_THAN_OR_EQUAL, value)


def like(pattern: str) -> FindOperator:
    return FindOperator(OperatorType.LIKE, pattern)


def ilike(pattern: str) -> FindOperator:
    return FindOperator(OperatorType.ILIKE, pattern)


def in_(values: list[Any]) -> FindOperator:
    return FindOperator(OperatorType.IN, list(values))


def is_null() -> FindOperator:
    return FindOperator(OperatorType.IS_NULL)


def between(low: Any, high: Any) -> FindOperator:
    return FindOperator(OperatorType.BETWEEN, (low, high))


def array_contains(values: list[Any]) -> FindOperator:
    return FindOperator(OperatorType.ARRAY_CONTAINS, list(values))


def json_contains(document: Any) -> FindOperator:
    return FindOperator(OperatorType.JSON_CONTAINS, document)


def not_(operator: FindOperator) -> FindOperator:
    return operator.negate()
