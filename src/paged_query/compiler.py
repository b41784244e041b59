"""
Compile one ``property:rule[:value]`` clause into a folded operator mapping.

Each :class:`FilterRule` has exactly one entry in :data:`RULE_COMPILERS`,
a read-only table built at import time. The compiled clause is a nested
mapping keyed by the property path, e.g. ``nested.createdAt:gte:2024-01-01``
becomes ``{"nested": {"createdAt": FindOperator(MORE_THAN_OR_EQUAL, ...)}}``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from . import operators as ops
from .exceptions import MalformedValueError, UnknownRuleError
from .paths import PropertyPath, fold, format_path, parse_path
from .rules import NO_VALUE_RULES, FilterRule

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from .operators import FindOperator

logger = logging.getLogger("paged_query.compiler")


@dataclass(frozen=True)
class FilterClause:
    """One parsed ``property:rule:value`` unit, before compilation."""

    path: PropertyPath
    rule: FilterRule
    raw_value: str = ""

    @property
    def property_name(self) -> str:
        return format_path(self.path)


def _split_list(value: str) -> list[str]:
    # Empty entries are kept: "a,,b" is three values.
    return value.split(",")


def _split_range(value: str) -> tuple[str, str]:
    parts = value.split(",")
    if len(parts) != 2:
        raise MalformedValueError.for_property(
            "where",
            f"where range value {value!r} must contain exactly two "
            "comma-separated values",
        )
    return parts[0], parts[1]


def _parse_json(value: str) -> Any:
    try:
        return json.loads(value)
    except json.JSONDecodeError as err:
        raise MalformedValueError.for_property(
            "where", f"where value {value!r} is not valid JSON: {err.msg}"
        ) from err


def _contains(value: str) -> str:
    return f"%{value}%"


RULE_COMPILERS: Mapping[FilterRule, Callable[[str], FindOperator]] = MappingProxyType(
    {
        FilterRule.EQUALS: lambda v: ops.equal(v),
        FilterRule.NOT_EQUALS: lambda v: ops.equal(v).negate(),
        FilterRule.GREATER_THAN: lambda v: ops.more_than(v),
        FilterRule.GREATER_THAN_OR_EQUALS: lambda v: ops.more_than_or_equal(v),
        FilterRule.LESS_THAN: lambda v: ops.less_than(v),
        FilterRule.LESS_THAN_OR_EQUALS: lambda v: ops.less_than_or_equal(v),
        FilterRule.LIKE: lambda v: ops.like(_contains(v)),
        FilterRule.NOT_LIKE: lambda v: ops.like(_contains(v)).negate(),
        FilterRule.ILIKE: lambda v: ops.ilike(_contains(v)),
        FilterRule.NOT_ILIKE: lambda v: ops.ilike(_contains(v)).negate(),
        FilterRule.IN: lambda v: ops.in_(_split_list(v)),
        FilterRule.NOT_IN: lambda v: ops.in_(_split_list(v)).negate(),
        FilterRule.IS_NULL: lambda _v: ops.is_null(),
        FilterRule.IS_NOT_NULL: lambda _v: ops.is_null().negate(),
        FilterRule.BETWEEN: lambda v: ops.between(*_split_range(v)),
        FilterRule.NOT_BETWEEN: lambda v: ops.between(*_split_range(v)).negate(),
        FilterRule.ARRAY_CONTAINS: lambda v: ops.array_contains(_split_list(v)),
        FilterRule.ARRAY_NOT_CONTAINS: (
            lambda v: ops.array_contains(_split_list(v)).negate()
        ),
        FilterRule.JSON_CONTAINS: lambda v: ops.json_contains(_parse_json(v)),
    }
)


def parse_clause(raw: str) -> FilterClause:
    """
    Parse ``property:rule[:value]``.

    Only the first two ``:`` separate parts; the value keeps any further
    colons verbatim.
    """
    prop, rule_token, value = (raw.split(":", 2) + ["", ""])[:3]
    rule = FilterRule.from_token(rule_token)
    if rule is None:
        raise UnknownRuleError(rule_token)
    try:
        path = parse_path(prop)
    except ValueError as err:
        raise MalformedValueError.for_property(
            "where", f"where property {prop!r} is not a valid property path"
        ) from err
    if rule in NO_VALUE_RULES:
        value = ""
    return FilterClause(path=path, rule=rule, raw_value=value)


def build_operator(clause: FilterClause) -> FindOperator:
    return RULE_COMPILERS[clause.rule](clause.raw_value)


def compile_clause(raw: str) -> dict[str, Any]:
    """Parse and compile *raw* into ``{path...: FindOperator}``."""
    clause = parse_clause(raw)
    operator = build_operator(clause)
    logger.debug(
        "Compiled filter clause %r -> %s %s",
        raw,
        clause.property_name,
        operator.to_dict(),
    )
    return fold(clause.path, operator)
