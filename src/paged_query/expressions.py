"""
Sort and filter expression grammar.

Sort: ``field:dir(,field:dir)*`` with ``dir`` one of ``asc``/``desc`` in
either case, e.g. ``nested.createdAt:DESC,id:asc``.

Filter: ``field:rule:value`` clauses joined by ``;`` (AND) into groups,
groups joined by ``|`` (OR), e.g. ``id:eq:1;name:like:doe|age:gt:30``.
``isNull`` and ``isNotNull`` take no value.

Separators are applied outermost first: ``|`` then ``;`` then ``:`` for
filters, ``,`` then ``:`` for sort keys.
"""

from __future__ import annotations

import logging
import re
from functools import reduce
from typing import Any, NamedTuple

from .compiler import compile_clause
from .exceptions import GrammarViolationError, UnknownRuleError
from .paths import PropertyPath, deep_merge, fold, format_path, parse_path
from .rules import NO_VALUE_RULES, FilterRule, SortOrder

logger = logging.getLogger("paged_query.expressions")

SORT_FORMAT_MESSAGE = "each sort parameter must be in the format of field:order"
WHERE_FORMAT_MESSAGE = (
    "each filter parameter must be in the format of field:rule:value"
)

_SEGMENT = r"[a-zA-Z0-9_,.]+"
_DIRECTION = r"(?:ASC|DESC|asc|desc)"


def _alternation(rules: list[FilterRule]) -> str:
    tokens = sorted((rule.value for rule in rules), key=len, reverse=True)
    return "|".join(re.escape(token) for token in tokens)


_VALUE_RULES = _alternation([r for r in FilterRule if r not in NO_VALUE_RULES])
_NO_VALUE_RULES = _alternation([r for r in FilterRule if r in NO_VALUE_RULES])
_WHERE_UNIT = (
    rf"(?:{_SEGMENT}:(?:{_VALUE_RULES}):[^|]+"
    rf"|{_SEGMENT}:(?:{_NO_VALUE_RULES})(?:[:;][^|]*)?)"
)

SORT_PATTERN = re.compile(
    rf"^{_SEGMENT}:{_DIRECTION}(?:,{_SEGMENT}:{_DIRECTION})*$"
)
WHERE_PATTERN = re.compile(rf"^{_WHERE_UNIT}(?:\|{_WHERE_UNIT})*$")


class SortKey(NamedTuple):
    """One sort key: property path and direction."""

    path: PropertyPath
    order: SortOrder

    @property
    def property_name(self) -> str:
        return format_path(self.path)


# ---------------------------------------------------------------------------
# Boundary validation
# ---------------------------------------------------------------------------


def validate_sort(raw: str) -> str:
    """Raise :class:`GrammarViolationError` unless *raw* is a sort expression."""
    if SORT_PATTERN.fullmatch(raw) is None:
        raise GrammarViolationError.for_property("sort", SORT_FORMAT_MESSAGE)
    parse_sort(raw)
    return raw


def validate_where(raw: str) -> str:
    """
    Check *raw* against the filter grammar and compile it once.

    An unknown rule token is reported as :class:`UnknownRuleError` rather
    than a grammar violation. Compiling surfaces unknown rules and malformed
    values in every ``;``-joined clause, not just the first of each group.
    """
    if WHERE_PATTERN.fullmatch(raw) is None:
        _raise_for_unknown_rule(raw)
        raise GrammarViolationError.for_property("where", WHERE_FORMAT_MESSAGE)
    parse_where(raw)
    return raw


def _raise_for_unknown_rule(raw: str) -> None:
    for clause in _clauses(raw):
        parts = clause.split(":", 2)
        if len(parts) < 2 or not parts[1] or not re.fullmatch(_SEGMENT, parts[0]):
            continue
        if FilterRule.from_token(parts[1]) is None:
            raise UnknownRuleError(parts[1])


def _clauses(raw: str) -> list[str]:
    return [
        clause for group in raw.split("|") for clause in group.split(";") if clause
    ]


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_sort(raw: str | None) -> list[SortKey]:
    """Parse a sort expression into ordered sort keys.

    A key without a direction sorts ascending.
    """
    if not raw:
        return []
    keys: list[SortKey] = []
    for piece in raw.split(","):
        if not piece:
            continue
        prop, _, direction = piece.partition(":")
        try:
            path = parse_path(prop)
            order = SortOrder.parse(direction) if direction else SortOrder.ASC
        except ValueError as err:
            raise GrammarViolationError.for_property(
                "sort", SORT_FORMAT_MESSAGE
            ) from err
        keys.append(SortKey(path, order))
    return keys


def fold_sort(keys: list[SortKey]) -> dict[str, Any]:
    """
    Fold sort keys into one nested ordering mapping.

    Keys under the same relation are grouped together, so priority across
    relations is only kept by the key list itself.
    """
    return reduce(
        lambda acc, key: deep_merge(acc, fold(key.path, key.order)),
        keys,
        {},
    )


def parse_where(raw: str | None) -> list[dict[str, Any]]:
    """
    Parse a (percent-decoded) filter expression into OR-combined groups.

    Clauses inside a group are merged into one nested mapping; on a key
    collision the later clause wins.
    """
    if not raw:
        return []
    groups: list[dict[str, Any]] = []
    for group in raw.split("|"):
        merged: dict[str, Any] = {}
        for clause in group.split(";"):
            if clause:
                merged = deep_merge(merged, compile_clause(clause))
        if merged:
            groups.append(merged)
    logger.debug("Parsed filter %r into %d group(s)", raw, len(groups))
    return groups
