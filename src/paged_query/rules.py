"""Filter rule tokens and sort directions accepted in query strings."""

from __future__ import annotations

from enum import Enum


class FilterRule(str, Enum):
    """Supported filter rules, valued by their query-string token."""

    EQUALS = "eq"
    NOT_EQUALS = "notEq"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUALS = "gte"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUALS = "lte"
    LIKE = "like"
    NOT_LIKE = "notLike"
    IN = "in"
    NOT_IN = "notIn"
    IS_NULL = "isNull"
    IS_NOT_NULL = "isNotNull"
    ILIKE = "iLike"
    NOT_ILIKE = "notILike"
    BETWEEN = "between"
    NOT_BETWEEN = "notBetween"
    ARRAY_CONTAINS = "arrayContains"
    ARRAY_NOT_CONTAINS = "arrayNotContains"
    JSON_CONTAINS = "jsonContains"

    @property
    def token(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str | None) -> FilterRule | None:
        """Return the rule for *token*, or ``None`` if it is not a known rule."""
        return _BY_TOKEN.get(token or "")


_BY_TOKEN: dict[str, FilterRule] = {rule.value: rule for rule in FilterRule}

NO_VALUE_RULES: frozenset[FilterRule] = frozenset(
    {FilterRule.IS_NULL, FilterRule.IS_NOT_NULL}
)
LIST_VALUED_RULES: frozenset[FilterRule] = frozenset(
    {
        FilterRule.IN,
        FilterRule.NOT_IN,
        FilterRule.ARRAY_CONTAINS,
        FilterRule.ARRAY_NOT_CONTAINS,
    }
)
RANGE_VALUED_RULES: frozenset[FilterRule] = frozenset(
    {FilterRule.BETWEEN, FilterRule.NOT_BETWEEN}
)


class SortOrder(str, Enum):
    """Sort direction. Parsed case-insensitively, emitted upper-case."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, text: str) -> SortOrder:
        try:
            return cls(text.upper())
        except ValueError as err:
            raise ValueError(f"Unknown sort direction: {text!r}") from err
