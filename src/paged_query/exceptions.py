"""
Validation errors raised on the request boundary.

Every error is field-attributed and renders to the client-facing shape::

    {
        "message": "Validation error",
        "data": [{"property": "page", "errors": ["page must be ..."]}],
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import ValidationError as PydanticValidationError


class PagedQueryError(Exception):
    """Root exception for the paged-query package."""


class QueryValidationError(PagedQueryError):
    """Raised when pagination, sort or filter input is invalid.

    Carries structured errors: ``{property: [messages]}``.
    """

    code: ClassVar[str] = "validation_error"
    status_code: ClassVar[int] = 422

    def __init__(self, errors: dict[str, list[str]] | None = None) -> None:
        self.errors: dict[str, list[str]] = errors or {}
        super().__init__(str(self.errors))

    @classmethod
    def for_property(cls, prop: str, message: str) -> QueryValidationError:
        return cls({prop: [message]})

    @property
    def message(self) -> str:
        """First error message, handy for pydantic custom errors."""
        for messages in self.errors.values():
            if messages:
                return messages[0]
        return "Validation error"

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": "Validation error",
            "data": [
                {"property": prop, "errors": list(messages)}
                for prop, messages in self.errors.items()
            ],
        }

    @classmethod
    def from_pydantic(
        cls,
        exc: PydanticValidationError,
        *,
        names: Mapping[str, str] | None = None,
    ) -> QueryValidationError:
        """Convert a pydantic ``ValidationError`` into a field-attributed error.

        *names* maps model field names to the public parameter names the
        errors should be attributed to. The most specific subclass is chosen
        when every failure carries the same custom error type; otherwise a
        plain ``QueryValidationError``.
        """
        names = names or {}
        errors: dict[str, list[str]] = {}
        codes: set[str] = set()
        for error in exc.errors():
            loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
            loc = names.get(loc, loc)
            errors.setdefault(loc, []).append(error.get("msg", "validation error"))
            codes.add(error.get("type", ""))
        error_cls: type[QueryValidationError] = cls
        if len(codes) == 1:
            error_cls = _BY_CODE.get(codes.pop(), cls)
        return error_cls(errors=errors)


class GrammarViolationError(QueryValidationError):
    """``sort`` or ``where`` does not match its grammar."""

    code = "grammar_violation"


class UnknownRuleError(QueryValidationError):
    """A filter rule token is not one of the supported rules."""

    code = "unknown_rule"

    def __init__(
        self,
        rule: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        self.rule = rule
        if errors is None:
            errors = {"where": [f"where property {rule} is not allowed"]}
        super().__init__(errors)


class MalformedValueError(QueryValidationError):
    """A filter value cannot be interpreted for its rule."""

    code = "malformed_value"


class PageOutOfRangeError(QueryValidationError):
    """The requested page lies beyond the result set."""

    code = "page_out_of_range"

    def __init__(
        self,
        page_count: int | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        self.page_count = page_count
        if errors is None:
            errors = {"page": [f"page must be less than or equal to {page_count}"]}
        super().__init__(errors)


_BY_CODE: dict[str, type[QueryValidationError]] = {
    error_cls.code: error_cls
    for error_cls in (
        GrammarViolationError,
        UnknownRuleError,
        MalformedValueError,
        PageOutOfRangeError,
    )
}
