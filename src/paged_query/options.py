"""
Pagination, sorting and filtering options read from a query string.

``PageOptions`` validates the raw request values once; everything derived
from them (``skip``, ``sorting``, ``filter``, ``relations``) is recomputed
on access from the stored strings. ``to_repository_options()`` assembles
what a data-access adapter consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError

from .config import DEFAULT_CONFIG, PaginationConfig
from .exceptions import QueryValidationError
from .expressions import (
    SortKey,
    fold_sort,
    parse_sort,
    parse_where,
    validate_sort,
    validate_where,
)
from .operators import FindOperator
from .relations import extract_relations, fold_relations

if TYPE_CHECKING:
    from collections.abc import Mapping


def _plain(value: Any) -> Any:
    if isinstance(value, FindOperator):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class RepositoryOptions:
    """
    Options handed to the data-access layer.

    Attributes:
        where: OR-combined filter groups; each group is a nested mapping of
            AND-combined :class:`FindOperator` leaves. Empty = no filter.
        order: Nested mapping of property path to :class:`SortOrder`. Keys
            sharing a relation are grouped, so it does not record priority.
        sort_keys: Sort keys in priority order; adapters order by these.
        take: Maximum number of rows.
        skip: Number of rows to skip.
        relations: Nested mapping of relation paths to eager-load.
    """

    where: list[dict[str, Any]] = field(default_factory=list)
    order: dict[str, Any] = field(default_factory=dict)
    take: int = DEFAULT_CONFIG.default_take
    skip: int = 0
    relations: dict[str, Any] = field(default_factory=dict)
    sort_keys: list[SortKey] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-compatible dictionary."""
        return {
            "where": _plain(self.where),
            "order": _plain(self.order),
            "take": self.take,
            "skip": self.skip,
            "relations": _plain(self.relations),
        }


def _config_from(info: ValidationInfo) -> PaginationConfig:
    context = info.context or {}
    config = context.get("config")
    return config if isinstance(config, PaginationConfig) else DEFAULT_CONFIG


class PageOptions(BaseModel):
    """
    Pagination, sorting and filtering options.

    Attributes:
        page: Page number, starting at 1.
        take: Items per page, between 1 and ``max_take`` (50 by default).
        sort: Sort expression, e.g. ``nested.createdAt:DESC``. Direction is
            not case-sensitive.
        where: Filter expression, e.g. ``id:eq:1|name:like:doe``. Clauses
            joined by ``;`` are AND-combined, groups joined by ``|`` are
            OR-combined. Percent-decoded before validation.
    """

    model_config = ConfigDict(frozen=True)

    page: int = DEFAULT_CONFIG.default_page
    take: int = DEFAULT_CONFIG.default_take
    sort: str | None = None
    where: str | None = None

    # -- validation ----------------------------------------------------------

    @field_validator("page", "take", mode="wrap")
    @classmethod
    def check_bounds(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> int:
        name = info.field_name
        try:
            number: int = handler(value)
        except ValidationError as err:
            raise PydanticCustomError(
                "int_type", "{field} must be an integer number", {"field": name}
            ) from err
        if number < 1:
            raise PydanticCustomError(
                "greater_than_equal",
                "{field} must not be less than 1",
                {"field": name},
            )
        max_take = _config_from(info).max_take
        if name == "take" and number > max_take:
            raise PydanticCustomError(
                "less_than_equal",
                "take must not be greater than {max_take}",
                {"max_take": max_take},
            )
        return number

    @field_validator("where", mode="before")
    @classmethod
    def decode_where(cls, value: Any) -> Any:
        if isinstance(value, str):
            return unquote(value)
        return value

    @field_validator("sort", "where")
    @classmethod
    def check_grammar(cls, value: str | None, info: ValidationInfo) -> str | None:
        if value is None:
            return value
        validate = validate_sort if info.field_name == "sort" else validate_where
        try:
            return validate(value)
        except QueryValidationError as err:
            raise PydanticCustomError(err.code, err.message) from err

    # -- construction --------------------------------------------------------

    @classmethod
    def from_query_params(
        cls,
        params: Mapping[str, Any],
        *,
        config: PaginationConfig = DEFAULT_CONFIG,
    ) -> PageOptions:
        """
        Build options from raw query parameters.

        Missing ``page``/``take`` fall back to the config defaults. Any
        validation failure is raised as :class:`QueryValidationError`,
        attributed to the query parameter name.
        """
        names = {
            "page": config.page_param,
            "take": config.take_param,
            "sort": config.sort_param,
            "where": config.where_param,
        }
        data: dict[str, Any] = {
            "page": params.get(names["page"]),
            "take": params.get(names["take"]),
            "sort": params.get(names["sort"]),
            "where": params.get(names["where"]),
        }
        if data["page"] is None:
            data["page"] = config.default_page
        if data["take"] is None:
            data["take"] = config.default_take
        try:
            return cls.model_validate(data, context={"config": config})
        except ValidationError as err:
            raise QueryValidationError.from_pydantic(err, names=names) from err

    # -- derived values ------------------------------------------------------

    @property
    def skip(self) -> int:
        """Number of items to skip."""
        return (self.page - 1) * self.take

    @property
    def sort_keys(self) -> list[SortKey]:
        """Ordered sort keys, primary first."""
        return parse_sort(self.sort)

    @property
    def sorting(self) -> dict[str, Any]:
        """Nested ordering mapping, e.g. ``{"nested": {"createdAt": DESC}}``."""
        return fold_sort(self.sort_keys)

    @property
    def filter(self) -> list[dict[str, Any]]:
        """OR-combined filter groups."""
        return parse_where(self.where)

    @property
    def relations(self) -> dict[str, Any]:
        """Nested eager-load mapping for every relation used by sort or filter."""
        return fold_relations(extract_relations(self.sort, self.where))

    def to_repository_options(self) -> RepositoryOptions:
        return RepositoryOptions(
            where=self.filter,
            order=self.sorting,
            take=self.take,
            skip=self.skip,
            relations=self.relations,
            sort_keys=self.sort_keys,
        )
