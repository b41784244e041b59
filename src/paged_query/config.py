"""Pagination configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PaginationConfig:
    """Defaults and limits applied when reading pagination input.

    Attributes:
        default_page: Page used when the request omits one.
        default_take: Page size used when the request omits one.
        max_take: Largest accepted page size.
        page_param: Query parameter carrying the page number.
        take_param: Query parameter carrying the page size.
        sort_param: Query parameter carrying the sort expression.
        where_param: Query parameter carrying the filter expression.
    """

    default_page: int = 1
    default_take: int = 10
    max_take: int = 50
    page_param: str = "page"
    take_param: str = "take"
    sort_param: str = "sort"
    where_param: str = "where"

    def __post_init__(self) -> None:
        if self.default_page < 1:
            raise ValueError("default_page must be at least 1")
        if not 1 <= self.default_take <= self.max_take:
            raise ValueError("default_take must be between 1 and max_take")


DEFAULT_CONFIG = PaginationConfig()
