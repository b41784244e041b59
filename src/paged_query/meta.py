"""Page metadata computed from the requested page and the total item count."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from .exceptions import PageOutOfRangeError, QueryValidationError

if TYPE_CHECKING:
    from .options import PageOptions

logger = logging.getLogger("paged_query.meta")


class PageMeta(BaseModel):
    """
    Metadata returned alongside a page of results.

    Serialised with camelCase keys (``itemCount``, ``pageCount``,
    ``hasPreviousPage``, ``hasNextPage``).

    Raises :class:`PageOutOfRangeError` when the page lies beyond the result
    set. Item counts of 0 and 1 are always accepted so that requesting the
    first page of an empty or single-item collection never fails.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    page: int
    take: int
    item_count: int
    page_count: int
    has_previous_page: bool
    has_next_page: bool

    @model_validator(mode="after")
    def check_page_in_range(self) -> PageMeta:
        if self.item_count not in (0, 1) and (
            self.page > self.item_count or self.page > self.page_count
        ):
            raise PageOutOfRangeError(self.page_count)
        return self

    @classmethod
    def build(cls, page: int, take: int, item_count: int) -> PageMeta:
        if take < 1:
            raise QueryValidationError.for_property(
                "take", "take must not be less than 1"
            )
        page_count = math.ceil(item_count / take)
        logger.debug(
            "Page %d of %d (take=%d, item_count=%d)",
            page,
            page_count,
            take,
            item_count,
        )
        return cls(
            page=page,
            take=take,
            item_count=item_count,
            page_count=page_count,
            has_previous_page=page > 1,
            has_next_page=page < page_count,
        )

    @classmethod
    def from_options(cls, options: PageOptions, item_count: int) -> PageMeta:
        return cls.build(options.page, options.take, item_count)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
