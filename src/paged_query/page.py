"""One page of results plus its metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from .meta import PageMeta

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .options import PageOptions

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """
    Paged response: ``{"result": [...], "meta": {...}}``.

    Parametrise (``Page[UserSchema]``) to have pydantic validate the items;
    the bare ``Page`` carries them through unchanged.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    result: list[T]
    meta: PageMeta

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        options: PageOptions,
        item_count: int,
    ) -> Page[T]:
        """Build the page, computing metadata from *options* and *item_count*."""
        return cls(result=list(items), meta=PageMeta.from_options(options, item_count))

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
