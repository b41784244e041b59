"""FastAPI dependencies for page options.

Provides a ``Depends`` factory that reads ``page``, ``take``, ``sort`` and
``where`` from the query string and injects validated :class:`PageOptions`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Query

from ...config import DEFAULT_CONFIG, PaginationConfig
from ...expressions import SORT_FORMAT_MESSAGE, WHERE_FORMAT_MESSAGE
from ...options import PageOptions

if TYPE_CHECKING:
    from collections.abc import Callable


def page_options_dependency(
    config: PaginationConfig = DEFAULT_CONFIG,
) -> Callable[..., PageOptions]:
    """Create a dependency that parses page options from the query string.

    Parameters are declared as strings so that every check (integer
    conversion included) runs through :meth:`PageOptions.from_query_params`
    and fails with :class:`QueryValidationError`. Register
    :func:`register_exception_handlers` to render those as 422 responses.

    Args:
        config: Defaults, bounds and query parameter names.

    Returns:
        A callable suitable for ``Depends``.

    Example:
        ```python
        from fastapi import Depends, FastAPI
        from paged_query.contrib.fastapi import (
            page_options_dependency,
            register_exception_handlers,
        )

        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/users")
        def list_users(options = Depends(page_options_dependency())):
            ...
        ```
    """

    def dependency(
        page: str | None = Query(
            None,
            alias=config.page_param,
            description=f"Page number, starting at {config.default_page}",
        ),
        take: str | None = Query(
            None,
            alias=config.take_param,
            description=f"Items per page, at most {config.max_take}",
        ),
        sort: str | None = Query(
            None,
            alias=config.sort_param,
            description=SORT_FORMAT_MESSAGE,
        ),
        where: str | None = Query(
            None,
            alias=config.where_param,
            description=WHERE_FORMAT_MESSAGE,
        ),
    ) -> PageOptions:
        return PageOptions.from_query_params(
            {
                config.page_param: page,
                config.take_param: take,
                config.sort_param: sort,
                config.where_param: where,
            },
            config=config,
        )

    return dependency


def get_page_options(
    page: str | None = Query(None),
    take: str | None = Query(None),
    sort: str | None = Query(None, description=SORT_FORMAT_MESSAGE),
    where: str | None = Query(None, description=WHERE_FORMAT_MESSAGE),
) -> PageOptions:
    """Default-config dependency: ``Depends(get_page_options)``."""
    return PageOptions.from_query_params(
        {"page": page, "take": take, "sort": sort, "where": where}
    )
