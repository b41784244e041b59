"""Render :class:`QueryValidationError` as a 422 JSON response."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.responses import JSONResponse

from ...exceptions import QueryValidationError

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = logging.getLogger("paged_query.contrib.fastapi")


async def query_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    if not isinstance(exc, QueryValidationError):
        raise exc
    logger.info(
        "Rejected query parameters on %s %s: %s",
        request.method,
        request.url.path,
        exc.errors,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handler for :class:`QueryValidationError` on *app*."""
    app.add_exception_handler(QueryValidationError, query_validation_exception_handler)
