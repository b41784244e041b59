"""FastAPI integration for paged-query."""

from .dependencies import get_page_options, page_options_dependency
from .handlers import query_validation_exception_handler, register_exception_handlers

__all__: list[str] = [
    # Dependencies
    "get_page_options",
    "page_options_dependency",
    # Exception handling
    "query_validation_exception_handler",
    "register_exception_handlers",
]
