"""SQLAlchemy 2.x adapter: compile page options into statements and paginate."""

from .compiler import (
    apply_ordering,
    apply_repository_options,
    build_loader_options,
    build_where,
    coerce_value,
    compile_operator,
)
from .pagination import count, paginate

__all__ = [
    "apply_ordering",
    "apply_repository_options",
    "build_loader_options",
    "build_where",
    "coerce_value",
    "compile_operator",
    "count",
    "paginate",
]
