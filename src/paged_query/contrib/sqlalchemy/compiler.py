"""
Compile :class:`RepositoryOptions` into SQLAlchemy 2.x constructs.

- ``where`` groups become ``OR(AND(...), ...)``; nested keys traverse
  relationships with ``.has()`` (many-to-one) or ``.any()`` (collections).
- sort keys become ``ORDER BY`` terms in request order; many-to-one
  relationships on the way are outer-joined, collections are rejected.
- ``relations`` become chained ``selectinload`` options.

Filter values arrive as strings and are coerced to each column's Python
type before comparison.
"""

from __future__ import annotations

import datetime
import json
import logging
import uuid
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import and_, not_, or_
from sqlalchemy import cast as sa_cast
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.orm import selectinload

from ...exceptions import MalformedValueError, QueryValidationError
from ...operators import FindOperator, OperatorType
from ...rules import SortOrder

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from sqlalchemy import ColumnElement, Select
    from sqlalchemy.orm import RelationshipProperty
    from sqlalchemy.orm.strategy_options import _AbstractLoad

    from ...expressions import SortKey
    from ...options import RepositoryOptions

logger = logging.getLogger("paged_query.sqlalchemy")

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})

# Operators whose operand is compared against the column's own type.
_COERCED = frozenset(
    {
        OperatorType.EQUAL,
        OperatorType.MORE_THAN,
        OperatorType.MORE_THAN_OR_EQUAL,
        OperatorType.LESS_THAN,
        OperatorType.LESS_THAN_OR_EQUAL,
        OperatorType.IN,
        OperatorType.BETWEEN,
    }
)

# Containment operators only compile against PostgreSQL ARRAY / JSONB columns.
_COLUMN_TYPES: Mapping[OperatorType, tuple[type[Any], str]] = MappingProxyType(
    {
        OperatorType.ARRAY_CONTAINS: (ARRAY, "an array"),
        OperatorType.JSON_CONTAINS: (JSONB, "a JSONB"),
    }
)


def _json_contains(column: Any, value: Any) -> ColumnElement[bool]:
    document = sa_cast(json.dumps(value), JSONB)
    return cast("ColumnElement[bool]", column.op("@>")(document))


_OPERATOR_BUILDERS: Mapping[OperatorType, Callable[[Any, Any], Any]] = MappingProxyType(
    {
        OperatorType.EQUAL: lambda column, value: column == value,
        OperatorType.MORE_THAN: lambda column, value: column > value,
        OperatorType.MORE_THAN_OR_EQUAL: lambda column, value: column >= value,
        OperatorType.LESS_THAN: lambda column, value: column < value,
        OperatorType.LESS_THAN_OR_EQUAL: lambda column, value: column <= value,
        OperatorType.LIKE: lambda column, value: column.like(value),
        OperatorType.ILIKE: lambda column, value: column.ilike(value),
        OperatorType.IN: lambda column, value: column.in_(value),
        OperatorType.IS_NULL: lambda column, _value: column.is_(None),
        OperatorType.BETWEEN: lambda column, value: column.between(*value),
        OperatorType.ARRAY_CONTAINS: lambda column, value: column.contains(value),
        OperatorType.JSON_CONTAINS: _json_contains,
    }
)


# ---------------------------------------------------------------------------
# Attribute resolution & value coercion
# ---------------------------------------------------------------------------


def _resolve(
    model: type[Any], key: str, prop: str
) -> tuple[Any, RelationshipProperty[Any] | None]:
    """Return ``(attribute, relationship-or-None)`` for *key* on *model*."""
    mapper = sa_inspect(model)
    if key in mapper.relationships:
        return getattr(model, key), mapper.relationships[key]
    if key in mapper.column_attrs:
        return getattr(model, key), None
    raise QueryValidationError.for_property(
        prop, f"{prop} property {key} is not allowed"
    )


def _python_type(column: Any) -> type[Any] | None:
    try:
        return cast("type[Any]", column.type.python_type)
    except NotImplementedError:
        return None


def _coerce_scalar(python_type: type[Any] | None, value: Any) -> Any:
    if not isinstance(value, str) or python_type in (None, str):
        return value
    if python_type is bool:
        text = value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise ValueError(value)
    if python_type in (int, float, Decimal):
        return python_type(value)
    if python_type is datetime.datetime:
        return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if python_type is datetime.date:
        return datetime.date.fromisoformat(value)
    if python_type is uuid.UUID:
        return uuid.UUID(value)
    return value


def coerce_value(column: Any, value: Any, key: str) -> Any:
    """Coerce string operand(s) to the Python type of *column*."""
    python_type = _python_type(column)
    try:
        if isinstance(value, list | tuple):
            return type(value)(_coerce_scalar(python_type, item) for item in value)
        return _coerce_scalar(python_type, value)
    except (ValueError, InvalidOperation) as err:
        raise MalformedValueError.for_property(
            "where", f"where value {value!r} is not valid for property {key}"
        ) from err


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def compile_operator(
    column: Any, operator: FindOperator, key: str
) -> ColumnElement[bool]:
    """Build the boolean expression for one :class:`FindOperator` on *column*."""
    if operator.type is OperatorType.NOT:
        return not_(compile_operator(column, operator.value, key))
    required = _COLUMN_TYPES.get(operator.type)
    if required is not None and not isinstance(column.type, required[0]):
        raise QueryValidationError.for_property(
            "where", f"where property {key} is not {required[1]} column"
        )
    value = operator.value
    if operator.type in _COERCED:
        value = coerce_value(column, value, key)
    return cast("ColumnElement[bool]", _OPERATOR_BUILDERS[operator.type](column, value))


def _compile_group(model: type[Any], group: Mapping[str, Any]) -> ColumnElement[bool]:
    clauses: list[ColumnElement[bool]] = []
    for key, node in group.items():
        attr, relationship = _resolve(model, key, "where")
        if isinstance(node, FindOperator):
            if relationship is not None:
                raise QueryValidationError.for_property(
                    "where", f"where property {key} is a relation"
                )
            clauses.append(compile_operator(attr, node, key))
            continue
        if relationship is None:
            raise QueryValidationError.for_property(
                "where", f"where property {key} is not a relation"
            )
        inner = _compile_group(relationship.mapper.class_, node)
        clauses.append(attr.any(inner) if relationship.uselist else attr.has(inner))
    return and_(*clauses)


def build_where(
    model: type[Any], groups: list[dict[str, Any]]
) -> ColumnElement[bool] | None:
    """OR-combine the filter groups; ``None`` when there is nothing to filter."""
    if not groups:
        return None
    return or_(*(_compile_group(model, group) for group in groups))


# ---------------------------------------------------------------------------
# Ordering & eager loading
# ---------------------------------------------------------------------------


def apply_ordering(
    stmt: Select[Any], model: type[Any], keys: Sequence[SortKey]
) -> Select[Any]:
    """
    Emit one ``ORDER BY`` term per sort key, in list order.

    Each many-to-one relationship on a key's path is outer-joined once.
    Paths through a collection are rejected: joining one would repeat the
    parent row per related item.
    """
    joined: set[tuple[str, ...]] = set()
    for key in keys:
        current = model
        for depth, segment in enumerate(key.path[:-1]):
            attr, relationship = _resolve(current, segment, "sort")
            if relationship is None:
                raise QueryValidationError.for_property(
                    "sort", f"sort property {segment} is not a relation"
                )
            if relationship.uselist:
                raise QueryValidationError.for_property(
                    "sort",
                    f"sort property {key.property_name} crosses the collection "
                    f"{segment}",
                )
            prefix = key.path[: depth + 1]
            if prefix not in joined:
                stmt = stmt.outerjoin(attr)
                joined.add(prefix)
            current = relationship.mapper.class_
        attr, relationship = _resolve(current, key.path[-1], "sort")
        if relationship is not None:
            raise QueryValidationError.for_property(
                "sort", f"sort property {key.property_name} is a relation"
            )
        stmt = stmt.order_by(attr.desc() if key.order is SortOrder.DESC else attr.asc())
    return stmt


def _loader_paths(model: type[Any], relations: Mapping[str, Any]) -> list[list[Any]]:
    paths: list[list[Any]] = []
    for key, node in relations.items():
        attr, relationship = _resolve(model, key, "relations")
        if relationship is None:
            raise QueryValidationError.for_property(
                "relations", f"relations property {key} is not a relation"
            )
        if isinstance(node, Mapping):
            for sub_path in _loader_paths(relationship.mapper.class_, node):
                paths.append([attr, *sub_path])
        else:
            paths.append([attr])
    return paths


def build_loader_options(
    model: type[Any], relations: Mapping[str, Any]
) -> list[_AbstractLoad]:
    """One chained ``selectinload`` per relation path."""
    loaders: list[_AbstractLoad] = []
    for path in _loader_paths(model, relations):
        loader = selectinload(path[0])
        for attr in path[1:]:
            loader = loader.selectinload(attr)
        loaders.append(loader)
    return loaders


def apply_repository_options(
    stmt: Select[Any],
    model: type[Any],
    options: RepositoryOptions,
) -> Select[Any]:
    """Apply filter, ordering, eager loading and ``LIMIT``/``OFFSET``."""
    where = build_where(model, options.where)
    if where is not None:
        stmt = stmt.where(where)
    stmt = apply_ordering(stmt, model, options.sort_keys)
    loaders = build_loader_options(model, options.relations)
    if loaders:
        stmt = stmt.options(*loaders)
    stmt = stmt.limit(options.take).offset(options.skip)
    logger.debug("Compiled paged statement for %s: %s", model.__name__, stmt)
    return stmt
