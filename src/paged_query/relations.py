"""Relation paths referenced by nested sort and filter properties."""

from __future__ import annotations

import re
from functools import reduce
from typing import Any

from .paths import deep_merge, fold

_WHERE_SEPARATORS = re.compile(r"[|;]")


def _parents(units: list[str]) -> list[str]:
    parents: list[str] = []
    for unit in units:
        field = unit.split(":", 1)[0]
        parent = ".".join(field.split(".")[:-1])
        if parent:
            parents.append(parent)
    return parents


def extract_relations(sort: str | None = None, where: str | None = None) -> list[str]:
    """
    Return the dotted parent path of every nested property in *sort* and *where*.

    Top-level properties contribute nothing. The result is deduplicated and
    keeps first-seen order.
    """
    sort_units = sort.split(",") if sort else []
    where_units = _WHERE_SEPARATORS.split(where) if where else []
    return list(dict.fromkeys(_parents(sort_units) + _parents(where_units)))


def fold_relations(paths: list[str]) -> dict[str, Any]:
    """Fold relation paths into a nested eager-load mapping of ``True`` flags."""
    return reduce(
        lambda acc, path: deep_merge(acc, fold(tuple(path.split(".")), True)),
        paths,
        {},
    )
