"""
Dot-separated property paths.

``nested.createdAt`` is parsed into ``("nested", "createdAt")`` and folded
into ``{"nested": {"createdAt": value}}``. Sort keys, filter keys and
relation flags all go through :func:`fold`, so dotted notation and
already-nested mappings are interchangeable downstream.
"""

from __future__ import annotations

from typing import Any

PropertyPath = tuple[str, ...]


def parse_path(raw: str) -> PropertyPath:
    """Split *raw* on ``.``; every segment must be non-empty."""
    segments = tuple(raw.split("."))
    if any(not segment for segment in segments):
        raise ValueError(f"Invalid property path: {raw!r}")
    return segments


def format_path(path: PropertyPath) -> str:
    return ".".join(path)


def is_nested(path: PropertyPath) -> bool:
    return len(path) > 1


def parent_path(path: PropertyPath) -> PropertyPath | None:
    """All segments but the last, or ``None`` for a top-level property."""
    if not is_nested(path):
        return None
    return path[:-1]


def fold(path: PropertyPath, leaf: Any) -> dict[str, Any]:
    """Build a single-branch nested mapping holding *leaf* at *path*."""
    if not path:
        raise ValueError("Cannot fold an empty property path")
    head, *rest = path
    if not rest:
        return {head: leaf}
    return {head: fold(tuple(rest), leaf)}


def deep_merge(base: dict[str, Any], other: dict[str, Any]) -> dict[str, Any]:
    """
    Merge two folded mappings into a new one.

    Mappings on both sides are merged recursively. Any other collision is
    last-write-wins, except that a mapping replaces a bare ``True`` flag
    and is never replaced by one.
    """
    merged = dict(base)
    for key, value in other.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        elif isinstance(current, dict) and value is True:
            continue
        else:
            merged[key] = value
    return merged
