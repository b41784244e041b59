"""Tests for pagination configuration."""

from __future__ import annotations

import dataclasses

import pytest

from paged_query.config import DEFAULT_CONFIG, PaginationConfig


def test_defaults():
    assert DEFAULT_CONFIG.default_page == 1
    assert DEFAULT_CONFIG.default_take == 10
    assert DEFAULT_CONFIG.max_take == 50
    assert (
        DEFAULT_CONFIG.page_param,
        DEFAULT_CONFIG.take_param,
        DEFAULT_CONFIG.sort_param,
        DEFAULT_CONFIG.where_param,
    ) == ("page", "take", "sort", "where")


@pytest.mark.parametrize(
    "kwargs",
    [{"default_page": 0}, {"default_take": 0}, {"default_take": 60}],
)
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        PaginationConfig(**kwargs)


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.max_take = 100  # type: ignore[misc]
