"""Shared fixtures for paged-query tests."""

from __future__ import annotations

import pytest

from paged_query import PageOptions, PaginationConfig


@pytest.fixture
def make_options():
    """Build ``PageOptions`` from raw query parameters (default config)."""

    def _make(**params: str) -> PageOptions:
        return PageOptions.from_query_params(params)

    return _make


@pytest.fixture
def custom_config() -> PaginationConfig:
    return PaginationConfig(
        default_take=20,
        max_take=100,
        page_param="p",
        take_param="size",
        sort_param="order",
        where_param="filter",
    )
