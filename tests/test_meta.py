"""Tests for page metadata."""

from __future__ import annotations

import pytest

from paged_query.exceptions import PageOutOfRangeError, QueryValidationError
from paged_query.meta import PageMeta
from paged_query.options import PageOptions


def test_first_page():
    meta = PageMeta.build(page=1, take=10, item_count=95)
    assert meta.page_count == 10
    assert not meta.has_previous_page
    assert meta.has_next_page


def test_last_page():
    meta = PageMeta.build(page=10, take=10, item_count=95)
    assert meta.has_previous_page
    assert not meta.has_next_page


@pytest.mark.parametrize(("page", "item_count"), [(1, 0), (5, 0), (5, 1)])
def test_empty_and_single_item_collections_never_fail(page, item_count):
    meta = PageMeta.build(page=page, take=10, item_count=item_count)
    assert meta.page_count == item_count


def test_page_within_range():
    assert PageMeta.build(page=3, take=10, item_count=25).page_count == 3


def test_page_out_of_range():
    with pytest.raises(PageOutOfRangeError) as exc_info:
        PageMeta.build(page=4, take=10, item_count=25)
    assert exc_info.value.page_count == 3
    assert exc_info.value.errors == {
        "page": ["page must be less than or equal to 3"]
    }


def test_take_below_one_is_rejected():
    with pytest.raises(QueryValidationError) as exc_info:
        PageMeta.build(page=1, take=0, item_count=5)
    assert exc_info.value.errors == {"take": ["take must not be less than 1"]}


def test_direct_construction_is_checked():
    with pytest.raises(PageOutOfRangeError):
        PageMeta(
            page=9,
            take=10,
            item_count=20,
            page_count=2,
            has_previous_page=True,
            has_next_page=False,
        )


def test_from_options():
    options = PageOptions(page=2, take=5)
    meta = PageMeta.from_options(options, item_count=12)
    assert (meta.page, meta.take, meta.page_count) == (2, 5, 3)


def test_to_dict_uses_camel_case():
    assert PageMeta.build(page=2, take=10, item_count=30).to_dict() == {
        "page": 2,
        "take": 10,
        "itemCount": 30,
        "pageCount": 3,
        "hasPreviousPage": True,
        "hasNextPage": True,
    }
