"""Tests for the paged response model."""

from __future__ import annotations

import pytest
from pydantic import BaseModel, ValidationError

from paged_query.exceptions import PageOutOfRangeError
from paged_query.meta import PageMeta
from paged_query.options import PageOptions
from paged_query.page import Page


class UserSchema(BaseModel):
    id: int
    name: str


def test_create_builds_meta():
    page = Page.create(["a", "b"], PageOptions(page=1, take=2), item_count=3)
    assert page.result == ["a", "b"]
    assert page.meta.page_count == 2
    assert page.meta.has_next_page


def test_to_dict():
    page = Page.create(
        [UserSchema(id=1, name="alice")], PageOptions(take=10), item_count=1
    )
    assert page.to_dict() == {
        "result": [{"id": 1, "name": "alice"}],
        "meta": {
            "page": 1,
            "take": 10,
            "itemCount": 1,
            "pageCount": 1,
            "hasPreviousPage": False,
            "hasNextPage": False,
        },
    }


def test_parametrised_page_validates_items():
    meta = PageMeta.build(page=1, take=10, item_count=1)
    page = Page[UserSchema](result=[{"id": "1", "name": "bob"}], meta=meta)
    assert page.result == [UserSchema(id=1, name="bob")]
    with pytest.raises(ValidationError):
        Page[UserSchema](result=[{"id": "x"}], meta=meta)


def test_create_out_of_range():
    with pytest.raises(PageOutOfRangeError):
        Page.create([], PageOptions(page=3, take=10), item_count=15)
