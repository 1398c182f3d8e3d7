"""Unit tests for listing cursors."""

import pytest
from pydantic import ValidationError

from engage.application.usecase.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PageInfo,
    PageRequest,
)
from engage.domain.model import Page


class TestPageRequest:
    def test_defaults_to_first_page(self):
        request = PageRequest()

        assert request.limit == DEFAULT_PAGE_SIZE
        assert request.offset == 0

    def test_cursor_decodes_to_offset(self):
        assert PageRequest(cursor="40").offset == 40

    @pytest.mark.parametrize("cursor", ["-1", "abc", "", "1.5"])
    def test_malformed_cursor_rejected(self, cursor):
        with pytest.raises(ValidationError):
            PageRequest(cursor=cursor)

    @pytest.mark.parametrize("limit", [0, MAX_PAGE_SIZE + 1])
    def test_limit_out_of_range_rejected(self, limit):
        with pytest.raises(ValidationError):
            PageRequest(limit=limit)


class TestPageInfo:
    def test_partial_page_has_continue_cursor(self):
        page = Page(items=["a", "b"], total=5, offset=2)

        info = PageInfo.from_page(page)

        assert info.is_done is False
        assert info.continue_cursor == "4"

    def test_last_page_is_done(self):
        page = Page(items=["e"], total=5, offset=4)

        info = PageInfo.from_page(page)

        assert info.is_done is True
        assert info.continue_cursor is None

    def test_empty_listing_is_done(self):
        assert PageInfo.from_page(Page(items=[], total=0)).is_done is True
