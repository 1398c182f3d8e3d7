"""Unit tests for table definitions."""

import pytest
from sqlalchemy import Text

from engage.persistence.tables import post_views_table


class TestPostViewsTable:
    @pytest.mark.parametrize("column", ["user_agent", "referrer"])
    def test_request_headers_are_unbounded(self, column: str):
        """Raw request headers must never be rejected for length."""
        column_type = post_views_table.c[column].type

        assert isinstance(column_type, Text)
        assert column_type.length is None
