"""Unit tests for counter delta handling."""

from datetime import UTC, datetime

import pytest
from sqlalchemy.dialects import postgresql

from engage.domain.repository import COMMENT_COUNTERS, POST_COUNTERS
from engage.persistence.repository._counters import counter_deltas
from engage.persistence.repository.inmemory import InMemoryPostRepository
from engage.persistence.tables import comments_table, posts_table
from tests.conftest import make_post


class TestCounterDeltas:
    def test_rejects_unknown_counter(self):
        with pytest.raises(ValueError, match="Unknown counters"):
            counter_deltas(posts_table, {"title": 1}, POST_COUNTERS)

    def test_skips_zero_deltas(self):
        values = counter_deltas(
            posts_table, {"like_count": 1, "flag_count": 0}, POST_COUNTERS
        )

        assert set(values) == {"like_count"}

    def test_update_clamps_at_zero(self):
        values = counter_deltas(comments_table, {"like_count": -1}, COMMENT_COUNTERS)
        stmt = comments_table.update().values(**values)

        sql = str(stmt.compile(dialect=postgresql.dialect()))

        assert "greatest(comments.like_count +" in sql


class TestInMemoryPostCounters:
    @pytest.mark.asyncio
    async def test_adjust_counters_clamps_and_touches(self):
        # Arrange
        repository = InMemoryPostRepository()
        post = await repository.save(make_post(like_count=1))
        touched_at = datetime(2026, 1, 1, tzinfo=UTC)

        # Act
        await repository.adjust_counters(
            post.id, {"like_count": -3, "view_count": 2}, touched_at
        )

        # Assert
        updated = await repository.find_by_id(post.id)
        assert updated is not None
        assert updated.like_count == 0
        assert updated.view_count == 2
        assert updated.updated_at == touched_at

    @pytest.mark.asyncio
    async def test_adjust_counters_rejects_unknown_counter(self):
        repository = InMemoryPostRepository()
        post = await repository.save(make_post())

        with pytest.raises(ValueError):
            await repository.adjust_counters(
                post.id, {"comment_total": 1}, datetime.now(UTC)
            )
