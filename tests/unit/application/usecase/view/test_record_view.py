"""Unit tests for RecordViewUseCase."""

from datetime import timedelta

import pytest

from engage.application.usecase.view import RecordViewRequest, RecordViewUseCase
from engage.domain.repository import PostRepository, ViewRepository
from engage.util.time import utcnow
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestRecordViewUseCase:
    """Tests for RecordViewUseCase."""

    @pytest.mark.asyncio
    async def test_second_view_is_not_counted(self, unit_env):
        # Arrange
        record = await unit_env.get(RecordViewUseCase)
        view_repo = await unit_env.get(ViewRepository)
        post = make_post()
        await (await unit_env.get(PostRepository)).save(post)
        request = RecordViewRequest(
            post_id=post.id,
            user_handle="reader",
            user_agent="pytest",
            referrer="https://example.org/feed",
        )

        # Act
        first = await record.execute(request)
        second = await record.execute(request)

        # Assert
        assert first.counted is True
        assert second.counted is False
        assert await view_repo.count_by_post(post.id) == 2

    @pytest.mark.asyncio
    async def test_counted_view_bumps_updated_at(self, unit_env):
        # Arrange
        record = await unit_env.get(RecordViewUseCase)
        post_repo = await unit_env.get(PostRepository)
        stale = utcnow() - timedelta(days=1)
        post = make_post(updated_at=stale)
        await post_repo.save(post)

        # Act
        response = await record.execute(RecordViewRequest(post_id=post.id))

        # Assert
        assert response.counted is True
        stored = await post_repo.find_by_id(post.id)
        assert stored.view_count == 1
        assert stored.updated_at > stale

    @pytest.mark.asyncio
    async def test_long_client_headers_are_logged(self, unit_env):
        """Headers beyond any fixed column width are kept whole."""
        record = await unit_env.get(RecordViewUseCase)
        view_repo = await unit_env.get(ViewRepository)
        post = make_post()
        await (await unit_env.get(PostRepository)).save(post)
        user_agent = "Mozilla/5.0 " + "x" * 4000
        referrer = "https://example.org/feed?" + "q=1&" * 2000

        response = await record.execute(
            RecordViewRequest(post_id=post.id, user_agent=user_agent, referrer=referrer)
        )

        assert response.counted is True
        assert await view_repo.count_by_post(post.id) == 1
        logged = view_repo._views[0]
        assert logged.user_agent == user_agent
        assert logged.referrer == referrer
