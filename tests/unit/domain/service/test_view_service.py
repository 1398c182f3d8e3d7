"""Unit tests for ViewService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from engage.config import AnalyticsSettings
from engage.domain.error import NotFoundError
from engage.domain.model import View
from engage.domain.repository import PostRepository, ViewRepository
from engage.domain.service import PostService, ViewService
from engage.domain.value import Handle, PostId, ViewId
from engage.util.time import utcnow
from tests.conftest import make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

READER = Handle(root="reader")


async def _seed(unit_env):
    post = make_post()
    await (await unit_env.get(PostRepository)).save(post)
    return post


class TestRecordView:
    """Tests for record_view."""

    @pytest.mark.asyncio
    async def test_repeat_view_inside_window_is_logged_not_counted(self, unit_env):
        """Two views within the cool-down: two log rows, one increment."""
        # Arrange
        service = await unit_env.get(ViewService)
        view_repo = await unit_env.get(ViewRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)

        # Act
        first = await service.record_view(post.id, READER, ip_address="10.0.0.1")
        second = await service.record_view(post.id, READER, ip_address="10.0.0.1")

        # Assert
        assert first is True
        assert second is False
        assert await view_repo.count_by_post(post.id) == 2
        assert (await post_repo.find_by_id(post.id)).view_count == 1

    @pytest.mark.asyncio
    async def test_view_after_window_counts_again(self, unit_env):
        # Arrange
        service = await unit_env.get(ViewService)
        view_repo = await unit_env.get(ViewRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)
        await view_repo.save(
            View(
                id=ViewId(uuid4()),
                post_id=post.id,
                user_handle=READER,
                viewed_at=utcnow() - timedelta(minutes=61),
            )
        )

        # Act
        counted = await service.record_view(post.id, READER)

        # Assert
        assert counted is True
        assert (await post_repo.find_by_id(post.id)).view_count == 1

    @pytest.mark.asyncio
    async def test_anonymous_views_always_count(self, unit_env):
        service = await unit_env.get(ViewService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)

        await service.record_view(post.id)
        await service.record_view(post.id)

        assert (await post_repo.find_by_id(post.id)).view_count == 2

    @pytest.mark.asyncio
    async def test_cooldown_is_per_user(self, unit_env):
        service = await unit_env.get(ViewService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)

        await service.record_view(post.id, READER)
        other = await service.record_view(post.id, Handle(root="someone-else"))

        assert other is True
        assert (await post_repo.find_by_id(post.id)).view_count == 2

    @pytest.mark.asyncio
    async def test_zero_window_counts_every_view(self, unit_env):
        service = ViewService(
            view_repository=await unit_env.get(ViewRepository),
            post_service=await unit_env.get(PostService),
            analytics_settings=AnalyticsSettings(view_cooldown_minutes=0),
        )
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)

        await service.record_view(post.id, READER)
        await service.record_view(post.id, READER)

        assert (await post_repo.find_by_id(post.id)).view_count == 2

    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, unit_env):
        service = await unit_env.get(ViewService)
        view_repo = await unit_env.get(ViewRepository)
        post_id = PostId(uuid4())

        with pytest.raises(NotFoundError):
            await service.record_view(post_id, READER)
        assert await view_repo.count_by_post(post_id) == 0
