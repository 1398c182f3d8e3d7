"""Unit tests for StatsService."""

from datetime import timedelta

import pytest

from engage.config import AnalyticsSettings, ModerationSettings
from engage.domain.error import ForbiddenError
from engage.domain.repository import PostRepository, UserRepository
from engage.domain.service import StatsService, UserService
from engage.domain.value import Handle, ModerationStatus, PostStatus
from engage.util.time import utcnow
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

STAFF = Handle(root="moderator")


async def _seed_users(unit_env):
    user_repo = await unit_env.get(UserRepository)
    await user_repo.save(make_user("reader"))
    await user_repo.save(make_user("moderator", staff=True))


class TestGetOverview:
    """Tests for get_overview."""

    @pytest.mark.asyncio
    async def test_counts_statuses_and_sums_counters(self, unit_env):
        # Arrange
        service = await unit_env.get(StatsService)
        post_repo = await unit_env.get(PostRepository)
        await _seed_users(unit_env)
        old = utcnow() - timedelta(days=30)
        posts = [
            make_post(view_count=10, like_count=3, flag_count=4),
            make_post(
                view_count=5,
                comment_count=2,
                moderation_status=ModerationStatus.APPROVED,
            ),
            make_post(
                status=PostStatus.DRAFT,
                moderation_status=None,
                share_count=1,
                bookmark_count=2,
                created_at=old,
            ),
        ]
        for post in posts:
            await post_repo.save(post)

        # Act
        stats = await service.get_overview(STAFF)

        # Assert
        assert stats.total_posts == 3
        assert stats.status_count(PostStatus.PUBLISHED) == 2
        assert stats.status_count(PostStatus.DRAFT) == 1
        assert stats.status_count(PostStatus.ARCHIVED) == 0
        assert stats.moderation_count(ModerationStatus.PENDING) == 2
        assert stats.moderation_count(ModerationStatus.APPROVED) == 1
        assert stats.high_flag_posts == 1
        assert stats.recent_posts == 2
        assert stats.total("view_count") == 15
        assert stats.total("flag_count") == 4
        assert stats.average("view_count") == 5.0
        assert stats.average("like_count") == 1.0
        assert stats.average("bookmark_count") == 0.67

    @pytest.mark.asyncio
    async def test_high_flag_threshold_is_configurable(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        await _seed_users(unit_env)
        await post_repo.save(make_post(flag_count=2))
        await post_repo.save(make_post(flag_count=1))
        service = StatsService(
            post_repository=post_repo,
            user_service=await unit_env.get(UserService),
            moderation_settings=ModerationSettings(high_flag_count=2),
            analytics_settings=AnalyticsSettings(),
        )

        stats = await service.get_overview(STAFF)

        assert stats.high_flag_posts == 1

    @pytest.mark.asyncio
    async def test_no_posts_gives_zero_averages(self, unit_env):
        service = await unit_env.get(StatsService)
        await _seed_users(unit_env)

        stats = await service.get_overview(STAFF)

        assert stats.total_posts == 0
        assert stats.average("view_count") == 0.0

    @pytest.mark.asyncio
    async def test_requires_reviewer(self, unit_env):
        service = await unit_env.get(StatsService)
        await _seed_users(unit_env)

        with pytest.raises(ForbiddenError):
            await service.get_overview(Handle(root="reader"))
