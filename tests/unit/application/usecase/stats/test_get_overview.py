"""Unit tests for GetOverviewUseCase."""

import pytest

from engage.application.usecase.stats import GetOverviewRequest, GetOverviewUseCase
from engage.domain.repository import PostRepository, UserRepository
from engage.domain.value import ModerationStatus
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetOverviewUseCase:
    """Tests for GetOverviewUseCase."""

    @pytest.mark.asyncio
    async def test_sections_cover_every_status(self, unit_env):
        # Arrange
        overview = await unit_env.get(GetOverviewUseCase)
        await (await unit_env.get(UserRepository)).save(
            make_user("moderator", staff=True)
        )
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(
            make_post(moderation_status=ModerationStatus.FLAGGED, flag_count=5)
        )
        await post_repo.save(make_post(like_count=4, view_count=9))

        # Act
        response = await overview.execute(
            GetOverviewRequest(reviewer_handle="moderator")
        )

        # Assert
        assert response.posts.total == 2
        assert response.posts.published == 2
        assert response.moderation.flagged == 1
        assert response.moderation.pending == 1
        assert response.moderation.under_review == 0
        assert response.moderation.high_flag == 1
        assert response.engagement.total_flags == 5
        assert response.engagement.average_likes == 2.0
        assert response.engagement.average_views == 4.5
