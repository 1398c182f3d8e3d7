"""Unit tests for the flag and moderation use cases."""

import pytest

from engage.application.usecase.flag import (
    FlagPostRequest,
    FlagPostUseCase,
    ListFlagsRequest,
    ListFlagsUseCase,
    ModeratePostRequest,
    ModeratePostUseCase,
    ReviewFlagRequest,
    ReviewFlagUseCase,
)
from engage.domain.error import ForbiddenError, InvalidActionError
from engage.domain.repository import PostRepository, UserRepository
from engage.domain.value import FlagReason, FlagStatus, ModerationStatus
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env):
    user_repo = await unit_env.get(UserRepository)
    await user_repo.save(make_user("reader"))
    await user_repo.save(make_user("moderator", staff=True))
    post = make_post()
    await (await unit_env.get(PostRepository)).save(post)
    return post


class TestFlagUseCases:
    """Tests for flag, review, moderate and list."""

    @pytest.mark.asyncio
    async def test_flag_then_review_with_lowercase_action(self, unit_env):
        """Review actions are accepted case-insensitively."""
        # Arrange
        flag_post = await unit_env.get(FlagPostUseCase)
        review = await unit_env.get(ReviewFlagUseCase)
        post = await _seed(unit_env)
        flag = await flag_post.execute(
            FlagPostRequest(
                post_id=post.id,
                reason=FlagReason.MISINFORMATION,
                description="Cites a retracted paper",
                user_handle="reader",
            )
        )

        # Act
        reviewed = await review.execute(
            ReviewFlagRequest(
                flag_id=flag.flag_id, action="resolve", reviewer_handle="moderator"
            )
        )

        # Assert
        assert flag.status == FlagStatus.PENDING
        assert reviewed.status == FlagStatus.RESOLVED
        assert reviewed.reviewed_by == "moderator"
        stored = await (await unit_env.get(PostRepository)).find_by_id(post.id)
        assert stored.moderation_status == ModerationStatus.FLAGGED

    @pytest.mark.asyncio
    async def test_moderate_returns_new_status(self, unit_env):
        moderate = await unit_env.get(ModeratePostUseCase)
        post = await _seed(unit_env)

        response = await moderate.execute(
            ModeratePostRequest(
                post_id=post.id, action="UNDER_REVIEW", reviewer_handle="moderator"
            )
        )

        assert response.post_id == str(post.id)
        assert response.moderation_status == ModerationStatus.UNDER_REVIEW

    @pytest.mark.asyncio
    async def test_moderate_rejects_unknown_action(self, unit_env):
        moderate = await unit_env.get(ModeratePostUseCase)
        post = await _seed(unit_env)

        with pytest.raises(InvalidActionError):
            await moderate.execute(
                ModeratePostRequest(
                    post_id=post.id, action="PUBLISH", reviewer_handle="moderator"
                )
            )

    @pytest.mark.asyncio
    async def test_list_flags_filters_and_requires_reviewer(self, unit_env):
        # Arrange
        flag_post = await unit_env.get(FlagPostUseCase)
        list_flags = await unit_env.get(ListFlagsUseCase)
        post = await _seed(unit_env)
        await flag_post.execute(
            FlagPostRequest(post_id=post.id, reason=FlagReason.SPAM, user_handle="reader")
        )

        # Act
        spam = await list_flags.execute(
            ListFlagsRequest(reviewer_handle="moderator", reason=FlagReason.SPAM)
        )
        other = await list_flags.execute(
            ListFlagsRequest(reviewer_handle="moderator", reason=FlagReason.OTHER)
        )

        # Assert
        assert spam.total == 1
        assert spam.page.is_done is True
        assert spam.flags[0].post_id == str(post.id)
        assert other.total == 0
        with pytest.raises(ForbiddenError):
            await list_flags.execute(ListFlagsRequest(reviewer_handle="reader"))
