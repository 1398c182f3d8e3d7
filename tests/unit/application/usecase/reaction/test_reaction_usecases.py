"""Unit tests for the reaction use cases."""

import pytest

from engage.application.usecase.reaction import (
    GetPostInteractionRequest,
    GetPostInteractionUseCase,
    SharePostRequest,
    SharePostUseCase,
    ToggleReactionRequest,
    ToggleReactionUseCase,
)
from engage.domain.error import OperationNotAllowedError
from engage.domain.repository import PostRepository, UserRepository
from engage.domain.value import ReactionKind
from tests.conftest import make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env, **post_fields):
    await (await unit_env.get(UserRepository)).save(make_user("reader"))
    post = make_post(**post_fields)
    await (await unit_env.get(PostRepository)).save(post)
    return post


class TestReactionUseCases:
    """Tests for toggle, share and interaction lookups."""

    @pytest.mark.asyncio
    async def test_toggle_bookmark_and_read_interaction(self, unit_env):
        # Arrange
        toggle = await unit_env.get(ToggleReactionUseCase)
        interaction = await unit_env.get(GetPostInteractionUseCase)
        post = await _seed(unit_env)

        # Act
        response = await toggle.execute(
            ToggleReactionRequest(
                kind=ReactionKind.BOOKMARK, target_id=post.id, user_handle="reader"
            )
        )
        state = await interaction.execute(
            GetPostInteractionRequest(post_id=post.id, user_handle="reader")
        )

        # Assert
        assert response.kind == ReactionKind.BOOKMARK
        assert response.target_id == str(post.id)
        assert response.active is True
        assert response.count == 1
        assert state.is_bookmarked is True
        assert state.is_liked is False

    @pytest.mark.asyncio
    async def test_toggle_on_disabled_post_is_not_allowed(self, unit_env):
        toggle = await unit_env.get(ToggleReactionUseCase)
        post = await _seed(unit_env, allow_bookmarks=False)

        with pytest.raises(OperationNotAllowedError):
            await toggle.execute(
                ToggleReactionRequest(
                    kind=ReactionKind.BOOKMARK, target_id=post.id, user_handle="reader"
                )
            )

    @pytest.mark.asyncio
    async def test_anonymous_share_returns_count(self, unit_env):
        share = await unit_env.get(SharePostUseCase)
        post = await _seed(unit_env, share_count=4)

        response = await share.execute(SharePostRequest(post_id=post.id, platform="email"))

        assert response.share_count == 5
