"""Unit tests for ReactionService."""

from datetime import timedelta
from uuid import uuid4

import pytest

from engage.domain.error import NotFoundError, OperationNotAllowedError
from engage.domain.repository import (
    CommentRepository,
    PostRepository,
    ReactionRepository,
    ShareRepository,
    UserRepository,
)
from engage.domain.service import ReactionService
from engage.domain.value import (
    CommentId,
    CommentStatus,
    Handle,
    PostId,
    ReactionKind,
)
from engage.util.time import utcnow
from tests.conftest import make_comment, make_post, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no database needed
unit_env = create_env_fixture()

READER = Handle(root="reader")
STALE = utcnow() - timedelta(days=1)


async def _seed(unit_env, **post_fields):
    await (await unit_env.get(UserRepository)).save(make_user("reader"))
    post = make_post(**post_fields)
    await (await unit_env.get(PostRepository)).save(post)
    return post


class TestTogglePostReactions:
    """Tests for like_post and bookmark_post."""

    @pytest.mark.asyncio
    async def test_like_creates_reaction_and_increments_count(self, unit_env):
        """First like should create the record and bump like_count."""
        # Arrange
        service = await unit_env.get(ReactionService)
        reaction_repo = await unit_env.get(ReactionRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env, like_count=3, updated_at=STALE)

        # Act
        result = await service.like_post(post.id, READER)

        # Assert
        assert result.active is True
        assert result.count == 4
        assert await reaction_repo.find_by_target_and_user(
            ReactionKind.LIKE, post.id, READER
        )
        stored = await post_repo.find_by_id(post.id)
        assert stored.like_count == 4
        assert stored.updated_at > STALE

    @pytest.mark.asyncio
    async def test_double_toggle_returns_to_original_state(self, unit_env):
        """Liking twice should remove the like and restore the count."""
        # Arrange
        service = await unit_env.get(ReactionService)
        reaction_repo = await unit_env.get(ReactionRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env, like_count=3)

        # Act
        await service.like_post(post.id, READER)
        liked = await post_repo.find_by_id(post.id)
        await post_repo.save(liked.model_copy(update={"updated_at": STALE}))
        result = await service.like_post(post.id, READER)

        # Assert
        assert result.active is False
        assert result.count == 3
        assert (
            await reaction_repo.find_by_target_and_user(
                ReactionKind.LIKE, post.id, READER
            )
            is None
        )
        stored = await post_repo.find_by_id(post.id)
        assert stored.like_count == 3
        assert stored.updated_at > STALE

    @pytest.mark.asyncio
    async def test_counter_matches_records_across_users(self, unit_env):
        """like_count should equal the number of live like records."""
        # Arrange
        service = await unit_env.get(ReactionService)
        user_repo = await unit_env.get(UserRepository)
        reaction_repo = await unit_env.get(ReactionRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)
        for handle in ("alice", "bob", "carol"):
            await user_repo.save(make_user(handle))

        # Act
        for handle in ("alice", "bob", "carol"):
            await service.like_post(post.id, Handle(root=handle))
        await service.like_post(post.id, Handle(root="bob"))

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert stored.like_count == 2
        assert await reaction_repo.count_by_target(ReactionKind.LIKE, post.id) == 2

    @pytest.mark.asyncio
    async def test_bookmark_is_independent_of_like(self, unit_env):
        """Bookmarking should only touch bookmark_count."""
        # Arrange
        service = await unit_env.get(ReactionService)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env)

        # Act
        result = await service.bookmark_post(post.id, READER)

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert result.active is True
        assert stored.bookmark_count == 1
        assert stored.like_count == 0

    @pytest.mark.asyncio
    async def test_like_disabled_raises_and_writes_nothing(self, unit_env):
        """A post with likes disabled should reject the toggle."""
        # Arrange
        service = await unit_env.get(ReactionService)
        reaction_repo = await unit_env.get(ReactionRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env, allow_likes=False)

        # Act & Assert
        with pytest.raises(OperationNotAllowedError):
            await service.like_post(post.id, READER)

        assert (
            await reaction_repo.find_by_target_and_user(
                ReactionKind.LIKE, post.id, READER
            )
            is None
        )
        assert (await post_repo.find_by_id(post.id)).like_count == 0

    @pytest.mark.asyncio
    async def test_like_missing_post_raises_not_found(self, unit_env):
        """Toggling on an unknown post should raise NotFoundError."""
        service = await unit_env.get(ReactionService)
        await (await unit_env.get(UserRepository)).save(make_user("reader"))

        with pytest.raises(NotFoundError):
            await service.like_post(PostId(uuid4()), READER)

    @pytest.mark.asyncio
    async def test_like_by_unknown_user_raises_not_found(self, unit_env):
        """The reacting user must exist."""
        service = await unit_env.get(ReactionService)
        post = make_post()
        await (await unit_env.get(PostRepository)).save(post)

        with pytest.raises(NotFoundError, match="User not found"):
            await service.like_post(post.id, Handle(root="ghost"))


class TestCommentLike:
    """Tests for like_comment."""

    @pytest.mark.asyncio
    async def test_like_then_unlike_leaves_no_record(self, unit_env):
        """Comment like count should go 0 -> 1 -> 0."""
        # Arrange
        service = await unit_env.get(ReactionService)
        comment_repo = await unit_env.get(CommentRepository)
        reaction_repo = await unit_env.get(ReactionRepository)
        post = await _seed(unit_env)
        comment = make_comment(post.id)
        await comment_repo.save(comment)

        # Act
        liked = await service.like_comment(comment.id, READER)
        after_like = (await comment_repo.find_by_id(comment.id)).like_count
        unliked = await service.like_comment(comment.id, READER)

        # Assert
        assert liked.active is True and liked.count == 1
        assert after_like == 1
        assert unliked.active is False and unliked.count == 0
        assert (await comment_repo.find_by_id(comment.id)).like_count == 0
        assert (
            await reaction_repo.find_by_target_and_user(
                ReactionKind.COMMENT_LIKE, comment.id, READER
            )
            is None
        )

    @pytest.mark.asyncio
    async def test_like_deleted_comment_not_allowed(self, unit_env):
        """Deleted comments cannot be liked."""
        service = await unit_env.get(ReactionService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await _seed(unit_env)
        comment = make_comment(post.id, status=CommentStatus.DELETED)
        await comment_repo.save(comment)

        with pytest.raises(OperationNotAllowedError):
            await service.like_comment(comment.id, READER)

    @pytest.mark.asyncio
    async def test_like_missing_comment_raises_not_found(self, unit_env):
        service = await unit_env.get(ReactionService)
        await _seed(unit_env)

        with pytest.raises(NotFoundError):
            await service.like_comment(CommentId(uuid4()), READER)

    @pytest.mark.asyncio
    async def test_get_liked_comments(self, unit_env):
        """Batch lookup should report exactly the liked comments."""
        # Arrange
        service = await unit_env.get(ReactionService)
        comment_repo = await unit_env.get(CommentRepository)
        post = await _seed(unit_env)
        first = make_comment(post.id)
        second = make_comment(post.id)
        await comment_repo.save(first)
        await comment_repo.save(second)
        await service.like_comment(first.id, READER)

        # Act
        liked = await service.get_liked_comments(READER, [first.id, second.id])

        # Assert
        assert liked == {first.id: True, second.id: False}
        assert await service.get_liked_comments(READER, []) == {}


class TestSharePost:
    """Tests for share_post."""

    @pytest.mark.asyncio
    async def test_shares_are_not_deduplicated(self, unit_env):
        """Every share is recorded, including anonymous ones."""
        # Arrange
        service = await unit_env.get(ReactionService)
        share_repo = await unit_env.get(ShareRepository)
        post_repo = await unit_env.get(PostRepository)
        post = await _seed(unit_env, updated_at=STALE)

        # Act
        first = await service.share_post(post.id, "mastodon", READER)
        second = await service.share_post(post.id, "mastodon", READER)
        third = await service.share_post(post.id, "email")

        # Assert
        assert (first, second) == (1, 2)
        assert third == 3
        assert await share_repo.count_by_post(post.id) == 3
        stored = await post_repo.find_by_id(post.id)
        assert stored.share_count == 3
        assert stored.updated_at > STALE

    @pytest.mark.asyncio
    async def test_share_disabled_raises(self, unit_env):
        service = await unit_env.get(ReactionService)
        share_repo = await unit_env.get(ShareRepository)
        post = await _seed(unit_env, allow_shares=False)

        with pytest.raises(OperationNotAllowedError):
            await service.share_post(post.id, "email")
        assert await share_repo.count_by_post(post.id) == 0


class TestPostInteraction:
    """Tests for get_post_interaction."""

    @pytest.mark.asyncio
    async def test_reports_like_and_bookmark_state(self, unit_env):
        service = await unit_env.get(ReactionService)
        post = await _seed(unit_env)
        await service.bookmark_post(post.id, READER)

        interaction = await service.get_post_interaction(post.id, READER)

        assert interaction.is_liked is False
        assert interaction.is_bookmarked is True

    @pytest.mark.asyncio
    async def test_anonymous_gets_false(self, unit_env):
        service = await unit_env.get(ReactionService)
        post = await _seed(unit_env)
        await service.like_post(post.id, READER)

        interaction = await service.get_post_interaction(post.id, None)

        assert interaction.is_liked is False
        assert interaction.is_bookmarked is False
