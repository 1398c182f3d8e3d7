"""Toggle interaction engine.

Likes, bookmarks and comment likes share one toggle primitive: the reaction
record's existence is the state, and every record mutation is paired with a
relative delta on the target's denormalized counter.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from engage.domain.error import AlreadyExistsError, OperationNotAllowedError
from engage.domain.model import Reaction, Share
from engage.domain.repository import ReactionRepository, ShareRepository
from engage.domain.value import (
    CommentId,
    Handle,
    PostId,
    ReactionId,
    ReactionKind,
    ShareId,
    TargetType,
)
from engage.util.time import utcnow

from .base import Service
from .comment_service import CommentService
from .post_service import PostService
from .user_service import UserService


@dataclass(frozen=True)
class ToggleResult:
    """Outcome of a toggle: whether the reaction is now held, and the new count."""

    active: bool
    count: int


@dataclass(frozen=True)
class PostInteraction:
    """Whether a user has liked and bookmarked a post."""

    is_liked: bool
    is_bookmarked: bool


class ReactionService(Service):
    """Domain service for reactions and shares."""

    def __init__(
        self,
        reaction_repository: ReactionRepository,
        share_repository: ShareRepository,
        post_service: PostService,
        comment_service: CommentService,
        user_service: UserService,
    ) -> None:
        """Initialize reaction service.

        Args:
            reaction_repository: Reaction repository
            share_repository: Share repository
            post_service: Post domain service
            comment_service: Comment domain service
            user_service: User domain service
        """
        self.reaction_repository = reaction_repository
        self.share_repository = share_repository
        self.post_service = post_service
        self.comment_service = comment_service
        self.user_service = user_service

    async def toggle(
        self, target_id: UUID, kind: ReactionKind, user_handle: Handle
    ) -> ToggleResult:
        """Toggle a user's reaction on a post or comment.

        Args:
            target_id: Post ID or comment ID, depending on kind
            kind: Reaction kind
            user_handle: Reacting user's handle

        Returns:
            New reaction state and counter value

        Raises:
            NotFoundError: If the user or target does not exist
            OperationNotAllowedError: If the target does not accept this reaction
            AlreadyExistsError: If a concurrent request inserted the same reaction
        """
        with logfire.span(
            "reaction_service.toggle",
            target_id=str(target_id),
            kind=kind.value,
            user_handle=user_handle.root,
        ):
            await self.user_service.get_by_handle(user_handle)

            if kind.target_type == TargetType.POST:
                post = await self.post_service.get_post(PostId(target_id))
                if not post.allows(kind):
                    logfire.warn(
                        "Reaction disabled on post",
                        post_id=str(target_id),
                        kind=kind.value,
                    )
                    raise OperationNotAllowedError(
                        f"{kind.value} is not allowed on this post"
                    )
                current = post.counter_value(kind.counter)
            else:
                comment = await self.comment_service.get_comment(CommentId(target_id))
                if not comment.is_published:
                    logfire.warn(
                        "Reaction on unpublished comment", comment_id=str(target_id)
                    )
                    raise OperationNotAllowedError(
                        "Cannot react to a comment that is not published"
                    )
                current = comment.counter_value(kind.counter)

            return await self._apply_toggle(kind, target_id, user_handle, current)

    async def _apply_toggle(
        self,
        kind: ReactionKind,
        target_id: UUID,
        user_handle: Handle,
        current_count: int,
    ) -> ToggleResult:
        existing = await self.reaction_repository.find_by_target_and_user(
            kind, target_id, user_handle
        )

        if existing:
            await self.reaction_repository.delete(kind, existing.id)
            delta = -1
        else:
            reaction = Reaction(
                id=ReactionId(uuid4()),
                kind=kind,
                target_id=target_id,
                user_handle=user_handle,
                created_at=utcnow(),
            )
            try:
                await self.reaction_repository.save(reaction)
            except IntegrityError:
                logfire.warn(
                    "Duplicate reaction attempt",
                    kind=kind.value,
                    target_id=str(target_id),
                    user_handle=user_handle.root,
                )
                raise AlreadyExistsError(f"{kind.value} already recorded")
            delta = 1

        deltas = {kind.counter: delta}
        if kind.target_type == TargetType.POST:
            await self.post_service.adjust_counters(PostId(target_id), deltas)
        else:
            await self.comment_service.adjust_counters(CommentId(target_id), deltas)

        result = ToggleResult(active=delta > 0, count=max(current_count + delta, 0))
        logfire.info(
            "Reaction toggled",
            kind=kind.value,
            target_id=str(target_id),
            user_handle=user_handle.root,
            active=result.active,
            count=result.count,
        )
        return result

    async def like_post(self, post_id: PostId, user_handle: Handle) -> ToggleResult:
        """Toggle a like on a post."""
        return await self.toggle(post_id, ReactionKind.LIKE, user_handle)

    async def bookmark_post(
        self, post_id: PostId, user_handle: Handle
    ) -> ToggleResult:
        """Toggle a bookmark on a post."""
        return await self.toggle(post_id, ReactionKind.BOOKMARK, user_handle)

    async def like_comment(
        self, comment_id: CommentId, user_handle: Handle
    ) -> ToggleResult:
        """Toggle a like on a comment."""
        return await self.toggle(comment_id, ReactionKind.COMMENT_LIKE, user_handle)

    async def share_post(
        self,
        post_id: PostId,
        platform: str,
        user_handle: Optional[Handle] = None,
    ) -> int:
        """Record a share of a post.

        Shares are not deduplicated and may be anonymous.

        Args:
            post_id: Post ID
            platform: Platform the post was shared to
            user_handle: Sharing user's handle, None for anonymous shares

        Returns:
            The post's share count after this share

        Raises:
            NotFoundError: If the post does not exist
            OperationNotAllowedError: If the post disallows shares
        """
        with logfire.span(
            "reaction_service.share_post", post_id=str(post_id), platform=platform
        ):
            post = await self.post_service.get_post(post_id)
            if not post.allow_shares:
                logfire.warn("Shares disabled on post", post_id=str(post_id))
                raise OperationNotAllowedError("Sharing is not allowed on this post")

            share = Share(
                id=ShareId(uuid4()),
                post_id=post_id,
                user_handle=user_handle,
                platform=platform,
                shared_at=utcnow(),
            )
            await self.share_repository.save(share)
            await self.post_service.adjust_counters(post_id, {"share_count": 1})

            count = post.share_count + 1
            logfire.info(
                "Post shared", post_id=str(post_id), platform=platform, count=count
            )
            return count

    async def get_post_interaction(
        self, post_id: PostId, user_handle: Optional[Handle]
    ) -> PostInteraction:
        """Report whether a user has liked and bookmarked a post.

        Anonymous callers get both flags False.

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span(
            "reaction_service.get_post_interaction", post_id=str(post_id)
        ):
            await self.post_service.get_post(post_id)
            if user_handle is None:
                return PostInteraction(is_liked=False, is_bookmarked=False)

            like = await self.reaction_repository.find_by_target_and_user(
                ReactionKind.LIKE, post_id, user_handle
            )
            bookmark = await self.reaction_repository.find_by_target_and_user(
                ReactionKind.BOOKMARK, post_id, user_handle
            )
            return PostInteraction(
                is_liked=like is not None, is_bookmarked=bookmark is not None
            )

    async def get_liked_comments(
        self, user_handle: Handle, comment_ids: list[CommentId]
    ) -> dict[CommentId, bool]:
        """Check which comments a user has liked.

        Args:
            user_handle: User handle
            comment_ids: Comment IDs to check

        Returns:
            Dictionary mapping comment ID to whether the user liked it
        """
        if not comment_ids:
            return {}

        # Batch query to fetch all likes at once (avoid N+1)
        likes = await self.reaction_repository.find_by_user_and_targets(
            ReactionKind.COMMENT_LIKE, user_handle, comment_ids
        )
        liked_ids = {UUID(str(like.target_id)) for like in likes}
        return {cid: UUID(str(cid)) in liked_ids for cid in comment_ids}
