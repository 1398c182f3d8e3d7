"""Comment domain service."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Optional
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from engage.domain.error import (
    AlreadyExistsError,
    ForbiddenError,
    InvalidParentError,
    NotFoundError,
    OperationNotAllowedError,
)
from engage.domain.model import Comment, CommentFlag, Page
from engage.domain.repository import CommentFlagRepository, CommentRepository
from engage.domain.value import (
    CommentFlagId,
    CommentId,
    CommentStatus,
    FlagReason,
    Handle,
    PostId,
)
from engage.util.time import utcnow

from .base import Service
from .post_service import PostService
from .user_service import UserService


@dataclass
class CommentThread:
    """A top-level comment with its replies (oldest first)."""

    comment: Comment
    replies: list[Comment] = field(default_factory=list)


class CommentService(Service):
    """Domain service for threaded comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        comment_flag_repository: CommentFlagRepository,
        post_service: PostService,
        user_service: UserService,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            comment_flag_repository: Comment flag repository
            post_service: Post domain service
            user_service: User domain service
        """
        self.comment_repository = comment_repository
        self.comment_flag_repository = comment_flag_repository
        self.post_service = post_service
        self.user_service = user_service

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            The comment, whatever its status

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.get_comment", comment_id=str(comment_id)):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))
            return comment

    async def adjust_counters(
        self, comment_id: CommentId, deltas: Mapping[str, int]
    ) -> None:
        """Apply relative counter deltas and bump updated_at.

        Args:
            comment_id: Comment ID
            deltas: Counter name to signed delta
        """
        with logfire.span(
            "comment_service.adjust_counters",
            comment_id=str(comment_id),
            deltas=dict(deltas),
        ):
            await self.comment_repository.adjust_counters(comment_id, deltas, utcnow())

    async def create_comment(
        self,
        post_id: PostId,
        content: str,
        author_handle: Handle,
        parent_id: Optional[CommentId] = None,
    ) -> Comment:
        """Create a comment on a post or reply to a top-level comment.

        Args:
            post_id: Post ID
            content: Comment text
            author_handle: Author handle
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            NotFoundError: If the author, post or parent does not exist
            OperationNotAllowedError: If the post disallows comments
            InvalidParentError: If the parent is on another post or is a reply
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_handle=author_handle.root,
            parent_id=str(parent_id) if parent_id else None,
        ):
            await self.user_service.get_by_handle(author_handle)
            post = await self.post_service.get_post(post_id)
            if not post.allow_comments:
                logfire.warn("Comments disabled on post", post_id=str(post_id))
                raise OperationNotAllowedError("Comments are not allowed on this post")

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=str(parent_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_id))
                if parent.post_id != post_id:
                    logfire.warn(
                        "Parent comment does not belong to post",
                        parent_id=str(parent_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise InvalidParentError(
                        "Parent comment does not belong to this post"
                    )
                if parent.is_reply:
                    logfire.warn("Reply to a reply", parent_id=str(parent_id))
                    raise InvalidParentError("Replies can only be one level deep")

            now = utcnow()
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_handle=author_handle,
                content=content,
                parent_id=parent_id,
                status=CommentStatus.PUBLISHED,
                created_at=now,
                updated_at=now,
            )
            saved = await self.comment_repository.save(comment)
            await self.post_service.adjust_counters(post_id, {"comment_count": 1})

            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                author_handle=author_handle.root,
                is_reply=saved.is_reply,
            )
            return saved

    async def delete_comment(
        self, comment_id: CommentId, requester_handle: Handle
    ) -> Comment:
        """Soft-delete a comment.

        Replies are left in place and the post's comment count is unchanged.

        Args:
            comment_id: Comment ID
            requester_handle: Handle of the user asking for deletion

        Returns:
            The comment in DELETED status

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the requester is not the author
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            requester_handle=requester_handle.root,
        ):
            comment = await self.get_comment(comment_id)
            if comment.author_handle != requester_handle:
                logfire.warn(
                    "Comment deletion by non-author",
                    comment_id=str(comment_id),
                    requester_handle=requester_handle.root,
                )
                raise ForbiddenError("Only the author can delete this comment")

            if comment.status == CommentStatus.DELETED:
                logfire.info("Comment already deleted", comment_id=str(comment_id))
                return comment

            now = utcnow()
            await self.comment_repository.update_status(
                comment_id, CommentStatus.DELETED, now
            )
            logfire.info("Comment deleted", comment_id=str(comment_id))
            return comment.model_copy(
                update={"status": CommentStatus.DELETED, "updated_at": now}
            )

    async def flag_comment(
        self,
        comment_id: CommentId,
        reason: FlagReason,
        user_handle: Handle,
        description: Optional[str] = None,
    ) -> CommentFlag:
        """Report a comment.

        Comments have no moderation state machine, so this only records the
        report and bumps the comment's flag count.

        Raises:
            NotFoundError: If the user or comment does not exist
            OperationNotAllowedError: If the comment is not published
            AlreadyExistsError: If the user already reported this comment
        """
        with logfire.span(
            "comment_service.flag_comment",
            comment_id=str(comment_id),
            user_handle=user_handle.root,
            reason=reason.value,
        ):
            await self.user_service.get_by_handle(user_handle)
            comment = await self.get_comment(comment_id)
            if not comment.is_published:
                logfire.warn("Flag on unpublished comment", comment_id=str(comment_id))
                raise OperationNotAllowedError(
                    "Cannot flag a comment that is not published"
                )

            existing = await self.comment_flag_repository.find_by_comment_and_user(
                comment_id, user_handle
            )
            if existing:
                logfire.warn(
                    "Duplicate comment flag",
                    comment_id=str(comment_id),
                    user_handle=user_handle.root,
                )
                raise AlreadyExistsError("You have already flagged this comment")

            flag = CommentFlag(
                id=CommentFlagId(uuid4()),
                comment_id=comment_id,
                user_handle=user_handle,
                reason=reason,
                description=description,
                created_at=utcnow(),
            )
            try:
                saved = await self.comment_flag_repository.save(flag)
            except IntegrityError:
                logfire.warn(
                    "Duplicate comment flag attempt",
                    comment_id=str(comment_id),
                    user_handle=user_handle.root,
                )
                raise AlreadyExistsError("You have already flagged this comment")

            await self.adjust_counters(comment_id, {"flag_count": 1})
            logfire.info(
                "Comment flagged",
                comment_id=str(comment_id),
                flag_id=str(saved.id),
                flag_count=comment.flag_count + 1,
            )
            return saved

    async def get_comment_threads(
        self,
        post_id: PostId,
        include_hidden: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Page[CommentThread]:
        """Get a page of the comment threads of a post.

        Top-level comments come newest first, replies under each oldest first.
        Deleted comments are omitted unless include_hidden is set. Paging
        counts threads; each thread carries all of its replies.

        Args:
            post_id: Post ID
            include_hidden: Whether to include deleted comments
            limit: Maximum number of threads (None for all)
            offset: Number of threads to skip

        Returns:
            One thread per top-level comment in the page

        Raises:
            NotFoundError: If the post does not exist
        """
        with logfire.span(
            "comment_service.get_comment_threads",
            post_id=str(post_id),
            include_hidden=include_hidden,
        ):
            await self.post_service.get_post(post_id)
            total = await self.comment_repository.count_top_level(
                post_id, include_deleted=include_hidden
            )
            top_level = await self.comment_repository.find_top_level(
                post_id, include_deleted=include_hidden, limit=limit, offset=offset
            )
            threads = []
            for comment in top_level:
                replies = await self.comment_repository.find_children(
                    comment.id, include_deleted=include_hidden
                )
                threads.append(CommentThread(comment=comment, replies=replies))

            logfire.info(
                "Comment threads retrieved",
                post_id=str(post_id),
                count=len(threads),
                total=total,
            )
            return Page(items=threads, total=total, offset=offset)

    async def get_replies(self, parent_id: CommentId) -> list[Comment]:
        """Get the published replies to a comment, oldest first.

        Replies stay reachable after their parent is deleted.

        Raises:
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span("comment_service.get_replies", parent_id=str(parent_id)):
            await self.get_comment(parent_id)
            return await self.comment_repository.find_children(parent_id)
