"""In-memory flag repositories for testing."""

from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError

from engage.domain.model.flag import CommentFlag, Flag
from engage.domain.repository.flag import CommentFlagRepository, FlagRepository
from engage.domain.value import (
    CommentId,
    FlagId,
    FlagReason,
    FlagStatus,
    Handle,
    PostId,
)


class InMemoryFlagRepository(FlagRepository):
    """In-memory implementation of FlagRepository for testing.

    Mirrors the partial unique index on pending flags per reporter and post.
    """

    def __init__(self) -> None:
        self._flags: dict[FlagId, Flag] = {}

    async def find_by_id(self, flag_id: FlagId) -> Optional[Flag]:
        """Find a flag by ID."""
        return self._flags.get(flag_id)

    async def find_by_post_and_user(
        self, post_id: PostId, user_handle: Handle
    ) -> list[Flag]:
        """Find every flag a user filed against a post."""
        return [
            f
            for f in self._flags.values()
            if f.post_id == post_id and f.user_handle == user_handle
        ]

    async def find_by_post(
        self, post_id: PostId, status: Optional[FlagStatus] = None
    ) -> list[Flag]:
        """Find flags against a post."""
        return await self.find_all(status=status, post_id=post_id)

    def _matching(
        self,
        status: Optional[FlagStatus],
        post_id: Optional[PostId],
        reason: Optional[FlagReason],
    ) -> list[Flag]:
        return [
            f
            for f in self._flags.values()
            if (status is None or f.status == status)
            and (post_id is None or f.post_id == post_id)
            and (reason is None or f.reason == reason)
        ]

    async def find_all(
        self,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Flag]:
        """Find flags matching the given filters, newest first."""
        flags = sorted(
            self._matching(status, post_id, reason),
            key=lambda f: f.created_at,
            reverse=True,
        )
        end = None if limit is None else offset + limit
        return flags[offset:end]

    async def count_all(
        self,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
    ) -> int:
        """Count flags matching the given filters."""
        return len(self._matching(status, post_id, reason))

    async def save(self, flag: Flag) -> Flag:
        """Save a flag.

        Raises:
            IntegrityError: If the reporter already has a pending flag on the post
        """
        if flag.is_pending and any(
            f.is_pending for f in await self.find_by_post_and_user(
                flag.post_id, flag.user_handle
            )
        ):
            raise IntegrityError("Duplicate pending flag", None, Exception())

        self._flags[flag.id] = flag
        return flag

    async def update_review(
        self,
        flag_id: FlagId,
        status: FlagStatus,
        reviewed_at: datetime,
        reviewed_by: Handle,
    ) -> Optional[Flag]:
        """Move a PENDING flag to its reviewed status."""
        flag = self._flags.get(flag_id)
        if flag is None or not flag.is_pending:
            return None
        reviewed = flag.model_copy(
            update={
                "status": status,
                "reviewed_at": reviewed_at,
                "reviewed_by": reviewed_by,
            }
        )
        self._flags[flag_id] = reviewed
        return reviewed

    async def resolve_pending_for_post(
        self,
        post_id: PostId,
        reviewed_at: datetime,
        reviewed_by: Handle,
    ) -> int:
        """Resolve every PENDING flag on a post."""
        pending = await self.find_all(status=FlagStatus.PENDING, post_id=post_id)
        for flag in pending:
            await self.update_review(
                flag.id, FlagStatus.RESOLVED, reviewed_at, reviewed_by
            )
        return len(pending)


class InMemoryCommentFlagRepository(CommentFlagRepository):
    """In-memory implementation of CommentFlagRepository for testing."""

    def __init__(self) -> None:
        self._flags: list[CommentFlag] = []

    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_handle: Handle
    ) -> Optional[CommentFlag]:
        """Find a user's flag on a comment."""
        for flag in self._flags:
            if flag.comment_id == comment_id and flag.user_handle == user_handle:
                return flag
        return None

    async def save(self, flag: CommentFlag) -> CommentFlag:
        """Save a comment flag.

        Raises:
            IntegrityError: If the user already flagged the comment
        """
        if await self.find_by_comment_and_user(flag.comment_id, flag.user_handle):
            raise IntegrityError("Duplicate comment flag", None, Exception())
        self._flags.append(flag)
        return flag
