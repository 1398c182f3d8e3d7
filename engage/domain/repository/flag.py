"""Flag repository interfaces."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from engage.domain.model.flag import CommentFlag, Flag
from engage.domain.value import (
    CommentId,
    FlagId,
    FlagReason,
    FlagStatus,
    Handle,
    PostId,
)


class FlagRepository(ABC):
    """Repository for post abuse reports.

    Defines the contract for flag persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, flag_id: FlagId) -> Optional[Flag]:
        """Find a flag by ID.

        Args:
            flag_id: The flag's unique identifier

        Returns:
            The flag if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post_and_user(
        self, post_id: PostId, user_handle: Handle
    ) -> List[Flag]:
        """Find every flag a user filed against a post.

        Args:
            post_id: The post ID
            user_handle: The reporter's handle

        Returns:
            Flags in any status
        """
        pass

    @abstractmethod
    async def find_by_post(
        self, post_id: PostId, status: Optional[FlagStatus] = None
    ) -> List[Flag]:
        """Find flags against a post, optionally filtered by status."""
        pass

    @abstractmethod
    async def find_all(
        self,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Flag]:
        """Find flags matching the given filters, newest first.

        Args:
            status: Only flags with this status
            post_id: Only flags against this post
            reason: Only flags with this reason
            limit: Maximum number of flags to return (None for all)
            offset: Number of flags to skip

        Returns:
            Matching flags ordered by created_at descending
        """
        pass

    @abstractmethod
    async def count_all(
        self,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
    ) -> int:
        """Count flags matching the given filters."""
        pass

    @abstractmethod
    async def save(self, flag: Flag) -> Flag:
        """Insert a flag.

        Raises:
            IntegrityError: If the reporter already has a pending flag on the post
        """
        pass

    @abstractmethod
    async def update_review(
        self,
        flag_id: FlagId,
        status: FlagStatus,
        reviewed_at: datetime,
        reviewed_by: Handle,
    ) -> Optional[Flag]:
        """Move a PENDING flag to its reviewed status.

        The update only matches a flag that is still PENDING, so a flag is
        reviewed at most once even under concurrent reviewers.

        Args:
            flag_id: The flag ID
            status: RESOLVED or DISMISSED
            reviewed_at: Review time
            reviewed_by: Reviewer handle

        Returns:
            The updated flag, or None if it was no longer PENDING
        """
        pass

    @abstractmethod
    async def resolve_pending_for_post(
        self,
        post_id: PostId,
        reviewed_at: datetime,
        reviewed_by: Handle,
    ) -> int:
        """Resolve every PENDING flag on a post.

        Returns:
            Number of flags resolved
        """
        pass


class CommentFlagRepository(ABC):
    """Repository for comment abuse reports."""

    @abstractmethod
    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_handle: Handle
    ) -> Optional[CommentFlag]:
        """Find a user's flag on a comment.

        Args:
            comment_id: The comment ID
            user_handle: The reporter's handle

        Returns:
            The flag if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, flag: CommentFlag) -> CommentFlag:
        """Insert a comment flag.

        Raises:
            IntegrityError: If the user already flagged the comment
        """
        pass
