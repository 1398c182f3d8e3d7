"""Comment repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import List, Optional

from engage.domain.model.comment import Comment
from engage.domain.value import CommentId, CommentStatus, PostId

COMMENT_COUNTERS = frozenset({"like_count", "flag_count"})


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        post_id: PostId,
        include_deleted: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Comment]:
        """Find top-level comments of a post, newest first.

        Args:
            post_id: The post ID
            include_deleted: Whether to include soft-deleted comments
            limit: Maximum number of comments to return (None for all)
            offset: Number of comments to skip

        Returns:
            List of comments without a parent
        """
        pass

    @abstractmethod
    async def count_top_level(
        self, post_id: PostId, include_deleted: bool = False
    ) -> int:
        """Count the top-level comments find_top_level would return unpaged."""
        pass

    @abstractmethod
    async def find_children(
        self,
        parent_id: CommentId,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find direct replies to a comment, oldest first.

        Args:
            parent_id: The parent comment ID
            include_deleted: Whether to include soft-deleted comments

        Returns:
            List of child comments
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def adjust_counters(
        self,
        comment_id: CommentId,
        deltas: Mapping[str, int],
        touched_at: datetime,
    ) -> None:
        """Atomically apply relative deltas to comment counters.

        Args:
            comment_id: The comment ID
            deltas: Counter name to signed delta (names from COMMENT_COUNTERS)
            touched_at: New value for updated_at
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        touched_at: datetime,
    ) -> None:
        """Set the status of a comment.

        Args:
            comment_id: The comment ID
            status: New status
            touched_at: New value for updated_at
        """
        pass
