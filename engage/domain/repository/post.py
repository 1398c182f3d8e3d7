"""Post repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from engage.domain.model.post import Post
from engage.domain.model.stats import PostStats
from engage.domain.value import Handle, ModerationStatus, PostId

POST_COUNTERS = frozenset(
    {
        "like_count",
        "bookmark_count",
        "comment_count",
        "share_count",
        "view_count",
        "flag_count",
    }
)


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def adjust_counters(
        self,
        post_id: PostId,
        deltas: Mapping[str, int],
        touched_at: datetime,
    ) -> None:
        """Atomically apply relative deltas to denormalized counters.

        Each counter is updated as ``counter = counter + delta`` in a single
        statement and never drops below zero. ``updated_at`` is set to
        ``touched_at`` in the same statement.

        Args:
            post_id: The post ID
            deltas: Counter name to signed delta (names from POST_COUNTERS)
            touched_at: New value for updated_at
        """
        pass

    @abstractmethod
    async def update_moderation(
        self,
        post_id: PostId,
        status: ModerationStatus,
        moderated_by: Optional[Handle],
        moderated_at: datetime,
        notes: Optional[str],
    ) -> None:
        """Patch the moderation fields of a post and bump updated_at.

        Args:
            post_id: The post ID
            status: New moderation status
            moderated_by: Reviewer handle (None for automatic escalation)
            moderated_at: Time of the transition
            notes: Moderation notes (None clears them)
        """
        pass

    @abstractmethod
    async def summarize(
        self, high_flag_count: int, recent_since: datetime
    ) -> PostStats:
        """Aggregate counts and counter totals over every post.

        Args:
            high_flag_count: Posts with at least this many reports count as
                high-flag posts
            recent_since: Posts created at or after this time count as recent

        Returns:
            Post stats; unset moderation statuses are counted as PENDING
        """
        pass
