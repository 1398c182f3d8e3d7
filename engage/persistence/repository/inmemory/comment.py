"""In-memory comment repository for testing."""

from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from engage.domain.model.comment import Comment
from engage.domain.repository.comment import COMMENT_COUNTERS, CommentRepository
from engage.domain.value import CommentId, CommentStatus, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Insertion order breaks ties between comments created in the same instant.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self._sequence: dict[CommentId, int] = {}

    def _order_key(self, comment: Comment) -> tuple[datetime, int]:
        return comment.created_at, self._sequence[comment.id]

    def _visible(self, comment: Comment, include_deleted: bool) -> bool:
        return include_deleted or comment.status == CommentStatus.PUBLISHED

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    def _top_level(self, post_id: PostId, include_deleted: bool) -> list[Comment]:
        return [
            c
            for c in self._comments.values()
            if c.post_id == post_id
            and c.parent_id is None
            and self._visible(c, include_deleted)
        ]

    async def find_top_level(
        self,
        post_id: PostId,
        include_deleted: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[Comment]:
        """Find top-level comments of a post, newest first."""
        comments = sorted(
            self._top_level(post_id, include_deleted),
            key=self._order_key,
            reverse=True,
        )
        end = None if limit is None else offset + limit
        return comments[offset:end]

    async def count_top_level(
        self, post_id: PostId, include_deleted: bool = False
    ) -> int:
        """Count top-level comments of a post."""
        return len(self._top_level(post_id, include_deleted))

    async def find_children(
        self,
        parent_id: CommentId,
        include_deleted: bool = False,
    ) -> list[Comment]:
        """Find direct replies to a comment, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.parent_id == parent_id and self._visible(c, include_deleted)
        ]
        return sorted(comments, key=self._order_key)

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._sequence.setdefault(comment.id, len(self._sequence))
        self._comments[comment.id] = comment
        return comment

    async def adjust_counters(
        self,
        comment_id: CommentId,
        deltas: Mapping[str, int],
        touched_at: datetime,
    ) -> None:
        """Apply counter deltas, clamped at zero."""
        unknown = set(deltas) - COMMENT_COUNTERS
        if unknown:
            raise ValueError(f"Unknown counters: {sorted(unknown)}")

        comment = self._comments.get(comment_id)
        if comment is None:
            return
        update: dict[str, object] = {
            name: max(comment.counter_value(name) + delta, 0)
            for name, delta in deltas.items()
        }
        update["updated_at"] = touched_at
        self._comments[comment_id] = comment.model_copy(update=update)

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        touched_at: datetime,
    ) -> None:
        """Set the status of a comment."""
        comment = self._comments.get(comment_id)
        if comment is None:
            return
        self._comments[comment_id] = comment.model_copy(
            update={"status": status, "updated_at": touched_at}
        )
