"""In-memory post repository for testing."""

from collections import Counter
from collections.abc import Mapping
from datetime import datetime
from typing import Optional

from engage.domain.model.post import Post
from engage.domain.model.stats import PostStats
from engage.domain.repository.post import POST_COUNTERS, PostRepository
from engage.domain.value import Handle, ModerationStatus, PostId


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self) -> None:
        self._posts: dict[PostId, Post] = {}

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def save(self, post: Post) -> Post:
        """Save a post."""
        self._posts[post.id] = post
        return post

    async def adjust_counters(
        self,
        post_id: PostId,
        deltas: Mapping[str, int],
        touched_at: datetime,
    ) -> None:
        """Apply counter deltas, clamped at zero."""
        unknown = set(deltas) - POST_COUNTERS
        if unknown:
            raise ValueError(f"Unknown counters: {sorted(unknown)}")

        post = self._posts.get(post_id)
        if post is None:
            return
        update: dict[str, object] = {
            name: max(post.counter_value(name) + delta, 0)
            for name, delta in deltas.items()
        }
        update["updated_at"] = touched_at
        self._posts[post_id] = post.model_copy(update=update)

    async def update_moderation(
        self,
        post_id: PostId,
        status: ModerationStatus,
        moderated_by: Optional[Handle],
        moderated_at: datetime,
        notes: Optional[str],
    ) -> None:
        """Patch the moderation fields of a post."""
        post = self._posts.get(post_id)
        if post is None:
            return
        self._posts[post_id] = post.model_copy(
            update={
                "moderation_status": status,
                "moderated_by": moderated_by,
                "moderated_at": moderated_at,
                "moderation_notes": notes,
                "updated_at": moderated_at,
            }
        )

    async def summarize(
        self, high_flag_count: int, recent_since: datetime
    ) -> PostStats:
        """Aggregate over the stored posts."""
        posts = list(self._posts.values())
        by_status = Counter(p.status for p in posts)
        by_moderation = Counter(
            p.moderation_status or ModerationStatus.PENDING for p in posts
        )
        return PostStats(
            total_posts=len(posts),
            by_status=dict(by_status),
            by_moderation_status=dict(by_moderation),
            high_flag_posts=sum(1 for p in posts if p.flag_count >= high_flag_count),
            recent_posts=sum(1 for p in posts if p.created_at >= recent_since),
            totals={
                name: sum(p.counter_value(name) for p in posts)
                for name in sorted(POST_COUNTERS)
            },
        )
