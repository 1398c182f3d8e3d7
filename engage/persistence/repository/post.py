"""PostgreSQL implementation of Post repository."""

from collections.abc import Mapping
from datetime import datetime
from typing import Optional

import logfire
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import Post, PostStats
from engage.domain.repository.post import POST_COUNTERS, PostRepository
from engage.domain.value import Handle, ModerationStatus, PostId, PostStatus
from engage.persistence.mappers import post_to_dict, row_to_post
from engage.persistence.repository._counters import counter_deltas
from engage.persistence.tables import posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        stmt = select(posts_table).where(posts_table.c.id == post_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_post(row._asdict()) if row else None

    async def save(self, post: Post) -> Post:
        """Save a post (create or update)."""
        with logfire.span("post_repository.save", post_id=str(post.id)):
            existing = await self.find_by_id(post.id)
            post_dict = post_to_dict(post)

            if existing:
                stmt = (
                    posts_table.update()
                    .where(posts_table.c.id == post.id)
                    .values(**post_dict)
                )
            else:
                stmt = insert(posts_table).values(**post_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return post

    async def adjust_counters(
        self,
        post_id: PostId,
        deltas: Mapping[str, int],
        touched_at: datetime,
    ) -> None:
        """Atomically apply counter deltas (clamped at zero) and bump updated_at."""
        values = counter_deltas(posts_table, deltas, POST_COUNTERS)
        stmt = (
            posts_table.update()
            .where(posts_table.c.id == post_id)
            .values(**values, updated_at=touched_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_moderation(
        self,
        post_id: PostId,
        status: ModerationStatus,
        moderated_by: Optional[Handle],
        moderated_at: datetime,
        notes: Optional[str],
    ) -> None:
        """Patch the moderation fields of a post."""
        stmt = (
            posts_table.update()
            .where(posts_table.c.id == post_id)
            .values(
                moderation_status=status.value,
                moderated_by=moderated_by.root if moderated_by else None,
                moderated_at=moderated_at,
                moderation_notes=notes,
                updated_at=moderated_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def summarize(
        self, high_flag_count: int, recent_since: datetime
    ) -> PostStats:
        """Aggregate post counts and counter sums in three grouped queries."""
        with logfire.span("post_repository.summarize"):
            c = posts_table.c
            counters = sorted(POST_COUNTERS)
            totals_stmt = select(
                func.count().label("total_posts"),
                func.count().filter(c.flag_count >= high_flag_count).label("high_flag"),
                func.count().filter(c.created_at >= recent_since).label("recent"),
                *(func.coalesce(func.sum(c[name]), 0).label(name) for name in counters),
            )
            totals = (await self.session.execute(totals_stmt)).one()._asdict()

            status_rows = await self.session.execute(
                select(c.status, func.count()).group_by(c.status)
            )
            by_status = {PostStatus(status): count for status, count in status_rows}

            moderation_rows = await self.session.execute(
                select(c.moderation_status, func.count()).group_by(c.moderation_status)
            )
            by_moderation: dict[ModerationStatus, int] = {}
            for status, count in moderation_rows:
                key = ModerationStatus(status) if status else ModerationStatus.PENDING
                by_moderation[key] = by_moderation.get(key, 0) + count

            return PostStats(
                total_posts=totals["total_posts"],
                by_status=by_status,
                by_moderation_status=by_moderation,
                high_flag_posts=totals["high_flag"],
                recent_posts=totals["recent"],
                totals={name: int(totals[name]) for name in counters},
            )
