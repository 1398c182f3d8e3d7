"""PostgreSQL implementation of Comment repository."""

from collections.abc import Mapping
from datetime import datetime
from typing import Any, List, Optional

import logfire
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import Comment
from engage.domain.repository.comment import COMMENT_COUNTERS, CommentRepository
from engage.domain.value import CommentId, CommentStatus, PostId
from engage.persistence.mappers import comment_to_dict, row_to_comment
from engage.persistence.repository._counters import counter_deltas
from engage.persistence.tables import comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    @staticmethod
    def _top_level_filter(post_id: PostId, include_deleted: bool) -> list[Any]:
        conditions: list[Any] = [
            comments_table.c.post_id == post_id,
            comments_table.c.parent_id.is_(None),
        ]
        if not include_deleted:
            conditions.append(comments_table.c.status == CommentStatus.PUBLISHED.value)
        return conditions

    async def find_top_level(
        self,
        post_id: PostId,
        include_deleted: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Comment]:
        """Find top-level comments of a post, newest first."""
        with logfire.span(
            "comment_repository.find_top_level",
            post_id=str(post_id),
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(comments_table)
                .where(*self._top_level_filter(post_id, include_deleted))
                .order_by(comments_table.c.created_at.desc(), comments_table.c.id)
                .offset(offset)
            )
            if limit is not None:
                stmt = stmt.limit(limit)

            result = await self.session.execute(stmt)
            return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_top_level(
        self, post_id: PostId, include_deleted: bool = False
    ) -> int:
        """Count top-level comments of a post."""
        stmt = (
            select(func.count())
            .select_from(comments_table)
            .where(*self._top_level_filter(post_id, include_deleted))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def find_children(
        self,
        parent_id: CommentId,
        include_deleted: bool = False,
    ) -> List[Comment]:
        """Find direct replies to a comment, oldest first."""
        stmt = select(comments_table).where(comments_table.c.parent_id == parent_id)
        if not include_deleted:
            stmt = stmt.where(comments_table.c.status == CommentStatus.PUBLISHED.value)
        stmt = stmt.order_by(comments_table.c.created_at.asc())

        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update)."""
        with logfire.span("comment_repository.save", comment_id=str(comment.id)):
            existing = await self.find_by_id(comment.id)
            comment_dict = comment_to_dict(comment)

            if existing:
                stmt = (
                    comments_table.update()
                    .where(comments_table.c.id == comment.id)
                    .values(**comment_dict)
                )
            else:
                stmt = insert(comments_table).values(**comment_dict)

            await self.session.execute(stmt)
            await self.session.flush()
            return comment

    async def adjust_counters(
        self,
        comment_id: CommentId,
        deltas: Mapping[str, int],
        touched_at: datetime,
    ) -> None:
        """Atomically apply counter deltas (clamped at zero) and bump updated_at."""
        values = counter_deltas(comments_table, deltas, COMMENT_COUNTERS)
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(**values, updated_at=touched_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def update_status(
        self,
        comment_id: CommentId,
        status: CommentStatus,
        touched_at: datetime,
    ) -> None:
        """Set the status of a comment."""
        stmt = (
            comments_table.update()
            .where(comments_table.c.id == comment_id)
            .values(status=status.value, updated_at=touched_at)
        )
        await self.session.execute(stmt)
        await self.session.flush()
