"""PostgreSQL implementations of Flag and CommentFlag repositories."""

from datetime import datetime
from typing import Any, List, Optional

import logfire
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import CommentFlag, Flag
from engage.domain.repository import CommentFlagRepository, FlagRepository
from engage.domain.value import (
    CommentId,
    FlagId,
    FlagReason,
    FlagStatus,
    Handle,
    PostId,
)
from engage.persistence.mappers import (
    comment_flag_to_dict,
    flag_to_dict,
    row_to_comment_flag,
    row_to_flag,
)
from engage.persistence.tables import comment_flags_table, post_flags_table


class PostgresFlagRepository(FlagRepository):
    """PostgreSQL implementation of FlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, flag_id: FlagId) -> Optional[Flag]:
        """Find a flag by ID."""
        stmt = select(post_flags_table).where(post_flags_table.c.id == flag_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_flag(row._asdict()) if row else None

    async def find_by_post_and_user(
        self, post_id: PostId, user_handle: Handle
    ) -> List[Flag]:
        """Find every flag a user filed against a post."""
        stmt = select(post_flags_table).where(
            post_flags_table.c.post_id == post_id,
            post_flags_table.c.user_handle == user_handle.root,
        )
        result = await self.session.execute(stmt)
        return [row_to_flag(row._asdict()) for row in result.fetchall()]

    async def find_by_post(
        self, post_id: PostId, status: Optional[FlagStatus] = None
    ) -> List[Flag]:
        """Find flags against a post, optionally filtered by status."""
        return await self.find_all(status=status, post_id=post_id)

    @staticmethod
    def _filters(
        status: Optional[FlagStatus],
        post_id: Optional[PostId],
        reason: Optional[FlagReason],
    ) -> list[Any]:
        conditions: list[Any] = []
        if status:
            conditions.append(post_flags_table.c.status == status.value)
        if post_id:
            conditions.append(post_flags_table.c.post_id == post_id)
        if reason:
            conditions.append(post_flags_table.c.reason == reason.value)
        return conditions

    async def find_all(
        self,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Flag]:
        """Find flags matching the given filters, newest first."""
        with logfire.span(
            "flag_repository.find_all",
            status=status.value if status else None,
            post_id=str(post_id) if post_id else None,
            reason=reason.value if reason else None,
            limit=limit,
            offset=offset,
        ):
            stmt = (
                select(post_flags_table)
                .where(*self._filters(status, post_id, reason))
                .order_by(post_flags_table.c.created_at.desc(), post_flags_table.c.id)
                .offset(offset)
            )
            if limit is not None:
                stmt = stmt.limit(limit)

            result = await self.session.execute(stmt)
            return [row_to_flag(row._asdict()) for row in result.fetchall()]

    async def count_all(
        self,
        status: Optional[FlagStatus] = None,
        post_id: Optional[PostId] = None,
        reason: Optional[FlagReason] = None,
    ) -> int:
        """Count flags matching the given filters."""
        stmt = (
            select(func.count())
            .select_from(post_flags_table)
            .where(*self._filters(status, post_id, reason))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def save(self, flag: Flag) -> Flag:
        """Insert a flag."""
        stmt = insert(post_flags_table).values(**flag_to_dict(flag))
        await self.session.execute(stmt)
        await self.session.flush()
        return flag

    async def update_review(
        self,
        flag_id: FlagId,
        status: FlagStatus,
        reviewed_at: datetime,
        reviewed_by: Handle,
    ) -> Optional[Flag]:
        """Move a PENDING flag to its reviewed status."""
        stmt = (
            post_flags_table.update()
            .where(
                post_flags_table.c.id == flag_id,
                post_flags_table.c.status == FlagStatus.PENDING.value,
            )
            .values(
                status=status.value,
                reviewed_at=reviewed_at,
                reviewed_by=reviewed_by.root,
            )
            .returning(*post_flags_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        await self.session.flush()
        return row_to_flag(row._asdict()) if row else None

    async def resolve_pending_for_post(
        self,
        post_id: PostId,
        reviewed_at: datetime,
        reviewed_by: Handle,
    ) -> int:
        """Resolve every PENDING flag on a post."""
        stmt = (
            post_flags_table.update()
            .where(
                post_flags_table.c.post_id == post_id,
                post_flags_table.c.status == FlagStatus.PENDING.value,
            )
            .values(
                status=FlagStatus.RESOLVED.value,
                reviewed_at=reviewed_at,
                reviewed_by=reviewed_by.root,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount  # type: ignore[attr-defined]


class PostgresCommentFlagRepository(CommentFlagRepository):
    """PostgreSQL implementation of CommentFlagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_comment_and_user(
        self, comment_id: CommentId, user_handle: Handle
    ) -> Optional[CommentFlag]:
        """Find a user's flag on a comment."""
        stmt = select(comment_flags_table).where(
            comment_flags_table.c.comment_id == comment_id,
            comment_flags_table.c.user_handle == user_handle.root,
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_flag(row._asdict()) if row else None

    async def save(self, flag: CommentFlag) -> CommentFlag:
        """Insert a comment flag."""
        stmt = insert(comment_flags_table).values(**comment_flag_to_dict(flag))
        await self.session.execute(stmt)
        await self.session.flush()
        return flag
