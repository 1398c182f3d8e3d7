"""PostgreSQL implementations of Reaction and Share repositories."""

from typing import List, Optional, Sequence
from uuid import UUID

from sqlalchemy import Column, Table, delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import Reaction, Share
from engage.domain.repository import ReactionRepository, ShareRepository
from engage.domain.value import Handle, PostId, ReactionId, ReactionKind
from engage.persistence.mappers import reaction_to_dict, row_to_reaction, share_to_dict
from engage.persistence.tables import (
    comment_likes_table,
    post_bookmarks_table,
    post_likes_table,
    post_shares_table,
)

# Reaction kind -> (table, target column)
_KIND_TABLES: dict[ReactionKind, tuple[Table, str]] = {
    ReactionKind.LIKE: (post_likes_table, "post_id"),
    ReactionKind.BOOKMARK: (post_bookmarks_table, "post_id"),
    ReactionKind.COMMENT_LIKE: (comment_likes_table, "comment_id"),
}


def _table_for(kind: ReactionKind) -> tuple[Table, Column]:
    table, target_column = _KIND_TABLES[kind]
    return table, table.c[target_column]


class PostgresReactionRepository(ReactionRepository):
    """PostgreSQL implementation of ReactionRepository.

    Each kind lives in its own table with a unique (target, user_handle)
    constraint, so a racing duplicate insert fails with IntegrityError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_target_and_user(
        self,
        kind: ReactionKind,
        target_id: UUID,
        user_handle: Handle,
    ) -> Optional[Reaction]:
        """Find a user's reaction of a kind on a target."""
        table, target = _table_for(kind)
        stmt = select(table).where(
            target == target_id, table.c.user_handle == user_handle.root
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_reaction(kind, row._asdict()) if row else None

    async def find_by_user_and_targets(
        self,
        kind: ReactionKind,
        user_handle: Handle,
        target_ids: Sequence[UUID],
    ) -> List[Reaction]:
        """Find a user's reactions of a kind on multiple targets (batch query)."""
        if not target_ids:
            return []

        table, target = _table_for(kind)
        stmt = select(table).where(
            table.c.user_handle == user_handle.root, target.in_(target_ids)
        )
        result = await self.session.execute(stmt)
        return [row_to_reaction(kind, row._asdict()) for row in result.fetchall()]

    async def count_by_target(self, kind: ReactionKind, target_id: UUID) -> int:
        """Count reactions of a kind on a target."""
        table, target = _table_for(kind)
        stmt = select(func.count()).select_from(table).where(target == target_id)
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def save(self, reaction: Reaction) -> Reaction:
        """Insert a reaction."""
        table, target = _table_for(reaction.kind)
        stmt = insert(table).values(**reaction_to_dict(reaction, target.name))
        await self.session.execute(stmt)
        await self.session.flush()
        return reaction

    async def delete(self, kind: ReactionKind, reaction_id: ReactionId) -> None:
        """Hard-delete a reaction."""
        table, _ = _table_for(kind)
        stmt = delete(table).where(table.c.id == reaction_id)
        await self.session.execute(stmt)
        await self.session.flush()


class PostgresShareRepository(ShareRepository):
    """PostgreSQL implementation of ShareRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, share: Share) -> Share:
        """Insert a share record."""
        stmt = insert(post_shares_table).values(**share_to_dict(share))
        await self.session.execute(stmt)
        await self.session.flush()
        return share

    async def count_by_post(self, post_id: PostId) -> int:
        """Count shares of a post."""
        stmt = (
            select(func.count())
            .select_from(post_shares_table)
            .where(post_shares_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
