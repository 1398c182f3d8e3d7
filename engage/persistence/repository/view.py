"""PostgreSQL implementation of View repository."""

from typing import Optional

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from engage.domain.model import View
from engage.domain.repository import ViewRepository
from engage.domain.value import Handle, PostId
from engage.persistence.mappers import row_to_view, view_to_dict
from engage.persistence.tables import post_views_table


class PostgresViewRepository(ViewRepository):
    """PostgreSQL implementation of ViewRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def save(self, view: View) -> View:
        """Append a view record."""
        stmt = insert(post_views_table).values(**view_to_dict(view))
        await self.session.execute(stmt)
        await self.session.flush()
        return view

    async def find_latest_by_post_and_user(
        self, post_id: PostId, user_handle: Handle
    ) -> Optional[View]:
        """Find the most recent view of a post by a user."""
        stmt = (
            select(post_views_table)
            .where(
                post_views_table.c.post_id == post_id,
                post_views_table.c.user_handle == user_handle.root,
            )
            .order_by(post_views_table.c.viewed_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_view(row._asdict()) if row else None

    async def count_by_post(self, post_id: PostId) -> int:
        """Count logged views of a post."""
        stmt = (
            select(func.count())
            .select_from(post_views_table)
            .where(post_views_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
