"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from engage.config import Settings
from engage.domain.repository import (
    CommentFlagRepository,
    CommentRepository,
    FlagRepository,
    PostRepository,
    ReactionRepository,
    ShareRepository,
    UserRepository,
    ViewRepository,
)
from engage.persistence.database import create_engine, create_session_factory
from engage.persistence.repository import (
    PostgresCommentFlagRepository,
    PostgresCommentRepository,
    PostgresFlagRepository,
    PostgresPostRepository,
    PostgresReactionRepository,
    PostgresShareRepository,
    PostgresUserRepository,
    PostgresViewRepository,
)
from engage.util.di.base import ProviderBase
from engage.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is the unit of work for one request. dishka sends the
        exception that closed the scope (or None) back into this generator:
        the session rolls back on an exception and commits otherwise.
        """
        async with session_factory() as session:
            exc = yield session
            if exc is not None:
                logfire.warn(
                    "Session rollback", error=str(exc), error_type=type(exc).__name__
                )
                await session.rollback()
            else:
                await session.commit()
                logfire.debug("Session committed")

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self, session: AsyncSession) -> CommentRepository:
        """Provide Comment repository."""
        return PostgresCommentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reaction_repository(self, session: AsyncSession) -> ReactionRepository:
        """Provide Reaction repository."""
        return PostgresReactionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_share_repository(self, session: AsyncSession) -> ShareRepository:
        """Provide Share repository."""
        return PostgresShareRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_flag_repository(self, session: AsyncSession) -> FlagRepository:
        """Provide Flag repository."""
        return PostgresFlagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_comment_flag_repository(
        self, session: AsyncSession
    ) -> CommentFlagRepository:
        """Provide CommentFlag repository."""
        return PostgresCommentFlagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_view_repository(self, session: AsyncSession) -> ViewRepository:
        """Provide View repository."""
        return PostgresViewRepository(session)
