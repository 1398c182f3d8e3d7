"""Unit tests for the request-scoped database session."""

import pytest
from dishka import Scope, make_async_container, provide
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from engage.util.di import ProdConfigProvider, ProdPersistenceProvider


class RecordingSession:
    """Stands in for AsyncSession and records unit-of-work calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def __aenter__(self) -> "RecordingSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.calls.append("close")

    async def commit(self) -> None:
        self.calls.append("commit")

    async def rollback(self) -> None:
        self.calls.append("rollback")


class RecordingPersistenceProvider(ProdPersistenceProvider):
    """Production persistence wiring with a recording session factory."""

    def __init__(self, session: RecordingSession) -> None:
        super().__init__()
        self.session = session

    @provide(scope=Scope.APP)
    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return lambda: self.session  # type: ignore[return-value]


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def container(session):
    return make_async_container(
        ProdConfigProvider(), RecordingPersistenceProvider(session)
    )


class TestRequestSession:
    @pytest.mark.asyncio
    async def test_commits_when_request_succeeds(self, container, session):
        async with container() as request_container:
            await request_container.get(AsyncSession)

        await container.close()
        assert session.calls == ["commit", "close"]

    @pytest.mark.asyncio
    async def test_rolls_back_when_request_fails(self, container, session):
        with pytest.raises(RuntimeError):
            async with container() as request_container:
                await request_container.get(AsyncSession)
                raise RuntimeError("write failed")

        await container.close()
        assert session.calls == ["rollback", "close"]

    @pytest.mark.asyncio
    async def test_session_untouched_when_never_resolved(self, container, session):
        async with container():
            pass

        await container.close()
        assert session.calls == []
