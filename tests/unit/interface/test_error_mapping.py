"""Unit tests for domain error to HTTP mapping."""

from collections.abc import AsyncIterator

import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import (
    DishkaRoute,
    FastapiProvider,
    FromDishka,
    setup_dishka,
)
from fastapi import APIRouter, FastAPI
from fastapi.testclient import TestClient

from engage.domain.error import (
    AlreadyExistsError,
    AlreadyReviewedError,
    DomainError,
    ErrorKind,
    ForbiddenError,
    InvalidActionError,
    InvalidParentError,
    NotFoundError,
    OperationNotAllowedError,
    UnauthenticatedError,
)
from engage.interface.error import ERROR_STATUS, register_error_handlers, status_for


class TestStatusFor:
    """Every error kind maps to a fixed status code."""

    def test_every_kind_is_mapped(self):
        assert set(ERROR_STATUS) == set(ErrorKind)

    @pytest.mark.parametrize(
        "error,expected",
        [
            (UnauthenticatedError(), 401),
            (NotFoundError("Post", "123"), 404),
            (OperationNotAllowedError("Likes disabled"), 409),
            (AlreadyReviewedError("123"), 409),
            (ForbiddenError("Reviewer role required"), 403),
            (AlreadyExistsError("Already flagged"), 409),
            (InvalidParentError("Replies can only be one level deep"), 422),
            (InvalidActionError("PUBLISH"), 422),
        ],
    )
    def test_status_codes(self, error: DomainError, expected: int):
        assert status_for(error) == expected


class TestDomainErrorHandler:
    def test_handler_renders_kind_and_detail(self):
        # Arrange
        app = FastAPI()
        register_error_handlers(app)

        @app.get("/missing")
        async def missing():
            raise NotFoundError("Post", "abc")

        client = TestClient(app)

        # Act
        response = client.get("/missing")

        # Assert
        assert response.status_code == 404
        assert response.json() == {"kind": "not_found", "detail": "Post not found: abc"}


class UnitOfWork:
    """Marker dependency whose scope outcome is recorded."""


class OutcomeProvider(Provider):
    """Records the exception (or None) each request scope closes with."""

    def __init__(self, outcomes: list[BaseException | None]) -> None:
        super().__init__()
        self.outcomes = outcomes

    @provide(scope=Scope.REQUEST)
    async def get_unit_of_work(self) -> AsyncIterator[UnitOfWork]:
        exc = yield UnitOfWork()
        self.outcomes.append(exc)


class TestDomainErrorsReachRequestScope:
    """A domain error must close the DI request scope as a failure."""

    @pytest.fixture
    def outcomes(self) -> list[BaseException | None]:
        return []

    @pytest.fixture
    def client(self, outcomes) -> TestClient:
        router = APIRouter(route_class=DishkaRoute)

        @router.post("/comments")
        async def create(unit: FromDishka[UnitOfWork]) -> dict[str, str]:
            return {"status": "created"}

        @router.post("/comments/{comment_id}/flags")
        async def flag(comment_id: str, unit: FromDishka[UnitOfWork]) -> None:
            raise AlreadyExistsError("You have already flagged this comment")

        app = FastAPI()
        setup_dishka(
            make_async_container(OutcomeProvider(outcomes), FastapiProvider()), app
        )
        register_error_handlers(app)
        app.include_router(router)
        return TestClient(app)

    def test_failed_request_closes_scope_with_error(self, client, outcomes):
        response = client.post("/comments/abc/flags")

        assert response.status_code == 409
        assert response.json()["kind"] == "already_exists"
        assert len(outcomes) == 1
        assert isinstance(outcomes[0], AlreadyExistsError)

    def test_successful_request_closes_scope_cleanly(self, client, outcomes):
        response = client.post("/comments")

        assert response.status_code == 200
        assert outcomes == [None]
