"""Route tests against in-memory persistence.

Repositories are APP-scoped here so state survives across HTTP requests.
"""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
from fastapi.testclient import TestClient

from engage.domain.model import Post, User
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
from engage.domain.service import JWTService
from engage.config import Settings
from engage.interface.api.routes import comments, flags, health, interactions, stats
from engage.interface.error import register_error_handlers
from engage.persistence.repository.inmemory import (
    InMemoryCommentFlagRepository,
    InMemoryCommentRepository,
    InMemoryFlagRepository,
    InMemoryPostRepository,
    InMemoryReactionRepository,
    InMemoryShareRepository,
    InMemoryUserRepository,
    InMemoryViewRepository,
)
from engage.util.di import ProdApplicationProvider, ProdConfigProvider, ProdDomainProvider
from tests.conftest import make_post, make_user


class SharedInMemoryProvider(Provider):
    """In-memory repositories shared by every request of one app."""

    scope = Scope.APP

    def __init__(self, users: list[User], posts: list[Post]):
        super().__init__()
        self.user_repository = InMemoryUserRepository()
        self.post_repository = InMemoryPostRepository()
        for user in users:
            self.user_repository._users[user.id] = user
        for post in posts:
            self.post_repository._posts[post.id] = post

    @provide
    def get_user_repository(self) -> UserRepository:
        return self.user_repository

    @provide
    def get_post_repository(self) -> PostRepository:
        return self.post_repository

    comment_repository = provide(
        InMemoryCommentRepository, provides=CommentRepository
    )
    reaction_repository = provide(
        InMemoryReactionRepository, provides=ReactionRepository
    )
    share_repository = provide(InMemoryShareRepository, provides=ShareRepository)
    flag_repository = provide(InMemoryFlagRepository, provides=FlagRepository)
    comment_flag_repository = provide(
        InMemoryCommentFlagRepository, provides=CommentFlagRepository
    )
    view_repository = provide(InMemoryViewRepository, provides=ViewRepository)


@pytest.fixture
def api():
    """App wired with in-memory persistence, plus tokens for two users."""
    reader = make_user("reader")
    moderator = make_user("moderator", staff=True)
    post = make_post()
    container = make_async_container(
        ProdConfigProvider(),
        ProdDomainProvider(),
        ProdApplicationProvider(),
        SharedInMemoryProvider([reader, moderator], [post]),
        FastapiProvider(),
    )

    app = FastAPI()
    setup_dishka(container, app)
    register_error_handlers(app)
    for module in (health, interactions, comments, flags, stats):
        app.include_router(module.router)

    jwt_service = JWTService(Settings().auth)
    tokens = {
        user.handle.root: jwt_service.create_token(str(user.id), user.handle.root)
        for user in (reader, moderator)
    }
    return app, post, tokens


def _client(app: FastAPI, token: str | None = None) -> TestClient:
    cookies = {"auth_token": token} if token else None
    return TestClient(app, cookies=cookies)


class TestInteractionRoutes:
    def test_like_requires_authentication(self, api):
        app, post, _ = api

        response = _client(app).post(f"/posts/{post.id}/like")

        assert response.status_code == 401
        assert response.json()["kind"] == "unauthenticated"

    def test_like_toggles(self, api):
        app, post, tokens = api
        client = _client(app, tokens["reader"])

        first = client.post(f"/posts/{post.id}/like")
        second = client.post(f"/posts/{post.id}/like")

        assert first.status_code == 200
        assert first.json()["active"] is True
        assert first.json()["count"] == 1
        assert second.json()["active"] is False
        assert second.json()["count"] == 0

    def test_interaction_for_anonymous_caller(self, api):
        app, post, tokens = api
        _client(app, tokens["reader"]).post(f"/posts/{post.id}/bookmark")

        response = _client(app).get(f"/posts/{post.id}/interaction")

        assert response.status_code == 200
        assert response.json()["is_bookmarked"] is False

    def test_view_cooldown(self, api):
        app, post, tokens = api
        client = _client(app, tokens["reader"])

        first = client.post(f"/posts/{post.id}/views")
        second = client.post(f"/posts/{post.id}/views")

        assert first.json()["counted"] is True
        assert second.json()["counted"] is False


class TestCommentRoutes:
    def test_create_list_and_reject_deep_reply(self, api):
        app, post, tokens = api
        client = _client(app, tokens["reader"])

        top = client.post(f"/posts/{post.id}/comments", json={"content": "Top"})
        reply = client.post(
            f"/posts/{post.id}/comments",
            json={"content": "Reply", "parent_id": top.json()["comment_id"]},
        )
        deeper = client.post(
            f"/posts/{post.id}/comments",
            json={"content": "Deeper", "parent_id": reply.json()["comment_id"]},
        )
        listing = _client(app).get(f"/posts/{post.id}/comments")

        assert top.status_code == 201
        assert deeper.status_code == 422
        assert deeper.json()["kind"] == "invalid_parent"
        assert listing.json()["total"] == 1
        assert listing.json()["comment_count"] == 2
        assert listing.json()["page"] == {"is_done": True, "continue_cursor": None}

    def test_include_hidden_requires_reviewer(self, api):
        app, post, tokens = api
        reader = _client(app, tokens["reader"])
        created = reader.post(f"/posts/{post.id}/comments", json={"content": "Gone"})
        reader.delete(f"/comments/{created.json()['comment_id']}")
        path = f"/posts/{post.id}/comments"

        anonymous = _client(app).get(path, params={"include_hidden": True})
        as_reader = reader.get(path, params={"include_hidden": True})
        visible = reader.get(path)
        as_moderator = _client(app, tokens["moderator"]).get(
            path, params={"include_hidden": True}
        )

        assert anonymous.status_code == 403
        assert as_reader.status_code == 403
        assert as_reader.json()["kind"] == "forbidden"
        assert visible.json()["threads"] == []
        assert as_moderator.status_code == 200
        hidden = as_moderator.json()["threads"][0]["comment"]
        assert hidden["comment_id"] == created.json()["comment_id"]
        assert hidden["status"] == "DELETED"

    def test_listing_pages_with_cursor(self, api):
        app, post, tokens = api
        reader = _client(app, tokens["reader"])
        for content in ("One", "Two", "Three"):
            reader.post(f"/posts/{post.id}/comments", json={"content": content})
        path = f"/posts/{post.id}/comments"

        first = reader.get(path, params={"limit": 2})
        second = reader.get(
            path, params={"limit": 2, "cursor": first.json()["page"]["continue_cursor"]}
        )
        bad_cursor = reader.get(path, params={"cursor": "abc"})

        assert len(first.json()["threads"]) == 2
        assert first.json()["page"] == {"is_done": False, "continue_cursor": "2"}
        assert len(second.json()["threads"]) == 1
        assert second.json()["page"]["is_done"] is True
        assert bad_cursor.status_code == 422

    def test_only_author_can_delete(self, api):
        app, post, tokens = api
        created = _client(app, tokens["reader"]).post(
            f"/posts/{post.id}/comments", json={"content": "Mine"}
        )

        response = _client(app, tokens["moderator"]).delete(
            f"/comments/{created.json()['comment_id']}"
        )

        assert response.status_code == 403


class TestFlagRoutes:
    def test_flag_review_and_duplicate(self, api):
        app, post, tokens = api
        reader = _client(app, tokens["reader"])
        moderator = _client(app, tokens["moderator"])

        flagged = reader.post(f"/posts/{post.id}/flags", json={"reason": "SPAM"})
        duplicate = reader.post(f"/posts/{post.id}/flags", json={"reason": "SPAM"})
        forbidden = reader.get("/flags")
        queue = moderator.get("/flags", params={"flag_status": "PENDING"})
        reviewed = moderator.post(
            f"/flags/{flagged.json()['flag_id']}/review", json={"action": "dismiss"}
        )

        assert flagged.status_code == 201
        assert duplicate.status_code == 409
        assert duplicate.json()["kind"] == "already_exists"
        assert forbidden.status_code == 403
        assert queue.json()["total"] == 1
        assert queue.json()["page"]["is_done"] is True
        assert reviewed.json()["status"] == "DISMISSED"

    def test_moderation_invalid_action(self, api):
        app, post, tokens = api

        response = _client(app, tokens["moderator"]).post(
            f"/posts/{post.id}/moderation", json={"action": "publish"}
        )

        assert response.status_code == 422
        assert response.json()["kind"] == "invalid_action"


def test_health(api):
    app, _, _ = api

    response = _client(app).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestStatsRoutes:
    def test_overview_for_reviewers_only(self, api):
        app, post, tokens = api
        _client(app, tokens["reader"]).post(f"/posts/{post.id}/like")

        anonymous = _client(app).get("/stats/overview")
        as_reader = _client(app, tokens["reader"]).get("/stats/overview")
        as_moderator = _client(app, tokens["moderator"]).get("/stats/overview")

        assert anonymous.status_code == 401
        assert as_reader.status_code == 403
        assert as_moderator.status_code == 200
        body = as_moderator.json()
        assert body["posts"]["total"] == 1
        assert body["posts"]["published"] == 1
        assert body["moderation"]["pending"] == 1
        assert body["engagement"]["total_likes"] == 1
        assert body["engagement"]["average_likes"] == 1.0
