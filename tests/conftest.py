"""Test configuration and fixtures."""

import re
from uuid import UUID, uuid4

from engage.domain.model import Comment, Post, User
from engage.domain.value import (
    CommentId,
    Handle,
    PostId,
    Slug,
    UserId,
    UserRole,
)


def make_slug(title: str, post_id: UUID | str | None = None) -> Slug:
    """Helper function to generate slugs for test posts.

    Args:
        title: Post title to generate slug from
        post_id: Optional post ID (UUID or str) for fallback slug generation

    Returns:
        Valid Slug value object
    """
    slug_str = re.sub(r"[^a-z0-9]+", "-", title.lower())
    slug_str = re.sub(r"-+", "-", slug_str)
    slug_str = slug_str.strip("-")[:100]

    if not slug_str and post_id:
        slug_str = f"post-{str(post_id)[:8]}"
    elif not slug_str:
        slug_str = "test-post"

    return Slug(slug_str)


def make_user(handle: str = "reader", staff: bool = False) -> User:
    """Build a user, optionally with the STAFF role."""
    roles = [UserRole.USER, UserRole.STAFF] if staff else [UserRole.USER]
    return User(id=UserId(uuid4()), handle=Handle(root=handle), roles=roles)


def make_post(title: str = "Test Post", **overrides) -> Post:
    """Build a published post with a unique slug."""
    post_id = PostId(uuid4())
    fields = {
        "id": post_id,
        "slug": Slug(f"{make_slug(title, post_id).root}-{str(post_id)[:8]}"),
        "title": title,
        "author_handle": Handle(root="author"),
    }
    fields.update(overrides)
    return Post(**fields)


def make_comment(
    post_id: PostId,
    author: str = "author",
    parent_id: CommentId | None = None,
    **overrides,
) -> Comment:
    """Build a published comment."""
    fields = {
        "id": CommentId(uuid4()),
        "post_id": post_id,
        "author_handle": Handle(root=author),
        "content": "Test comment",
        "parent_id": parent_id,
    }
    fields.update(overrides)
    return Comment(**fields)
