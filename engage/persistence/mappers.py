"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from engage.domain.model import Comment, CommentFlag, Flag, Post, Reaction, Share, User, View
from engage.domain.value import (
    CommentFlagId,
    CommentId,
    CommentStatus,
    FlagId,
    FlagReason,
    FlagStatus,
    Handle,
    ModerationStatus,
    PostId,
    PostStatus,
    ReactionId,
    ReactionKind,
    ShareId,
    Slug,
    UserId,
    UserRole,
    ViewId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _handle(value: Optional[str]) -> Optional[Handle]:
    return Handle(value) if value else None


def _raw(handle: Optional[Handle]) -> Optional[str]:
    return handle.root if handle else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        handle=Handle(row["handle"]),
        roles=[UserRole(role) for role in row["roles"]],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    return {
        "id": user.id,
        "handle": user.handle.root,
        "roles": [role.value for role in user.roles],
        "created_at": user.created_at,
    }


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    moderation_status = row.get("moderation_status")
    return Post(
        id=PostId(_uuid(row["id"])),
        slug=Slug(row["slug"]),
        title=row["title"],
        author_handle=Handle(row["author_handle"]),
        status=PostStatus(row["status"]),
        moderation_status=ModerationStatus(moderation_status)
        if moderation_status
        else None,
        moderated_at=row.get("moderated_at"),
        moderated_by=_handle(row.get("moderated_by")),
        moderation_notes=row.get("moderation_notes"),
        like_count=row["like_count"],
        bookmark_count=row["bookmark_count"],
        comment_count=row["comment_count"],
        share_count=row["share_count"],
        view_count=row["view_count"],
        flag_count=row["flag_count"],
        allow_likes=row["allow_likes"],
        allow_bookmarks=row["allow_bookmarks"],
        allow_comments=row["allow_comments"],
        allow_shares=row["allow_shares"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = post.model_dump(
        exclude={"slug", "author_handle", "status", "moderation_status", "moderated_by"}
    )
    data.update(
        slug=post.slug.root,
        author_handle=post.author_handle.root,
        status=post.status.value,
        moderation_status=post.moderation_status.value
        if post.moderation_status
        else None,
        moderated_by=_raw(post.moderated_by),
    )
    return data


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_handle=Handle(row["author_handle"]),
        content=row["content"],
        parent_id=CommentId(_uuid(row["parent_id"])) if row.get("parent_id") else None,
        status=CommentStatus(row["status"]),
        like_count=row["like_count"],
        flag_count=row["flag_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    data = comment.model_dump(exclude={"author_handle", "status"})
    data.update(author_handle=comment.author_handle.root, status=comment.status.value)
    return data


def row_to_reaction(kind: ReactionKind, row: Dict[str, Any]) -> Reaction:
    """Convert a row of a per-kind reaction table to a Reaction.

    Args:
        kind: Kind stored in the table the row came from
        row: Database row as dict

    Returns:
        Reaction domain model
    """
    target_column = "comment_id" if "comment_id" in row else "post_id"
    return Reaction(
        id=ReactionId(_uuid(row["id"])),
        kind=kind,
        target_id=_uuid(row[target_column]),
        user_handle=Handle(row["user_handle"]),
        created_at=row["created_at"],
    )


def reaction_to_dict(reaction: Reaction, target_column: str) -> Dict[str, Any]:
    """Convert Reaction domain model to a dict for its per-kind table.

    Args:
        reaction: Reaction domain model
        target_column: ``post_id`` or ``comment_id``

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": reaction.id,
        target_column: reaction.target_id,
        "user_handle": reaction.user_handle.root,
        "created_at": reaction.created_at,
    }


def share_to_dict(share: Share) -> Dict[str, Any]:
    """Convert Share domain model to database dict."""
    return {
        "id": share.id,
        "post_id": share.post_id,
        "user_handle": _raw(share.user_handle),
        "platform": share.platform,
        "shared_at": share.shared_at,
    }


def row_to_flag(row: Dict[str, Any]) -> Flag:
    """Convert database row to Flag domain model.

    Args:
        row: Database row as dict

    Returns:
        Flag domain model
    """
    return Flag(
        id=FlagId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        user_handle=Handle(row["user_handle"]),
        reason=FlagReason(row["reason"]),
        description=row.get("description"),
        status=FlagStatus(row["status"]),
        created_at=row["created_at"],
        reviewed_at=row.get("reviewed_at"),
        reviewed_by=_handle(row.get("reviewed_by")),
    )


def flag_to_dict(flag: Flag) -> Dict[str, Any]:
    """Convert Flag domain model to database dict."""
    return {
        "id": flag.id,
        "post_id": flag.post_id,
        "user_handle": flag.user_handle.root,
        "reason": flag.reason.value,
        "description": flag.description,
        "status": flag.status.value,
        "created_at": flag.created_at,
        "reviewed_at": flag.reviewed_at,
        "reviewed_by": _raw(flag.reviewed_by),
    }


def row_to_comment_flag(row: Dict[str, Any]) -> CommentFlag:
    """Convert database row to CommentFlag domain model."""
    return CommentFlag(
        id=CommentFlagId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_handle=Handle(row["user_handle"]),
        reason=FlagReason(row["reason"]),
        description=row.get("description"),
        created_at=row["created_at"],
    )


def comment_flag_to_dict(flag: CommentFlag) -> Dict[str, Any]:
    """Convert CommentFlag domain model to database dict."""
    return {
        "id": flag.id,
        "comment_id": flag.comment_id,
        "user_handle": flag.user_handle.root,
        "reason": flag.reason.value,
        "description": flag.description,
        "created_at": flag.created_at,
    }


def row_to_view(row: Dict[str, Any]) -> View:
    """Convert database row to View domain model."""
    return View(
        id=ViewId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        user_handle=_handle(row.get("user_handle")),
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        referrer=row.get("referrer"),
        viewed_at=row["viewed_at"],
    )


def view_to_dict(view: View) -> Dict[str, Any]:
    """Convert View domain model to database dict."""
    data = view.model_dump(exclude={"user_handle"})
    data["user_handle"] = _raw(view.user_handle)
    return data
