"""Domain value objects for the interaction and moderation core."""

from engage.domain.value.identifiers import (
    CommentFlagId,
    CommentId,
    FlagId,
    PostId,
    ReactionId,
    ShareId,
    UserId,
    ViewId,
)
from engage.domain.value.types import (
    CommentStatus,
    FlagReason,
    FlagStatus,
    Handle,
    ModerationAction,
    ModerationStatus,
    PostStatus,
    ReactionKind,
    RefilePolicy,
    ReviewAction,
    Slug,
    TargetType,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "ReactionId",
    "ShareId",
    "FlagId",
    "CommentFlagId",
    "ViewId",
    # Types
    "CommentStatus",
    "FlagReason",
    "FlagStatus",
    "Handle",
    "ModerationAction",
    "ModerationStatus",
    "PostStatus",
    "ReactionKind",
    "RefilePolicy",
    "ReviewAction",
    "Slug",
    "TargetType",
    "UserRole",
]
