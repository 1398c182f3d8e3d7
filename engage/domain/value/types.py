"""Domain value objects for the interaction and moderation core.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from engage.domain.value.common import RootValueObject


class PostStatus(str, Enum):
    """Publication status of a post."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    SCHEDULED = "SCHEDULED"
    ARCHIVED = "ARCHIVED"
    DELETED = "DELETED"


class ModerationStatus(str, Enum):
    """Moderation status of a post, independent of publication status."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    FLAGGED = "FLAGGED"
    UNDER_REVIEW = "UNDER_REVIEW"


class ModerationAction(str, Enum):
    """Reviewer action on a post."""

    APPROVE = "APPROVE"
    REJECT = "REJECT"
    FLAG = "FLAG"
    UNDER_REVIEW = "UNDER_REVIEW"


class FlagStatus(str, Enum):
    """Lifecycle status of an abuse report."""

    PENDING = "PENDING"
    RESOLVED = "RESOLVED"
    DISMISSED = "DISMISSED"


class ReviewAction(str, Enum):
    """Reviewer decision on a single abuse report."""

    RESOLVE = "RESOLVE"
    DISMISS = "DISMISS"

    @property
    def resulting_status(self) -> FlagStatus:
        """Flag status produced by this decision."""
        if self is ReviewAction.RESOLVE:
            return FlagStatus.RESOLVED
        return FlagStatus.DISMISSED


class FlagReason(str, Enum):
    """Category of an abuse report."""

    SPAM = "SPAM"
    HARASSMENT = "HARASSMENT"
    HATE_SPEECH = "HATE_SPEECH"
    INAPPROPRIATE_CONTENT = "INAPPROPRIATE_CONTENT"
    COPYRIGHT_VIOLATION = "COPYRIGHT_VIOLATION"
    MISINFORMATION = "MISINFORMATION"
    VIOLENCE = "VIOLENCE"
    ADULT_CONTENT = "ADULT_CONTENT"
    OTHER = "OTHER"


class RefilePolicy(str, Enum):
    """Whether a reporter may report the same post again.

    ONCE: any earlier report, whatever its status, blocks a new one.
    WHILE_PENDING: only a report still awaiting review blocks a new one.
    """

    ONCE = "once"
    WHILE_PENDING = "while_pending"


class CommentStatus(str, Enum):
    """Status of a comment."""

    PUBLISHED = "PUBLISHED"
    DELETED = "DELETED"


class UserRole(str, Enum):
    """Role granted to a user account."""

    USER = "USER"
    STAFF = "STAFF"
    ADMIN = "ADMIN"


class TargetType(str, Enum):
    """Type of entity a reaction is attached to."""

    POST = "post"
    COMMENT = "comment"


class ReactionKind(str, Enum):
    """Kind of toggleable reaction.

    Each kind knows which entity it targets, which counter it maintains and
    which permission flag on a post gates it.
    """

    LIKE = "like"
    BOOKMARK = "bookmark"
    COMMENT_LIKE = "comment_like"

    @property
    def target_type(self) -> TargetType:
        """Entity type this reaction attaches to."""
        if self is ReactionKind.COMMENT_LIKE:
            return TargetType.COMMENT
        return TargetType.POST

    @property
    def counter(self) -> str:
        """Name of the denormalized counter on the target."""
        if self is ReactionKind.BOOKMARK:
            return "bookmark_count"
        return "like_count"

    @property
    def permission(self) -> str | None:
        """Name of the post permission flag, None for comment reactions."""
        return {
            ReactionKind.LIKE: "allow_likes",
            ReactionKind.BOOKMARK: "allow_bookmarks",
        }.get(self)


class Handle(RootValueObject[str]):
    """Stable, human-readable user handle (username)."""

    @field_validator("root")
    @classmethod
    def validate_handle_format(cls, v: str) -> str:
        """Validate handle is not empty and within length limits."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Handle must be 1-255 characters")
        return v


class Slug(RootValueObject[str]):
    """URL-safe slug for posts.

    Must be lowercase, alphanumeric with hyphens, 1-100 characters.
    Examples: 'spring-hackathon-recap', 'welcome-week-2025'
    """

    @field_validator("root")
    @classmethod
    def validate_slug_format(cls, v: str) -> str:
        """Validate slug format."""
        if not re.match(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", v):
            raise ValueError(
                "Slug must be lowercase alphanumeric with hyphens, "
                "no leading/trailing hyphens or consecutive hyphens"
            )
        if len(v) < 1 or len(v) > 100:
            raise ValueError("Slug must be 1-100 characters")
        return v
