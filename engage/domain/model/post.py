"""Post aggregate root.

Posts are the moderated content unit. Reactions, flags, comments and views
reference a post by id; the post only carries their denormalized counters.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import (
    Handle,
    ModerationStatus,
    PostId,
    PostStatus,
    ReactionKind,
    Slug,
)
from engage.util.time import utcnow


class Post(DomainModel):
    """Post aggregate root.

    Counter invariant: every counter equals the number of live records of the
    matching kind referencing this post, except ``view_count`` which is
    rate-limited per viewer.
    """

    id: PostId
    slug: Slug
    title: str = Field(min_length=1, max_length=300)
    author_handle: Handle
    status: PostStatus = PostStatus.PUBLISHED
    moderation_status: Optional[ModerationStatus] = ModerationStatus.PENDING
    moderated_at: Optional[datetime] = None
    moderated_by: Optional[Handle] = None
    moderation_notes: Optional[str] = None

    like_count: int = Field(default=0, ge=0)
    bookmark_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    share_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    flag_count: int = Field(default=0, ge=0)

    allow_likes: bool = True
    allow_bookmarks: bool = True
    allow_comments: bool = True
    allow_shares: bool = True

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def allows(self, kind: ReactionKind) -> bool:
        """Check whether the post permits reactions of the given kind."""
        if kind.permission is None:
            return False
        return bool(getattr(self, kind.permission))

    def counter_value(self, counter: str) -> int:
        """Read a denormalized counter by name."""
        return int(getattr(self, counter))
