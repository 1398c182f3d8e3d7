"""Abuse report entities."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import (
    CommentFlagId,
    CommentId,
    FlagId,
    FlagReason,
    FlagStatus,
    Handle,
    PostId,
)
from engage.util.time import utcnow


class Flag(DomainModel):
    """Abuse report against a post.

    Lifecycle: created PENDING by a reporter, then moved exactly once to
    RESOLVED or DISMISSED by a reviewer. Never changed after that.
    """

    id: FlagId
    post_id: PostId
    user_handle: Handle
    reason: FlagReason
    description: Optional[str] = Field(default=None, max_length=2000)
    status: FlagStatus = FlagStatus.PENDING
    created_at: datetime = Field(default_factory=utcnow)
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[Handle] = None

    @property
    def is_pending(self) -> bool:
        return self.status == FlagStatus.PENDING


class CommentFlag(DomainModel):
    """Abuse report against a comment. No review lifecycle."""

    id: CommentFlagId
    comment_id: CommentId
    user_handle: Handle
    reason: FlagReason
    description: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=utcnow)
