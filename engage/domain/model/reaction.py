"""Reaction and share entities.

A reaction's existence is the "has reacted" state: liking creates the record,
unliking hard-deletes it. Each user holds at most one reaction of a kind per
target. Shares are not toggles; every share is a new record.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import Handle, PostId, ReactionId, ReactionKind, ShareId
from engage.util.time import utcnow


class Reaction(DomainModel):
    """A like, bookmark or comment like.

    Business rules:
    - One reaction per (kind, target, user), enforced by a unique constraint
    - Polymorphic reference to the target (post or comment, by kind)
    """

    id: ReactionId
    kind: ReactionKind
    target_id: UUID  # PostId or CommentId depending on kind
    user_handle: Handle
    created_at: datetime = Field(default_factory=utcnow)


class Share(DomainModel):
    """A share of a post to an external platform. Anonymous shares allowed."""

    id: ShareId
    post_id: PostId
    user_handle: Optional[Handle] = None
    platform: str = Field(min_length=1, max_length=50)
    shared_at: datetime = Field(default_factory=utcnow)
