"""Comment entity.

Comments are threaded one level deep: a top-level comment has no parent and
a reply points at a top-level comment on the same post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import CommentId, CommentStatus, Handle, PostId
from engage.util.time import utcnow


class Comment(DomainModel):
    """Comment entity.

    Deletion is soft: a DELETED comment stays in storage so its replies keep
    a valid parent, and listings filter it out explicitly.
    """

    id: CommentId
    post_id: PostId
    author_handle: Handle
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    status: CommentStatus = CommentStatus.PUBLISHED
    like_count: int = Field(default=0, ge=0)
    flag_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def is_reply(self) -> bool:
        return self.parent_id is not None

    @property
    def is_published(self) -> bool:
        return self.status == CommentStatus.PUBLISHED

    def counter_value(self, counter: str) -> int:
        """Read a denormalized counter by name."""
        return int(getattr(self, counter))
