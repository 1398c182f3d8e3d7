"""View entity (append-only analytics log)."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import Handle, PostId, ViewId
from engage.util.time import utcnow


class View(DomainModel):
    """One page view of a post.

    Every view attempt is logged, whether or not it moved the post's
    ``view_count``.
    """

    id: ViewId
    post_id: PostId
    user_handle: Optional[Handle] = None
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = None
    referrer: Optional[str] = None
    viewed_at: datetime = Field(default_factory=utcnow)
