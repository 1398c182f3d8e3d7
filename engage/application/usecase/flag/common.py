"""Shared flag response model."""

from datetime import datetime

from pydantic import BaseModel

from engage.domain.model import Flag
from engage.domain.value import FlagReason, FlagStatus


class FlagItem(BaseModel):
    """Flag as returned to clients."""

    flag_id: str
    post_id: str
    user_handle: str
    reason: FlagReason
    description: str | None
    status: FlagStatus
    created_at: datetime
    reviewed_at: datetime | None
    reviewed_by: str | None

    @classmethod
    def from_flag(cls, flag: Flag) -> "FlagItem":
        return cls(
            flag_id=str(flag.id),
            post_id=str(flag.post_id),
            user_handle=flag.user_handle.root,
            reason=flag.reason,
            description=flag.description,
            status=flag.status,
            created_at=flag.created_at,
            reviewed_at=flag.reviewed_at,
            reviewed_by=flag.reviewed_by.root if flag.reviewed_by else None,
        )
