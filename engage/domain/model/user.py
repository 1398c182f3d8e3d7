"""User projection.

Users are owned by the authentication system. This core only needs a stable
handle and the roles that decide who may review reports.
"""

from datetime import datetime

from pydantic import Field

from engage.domain.model.common import DomainModel
from engage.domain.value import Handle, UserId, UserRole
from engage.util.time import utcnow

PRIVILEGED_ROLES = frozenset({UserRole.STAFF, UserRole.ADMIN})


class User(DomainModel):
    """User account as seen by the interaction core."""

    id: UserId
    handle: Handle
    roles: list[UserRole] = Field(default_factory=lambda: [UserRole.USER])
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_privileged(self) -> bool:
        """Whether the user may review flags and moderate posts."""
        return any(role in PRIVILEGED_ROLES for role in self.roles)
