"""Moderate post use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.domain.service import FlagService
from engage.domain.value import Handle, ModerationStatus, PostId

from ..base import BaseUseCase


class ModeratePostRequest(BaseModel):
    """Moderate post request."""

    post_id: UUID
    action: str  # APPROVE, REJECT, FLAG or UNDER_REVIEW; validated by the domain
    notes: str | None = Field(default=None, max_length=2000)
    reviewer_handle: str


class ModeratePostResponse(BaseModel):
    """Moderate post response."""

    post_id: str
    moderation_status: ModerationStatus


class ModeratePostUseCase(BaseUseCase):
    """Use case for a reviewer's moderation decision on a post."""

    def __init__(self, flag_service: FlagService) -> None:
        """Initialize moderate post use case.

        Args:
            flag_service: Flag domain service
        """
        self.flag_service = flag_service

    async def execute(self, request: ModeratePostRequest) -> ModeratePostResponse:
        """Execute moderation flow.

        Raises:
            ForbiddenError: If the reviewer lacks a privileged role
            InvalidActionError: If the action is not recognized
            NotFoundError: If the post does not exist
        """
        status = await self.flag_service.moderate(
            PostId(request.post_id),
            action=request.action,
            reviewer_handle=Handle(request.reviewer_handle),
            notes=request.notes,
        )
        return ModeratePostResponse(
            post_id=str(request.post_id), moderation_status=status
        )
