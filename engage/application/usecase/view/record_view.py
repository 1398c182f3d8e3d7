"""Record view use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import ViewService
from engage.domain.value import Handle, PostId

from ..base import BaseUseCase


class RecordViewRequest(BaseModel):
    """Record view request."""

    post_id: UUID
    user_handle: str | None = None  # None for anonymous viewers
    ip_address: str | None = None
    user_agent: str | None = None
    referrer: str | None = None


class RecordViewResponse(BaseModel):
    """Record view response."""

    post_id: str
    counted: bool  # False when the viewer is inside the cool-down window


class RecordViewUseCase(BaseUseCase):
    """Use case for logging a post view."""

    def __init__(self, view_service: ViewService) -> None:
        """Initialize record view use case.

        Args:
            view_service: View domain service
        """
        self.view_service = view_service

    async def execute(self, request: RecordViewRequest) -> RecordViewResponse:
        """Execute record view flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        counted = await self.view_service.record_view(
            PostId(request.post_id),
            user_handle=Handle(request.user_handle) if request.user_handle else None,
            ip_address=request.ip_address,
            user_agent=request.user_agent,
            referrer=request.referrer,
        )
        return RecordViewResponse(post_id=str(request.post_id), counted=counted)
