"""Share post use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.domain.service import ReactionService
from engage.domain.value import Handle, PostId

from ..base import BaseUseCase


class SharePostRequest(BaseModel):
    """Share post request."""

    post_id: UUID
    platform: str = Field(min_length=1, max_length=50)
    user_handle: str | None = None  # None for anonymous shares


class SharePostResponse(BaseModel):
    """Share post response."""

    post_id: str
    share_count: int


class SharePostUseCase(BaseUseCase):
    """Use case for recording a share of a post."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize share post use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: SharePostRequest) -> SharePostResponse:
        """Execute share flow."""
        share_count = await self.reaction_service.share_post(
            PostId(request.post_id),
            platform=request.platform,
            user_handle=Handle(request.user_handle) if request.user_handle else None,
        )
        return SharePostResponse(post_id=str(request.post_id), share_count=share_count)
