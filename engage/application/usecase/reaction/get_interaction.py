"""Get post interaction use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import ReactionService
from engage.domain.value import Handle, PostId

from ..base import BaseUseCase


class GetPostInteractionRequest(BaseModel):
    """Get post interaction request."""

    post_id: UUID
    user_handle: str | None = None


class GetPostInteractionResponse(BaseModel):
    """Whether the caller has liked and bookmarked the post."""

    post_id: str
    is_liked: bool
    is_bookmarked: bool


class GetPostInteractionUseCase(BaseUseCase):
    """Use case for reading the caller's reaction state on a post."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize get post interaction use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(
        self, request: GetPostInteractionRequest
    ) -> GetPostInteractionResponse:
        """Execute get interaction flow. Anonymous callers get both flags False."""
        interaction = await self.reaction_service.get_post_interaction(
            PostId(request.post_id),
            Handle(request.user_handle) if request.user_handle else None,
        )
        return GetPostInteractionResponse(
            post_id=str(request.post_id),
            is_liked=interaction.is_liked,
            is_bookmarked=interaction.is_bookmarked,
        )
