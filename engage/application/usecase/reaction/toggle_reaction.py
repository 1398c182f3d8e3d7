"""Toggle reaction use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import ReactionService
from engage.domain.value import Handle, ReactionKind

from ..base import BaseUseCase


class ToggleReactionRequest(BaseModel):
    """Toggle reaction request."""

    kind: ReactionKind
    target_id: UUID  # Post ID for LIKE/BOOKMARK, comment ID for COMMENT_LIKE
    user_handle: str  # Handle from authenticated user


class ToggleReactionResponse(BaseModel):
    """Toggle reaction response."""

    kind: ReactionKind
    target_id: str
    active: bool  # Whether the user holds the reaction after the toggle
    count: int  # Target's counter for this kind after the toggle


class ToggleReactionUseCase(BaseUseCase):
    """Use case for liking, bookmarking or liking a comment (and undoing it)."""

    def __init__(self, reaction_service: ReactionService) -> None:
        """Initialize toggle reaction use case.

        Args:
            reaction_service: Reaction domain service
        """
        self.reaction_service = reaction_service

    async def execute(self, request: ToggleReactionRequest) -> ToggleReactionResponse:
        """Execute toggle flow.

        Args:
            request: Toggle request

        Returns:
            New reaction state and count

        Raises:
            NotFoundError: If the user or target does not exist
            OperationNotAllowedError: If the target does not accept the reaction
            AlreadyExistsError: If a concurrent toggle inserted the same reaction
        """
        result = await self.reaction_service.toggle(
            request.target_id, request.kind, Handle(request.user_handle)
        )
        return ToggleReactionResponse(
            kind=request.kind,
            target_id=str(request.target_id),
            active=result.active,
            count=result.count,
        )
