"""Flag post use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.domain.service import FlagService
from engage.domain.value import FlagReason, Handle, PostId

from ..base import BaseUseCase
from .common import FlagItem


class FlagPostRequest(BaseModel):
    """Flag post request."""

    post_id: UUID
    reason: FlagReason
    description: str | None = Field(default=None, max_length=2000)
    user_handle: str  # Handle from authenticated user


class FlagPostUseCase(BaseUseCase):
    """Use case for reporting a post."""

    def __init__(self, flag_service: FlagService) -> None:
        """Initialize flag post use case.

        Args:
            flag_service: Flag domain service
        """
        self.flag_service = flag_service

    async def execute(self, request: FlagPostRequest) -> FlagItem:
        """Execute flag flow.

        Args:
            request: Flag request

        Returns:
            The created flag

        Raises:
            NotFoundError: If the reporter or post does not exist
            AlreadyExistsError: If the reporter may not flag this post again
        """
        flag = await self.flag_service.file_flag(
            PostId(request.post_id),
            reason=request.reason,
            user_handle=Handle(request.user_handle),
            description=request.description,
        )
        return FlagItem.from_flag(flag)
