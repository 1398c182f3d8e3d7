"""Review flag use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.domain.service import FlagService
from engage.domain.value import FlagId, Handle

from ..base import BaseUseCase
from .common import FlagItem


class ReviewFlagRequest(BaseModel):
    """Review flag request."""

    flag_id: UUID
    action: str  # RESOLVE or DISMISS; validated by the domain
    notes: str | None = Field(default=None, max_length=2000)
    reviewer_handle: str


class ReviewFlagUseCase(BaseUseCase):
    """Use case for resolving or dismissing a flag."""

    def __init__(self, flag_service: FlagService) -> None:
        """Initialize review flag use case.

        Args:
            flag_service: Flag domain service
        """
        self.flag_service = flag_service

    async def execute(self, request: ReviewFlagRequest) -> FlagItem:
        """Execute review flow.

        Raises:
            ForbiddenError: If the reviewer lacks a privileged role
            InvalidActionError: If the action is not RESOLVE or DISMISS
            NotFoundError: If the flag does not exist
            AlreadyReviewedError: If the flag was already reviewed
        """
        flag = await self.flag_service.review_flag(
            FlagId(request.flag_id),
            action=request.action,
            reviewer_handle=Handle(request.reviewer_handle),
            notes=request.notes,
        )
        return FlagItem.from_flag(flag)
