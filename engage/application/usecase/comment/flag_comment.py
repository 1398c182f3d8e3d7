"""Flag comment use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from engage.domain.service import CommentService
from engage.domain.value import CommentId, FlagReason, Handle

from ..base import BaseUseCase


class FlagCommentRequest(BaseModel):
    """Flag comment request."""

    comment_id: UUID
    reason: FlagReason
    description: str | None = Field(default=None, max_length=2000)
    user_handle: str


class FlagCommentResponse(BaseModel):
    """Flag comment response."""

    flag_id: str
    comment_id: str
    reason: FlagReason
    created_at: datetime


class FlagCommentUseCase(BaseUseCase):
    """Use case for reporting a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: FlagCommentRequest) -> FlagCommentResponse:
        """Execute flag comment flow.

        Raises:
            NotFoundError: If the user or comment does not exist
            OperationNotAllowedError: If the comment is not published
            AlreadyExistsError: If the user already flagged the comment
        """
        flag = await self.comment_service.flag_comment(
            CommentId(request.comment_id),
            reason=request.reason,
            user_handle=Handle(request.user_handle),
            description=request.description,
        )
        return FlagCommentResponse(
            flag_id=str(flag.id),
            comment_id=str(flag.comment_id),
            reason=flag.reason,
            created_at=flag.created_at,
        )
