"""Get replies use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import CommentService
from engage.domain.value import CommentId

from ..base import BaseUseCase
from .common import CommentItem


class GetRepliesRequest(BaseModel):
    """Get replies request."""

    comment_id: UUID


class GetRepliesResponse(BaseModel):
    """Get replies response."""

    comment_id: str
    replies: list[CommentItem]


class GetRepliesUseCase(BaseUseCase):
    """Use case for listing the replies of one comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetRepliesRequest) -> GetRepliesResponse:
        """Execute get replies flow. Works even when the parent was deleted."""
        replies = await self.comment_service.get_replies(CommentId(request.comment_id))
        return GetRepliesResponse(
            comment_id=str(request.comment_id),
            replies=[CommentItem.from_comment(reply) for reply in replies],
        )
