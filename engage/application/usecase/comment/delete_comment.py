"""Delete comment use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import CommentService
from engage.domain.value import CommentId, CommentStatus, Handle

from ..base import BaseUseCase


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: UUID
    requester_handle: str


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment_id: str
    status: CommentStatus


class DeleteCommentUseCase(BaseUseCase):
    """Use case for an author soft-deleting their comment."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete flow.

        Raises:
            NotFoundError: If the comment does not exist
            ForbiddenError: If the requester is not the author
        """
        comment = await self.comment_service.delete_comment(
            CommentId(request.comment_id), Handle(request.requester_handle)
        )
        return DeleteCommentResponse(comment_id=str(comment.id), status=comment.status)
