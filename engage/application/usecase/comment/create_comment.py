"""Create comment use case."""

from uuid import UUID

from pydantic import BaseModel, Field

from engage.domain.service import CommentService
from engage.domain.value import CommentId, Handle, PostId

from ..base import BaseUseCase
from .common import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    post_id: UUID
    content: str = Field(min_length=1, max_length=10000)
    parent_id: UUID | None = None  # None for top-level comments
    author_handle: str  # Handle from authenticated user


class CreateCommentUseCase(BaseUseCase):
    """Use case for commenting on a post or replying to a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            The created comment

        Raises:
            NotFoundError: If the author, post or parent does not exist
            OperationNotAllowedError: If the post disallows comments
            InvalidParentError: If the parent is on another post or is a reply
        """
        comment = await self.comment_service.create_comment(
            PostId(request.post_id),
            content=request.content,
            author_handle=Handle(request.author_handle),
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
        )
        return CommentItem.from_comment(comment)
