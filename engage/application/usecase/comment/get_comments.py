"""Get comments use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.service import CommentService, ReactionService
from engage.domain.value import CommentId, Handle, PostId

from ..base import BaseUseCase
from ..pagination import PageInfo, PageRequest
from .common import CommentItem


class CommentThreadItem(BaseModel):
    """Top-level comment with its replies."""

    comment: CommentItem
    replies: list[CommentItem]


class GetCommentsRequest(PageRequest):
    """Get comments request; a page holds up to ``limit`` threads."""

    post_id: UUID
    include_hidden: bool = False  # Include deleted comments
    user_handle: str | None = None  # Caller, for is_liked (optional)


class GetCommentsResponse(BaseModel):
    """Get comments response."""

    post_id: str
    threads: list[CommentThreadItem]
    total: int  # Top-level threads across all pages
    comment_count: int  # Comments in this page, replies included
    page: PageInfo


class GetCommentsUseCase(BaseUseCase):
    """Use case for listing a post's comment threads."""

    def __init__(
        self,
        comment_service: CommentService,
        reaction_service: ReactionService,
    ) -> None:
        """Initialize get comments use case.

        Args:
            comment_service: Comment domain service
            reaction_service: Reaction service for the caller's comment likes
        """
        self.comment_service = comment_service
        self.reaction_service = reaction_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Top-level comments come newest first and replies oldest first.
        Pages count threads, so a thread is never split across pages.

        Args:
            request: Get comments request

        Returns:
            Comment threads with the caller's like state

        Raises:
            NotFoundError: If the post does not exist
        """
        page = await self.comment_service.get_comment_threads(
            PostId(request.post_id),
            include_hidden=request.include_hidden,
            limit=request.limit,
            offset=request.offset,
        )
        threads = page.items

        all_ids: list[CommentId] = []
        for thread in threads:
            all_ids.append(thread.comment.id)
            all_ids.extend(reply.id for reply in thread.replies)

        liked: dict[CommentId, bool] = {}
        if request.user_handle:
            liked = await self.reaction_service.get_liked_comments(
                Handle(request.user_handle), all_ids
            )

        items = [
            CommentThreadItem(
                comment=CommentItem.from_comment(
                    thread.comment, liked.get(thread.comment.id, False)
                ),
                replies=[
                    CommentItem.from_comment(reply, liked.get(reply.id, False))
                    for reply in thread.replies
                ],
            )
            for thread in threads
        ]

        return GetCommentsResponse(
            post_id=str(request.post_id),
            threads=items,
            total=page.total,
            comment_count=len(all_ids),
            page=PageInfo.from_page(page),
        )
