"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from engage.application.usecase.auth import GetCurrentUserUseCase
from engage.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    FlagCommentRequest,
    FlagCommentResponse,
    FlagCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetRepliesRequest,
    GetRepliesResponse,
    GetRepliesUseCase,
)
from engage.application.usecase.pagination import (
    CURSOR_PATTERN,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from engage.application.usecase.reaction import (
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)
from engage.domain.error import ForbiddenError
from engage.domain.value import FlagReason, ReactionKind
from engage.interface.api.identity import optional_user, require_user

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


class CommentBody(BaseModel):
    """Create comment body."""

    content: str = Field(min_length=1, max_length=10000)
    parent_id: UUID | None = None


class CommentFlagBody(BaseModel):
    """Report comment body."""

    reason: FlagReason
    description: str | None = Field(default=None, max_length=2000)


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    body: CommentBody,
    create_use_case: FromDishka[CreateCommentUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Comment on a post, or reply to a top-level comment.

    Requires authentication.
    """
    user = await require_user(current_user_use_case, auth_token)
    return await create_use_case.execute(
        CreateCommentRequest(
            post_id=post_id,
            content=body.content,
            parent_id=body.parent_id,
            author_handle=user.handle,
        )
    )


@router.get("/posts/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    comments_use_case: FromDishka[GetCommentsUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    include_hidden: bool = False,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    cursor: str | None = Query(default=None, pattern=CURSOR_PATTERN),
    auth_token: str | None = Cookie(default=None),
) -> GetCommentsResponse:
    """List a page of a post's comment threads.

    Authentication is optional; signed-in callers also get ``is_liked``.
    Deleted comments are only listed for reviewers (``include_hidden``).
    """
    user = await optional_user(current_user_use_case, auth_token)
    if include_hidden and not (user and user.is_privileged):
        raise ForbiddenError("Reviewer role required to list deleted comments")
    return await comments_use_case.execute(
        GetCommentsRequest(
            post_id=post_id,
            include_hidden=include_hidden,
            user_handle=user.handle if user else None,
            limit=limit,
            cursor=cursor,
        )
    )


@router.get("/comments/{comment_id}/replies", response_model=GetRepliesResponse)
async def get_replies(
    comment_id: UUID,
    replies_use_case: FromDishka[GetRepliesUseCase],
) -> GetRepliesResponse:
    """List the published replies of a comment, oldest first."""
    return await replies_use_case.execute(GetRepliesRequest(comment_id=comment_id))


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: UUID,
    delete_use_case: FromDishka[DeleteCommentUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Soft-delete a comment. Only the author may delete it."""
    user = await require_user(current_user_use_case, auth_token)
    return await delete_use_case.execute(
        DeleteCommentRequest(comment_id=comment_id, requester_handle=user.handle)
    )


@router.post("/comments/{comment_id}/like", response_model=ToggleReactionResponse)
async def toggle_comment_like(
    comment_id: UUID,
    toggle_use_case: FromDishka[ToggleReactionUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ToggleReactionResponse:
    """Like a comment, or remove the like if present.

    Requires authentication.
    """
    user = await require_user(current_user_use_case, auth_token)
    return await toggle_use_case.execute(
        ToggleReactionRequest(
            kind=ReactionKind.COMMENT_LIKE,
            target_id=comment_id,
            user_handle=user.handle,
        )
    )


@router.post(
    "/comments/{comment_id}/flags",
    response_model=FlagCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def flag_comment(
    comment_id: UUID,
    body: CommentFlagBody,
    flag_use_case: FromDishka[FlagCommentUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FlagCommentResponse:
    """Report a comment. Requires authentication."""
    user = await require_user(current_user_use_case, auth_token)
    return await flag_use_case.execute(
        FlagCommentRequest(
            comment_id=comment_id,
            reason=body.reason,
            description=body.description,
            user_handle=user.handle,
        )
    )
