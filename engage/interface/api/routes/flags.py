"""Flag and moderation routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from engage.application.usecase.auth import GetCurrentUserUseCase
from engage.application.usecase.flag import (
    FlagItem,
    FlagPostRequest,
    FlagPostUseCase,
    ListFlagsRequest,
    ListFlagsResponse,
    ListFlagsUseCase,
    ModeratePostRequest,
    ModeratePostResponse,
    ModeratePostUseCase,
    ReviewFlagRequest,
    ReviewFlagUseCase,
)
from engage.application.usecase.pagination import (
    CURSOR_PATTERN,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from engage.domain.value import FlagReason, FlagStatus
from engage.interface.api.identity import require_user

router = APIRouter(tags=["flags"], route_class=DishkaRoute)


class FlagBody(BaseModel):
    """Report request body."""

    reason: FlagReason
    description: str | None = Field(default=None, max_length=2000)


class ReviewBody(BaseModel):
    """Reviewer decision body."""

    action: str
    notes: str | None = Field(default=None, max_length=2000)


@router.post(
    "/posts/{post_id}/flags",
    response_model=FlagItem,
    status_code=status.HTTP_201_CREATED,
)
async def flag_post(
    post_id: UUID,
    body: FlagBody,
    flag_use_case: FromDishka[FlagPostUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FlagItem:
    """Report a post.

    Requires authentication. Reaching the report threshold moves the post to
    FLAGGED.
    """
    user = await require_user(current_user_use_case, auth_token)
    return await flag_use_case.execute(
        FlagPostRequest(
            post_id=post_id,
            reason=body.reason,
            description=body.description,
            user_handle=user.handle,
        )
    )


@router.get("/flags", response_model=ListFlagsResponse)
async def list_flags(
    list_use_case: FromDishka[ListFlagsUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    flag_status: FlagStatus | None = None,
    post_id: UUID | None = None,
    reason: FlagReason | None = None,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    cursor: str | None = Query(default=None, pattern=CURSOR_PATTERN),
    auth_token: str | None = Cookie(default=None),
) -> ListFlagsResponse:
    """List a page of reports, newest first. Requires a reviewer role."""
    user = await require_user(current_user_use_case, auth_token)
    return await list_use_case.execute(
        ListFlagsRequest(
            reviewer_handle=user.handle,
            status=flag_status,
            post_id=post_id,
            reason=reason,
            limit=limit,
            cursor=cursor,
        )
    )


@router.post("/flags/{flag_id}/review", response_model=FlagItem)
async def review_flag(
    flag_id: UUID,
    body: ReviewBody,
    review_use_case: FromDishka[ReviewFlagUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FlagItem:
    """Resolve or dismiss a pending report. Requires a reviewer role."""
    user = await require_user(current_user_use_case, auth_token)
    return await review_use_case.execute(
        ReviewFlagRequest(
            flag_id=flag_id,
            action=body.action,
            notes=body.notes,
            reviewer_handle=user.handle,
        )
    )


@router.post("/posts/{post_id}/moderation", response_model=ModeratePostResponse)
async def moderate_post(
    post_id: UUID,
    body: ReviewBody,
    moderate_use_case: FromDishka[ModeratePostUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ModeratePostResponse:
    """Apply a moderation decision to a post. Requires a reviewer role.

    Approving a post resolves all of its pending reports.
    """
    user = await require_user(current_user_use_case, auth_token)
    return await moderate_use_case.execute(
        ModeratePostRequest(
            post_id=post_id,
            action=body.action,
            notes=body.notes,
            reviewer_handle=user.handle,
        )
    )
