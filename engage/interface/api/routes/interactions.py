"""Post interaction routes: likes, bookmarks, shares and views."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Request
from pydantic import BaseModel, Field

from engage.application.usecase.auth import GetCurrentUserUseCase
from engage.application.usecase.reaction import (
    GetPostInteractionRequest,
    GetPostInteractionResponse,
    GetPostInteractionUseCase,
    SharePostRequest,
    SharePostResponse,
    SharePostUseCase,
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)
from engage.application.usecase.view import (
    RecordViewRequest,
    RecordViewResponse,
    RecordViewUseCase,
)
from engage.domain.value import ReactionKind
from engage.interface.api.identity import optional_user, require_user

router = APIRouter(tags=["interactions"], route_class=DishkaRoute)


class ShareBody(BaseModel):
    """Share request body."""

    platform: str = Field(min_length=1, max_length=50)


@router.post("/posts/{post_id}/like", response_model=ToggleReactionResponse)
async def toggle_post_like(
    post_id: UUID,
    toggle_use_case: FromDishka[ToggleReactionUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ToggleReactionResponse:
    """Like a post, or remove the like if present.

    Requires authentication.
    """
    user = await require_user(current_user_use_case, auth_token)
    return await toggle_use_case.execute(
        ToggleReactionRequest(
            kind=ReactionKind.LIKE, target_id=post_id, user_handle=user.handle
        )
    )


@router.post("/posts/{post_id}/bookmark", response_model=ToggleReactionResponse)
async def toggle_post_bookmark(
    post_id: UUID,
    toggle_use_case: FromDishka[ToggleReactionUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ToggleReactionResponse:
    """Bookmark a post, or remove the bookmark if present.

    Requires authentication.
    """
    user = await require_user(current_user_use_case, auth_token)
    return await toggle_use_case.execute(
        ToggleReactionRequest(
            kind=ReactionKind.BOOKMARK, target_id=post_id, user_handle=user.handle
        )
    )


@router.post("/posts/{post_id}/share", response_model=SharePostResponse)
async def share_post(
    post_id: UUID,
    body: ShareBody,
    share_use_case: FromDishka[SharePostUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> SharePostResponse:
    """Record a share of a post. Anonymous shares are allowed."""
    user = await optional_user(current_user_use_case, auth_token)
    return await share_use_case.execute(
        SharePostRequest(
            post_id=post_id,
            platform=body.platform,
            user_handle=user.handle if user else None,
        )
    )


@router.post("/posts/{post_id}/views", response_model=RecordViewResponse)
async def record_view(
    post_id: UUID,
    request: Request,
    view_use_case: FromDishka[RecordViewUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> RecordViewResponse:
    """Record a view of a post.

    The view is always logged; the post's view count only moves when the
    caller has not viewed the post within the cool-down window.
    """
    user = await optional_user(current_user_use_case, auth_token)
    return await view_use_case.execute(
        RecordViewRequest(
            post_id=post_id,
            user_handle=user.handle if user else None,
            ip_address=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
            referrer=request.headers.get("referer"),
        )
    )


@router.get("/posts/{post_id}/interaction", response_model=GetPostInteractionResponse)
async def get_post_interaction(
    post_id: UUID,
    interaction_use_case: FromDishka[GetPostInteractionUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetPostInteractionResponse:
    """Whether the caller has liked and bookmarked a post.

    Anonymous callers get false for both.
    """
    user = await optional_user(current_user_use_case, auth_token)
    return await interaction_use_case.execute(
        GetPostInteractionRequest(
            post_id=post_id, user_handle=user.handle if user else None
        )
    )
