"""Reviewer overview routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from engage.application.usecase.auth import GetCurrentUserUseCase
from engage.application.usecase.stats import (
    GetOverviewRequest,
    GetOverviewResponse,
    GetOverviewUseCase,
)
from engage.interface.api.identity import require_user

router = APIRouter(prefix="/stats", tags=["stats"], route_class=DishkaRoute)


@router.get("/overview", response_model=GetOverviewResponse)
async def get_overview(
    overview_use_case: FromDishka[GetOverviewUseCase],
    current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetOverviewResponse:
    """Post counts by status and engagement totals. Requires a reviewer role."""
    user = await require_user(current_user_use_case, auth_token)
    return await overview_use_case.execute(
        GetOverviewRequest(reviewer_handle=user.handle)
    )
