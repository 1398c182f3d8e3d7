"""Reviewer overview use cases."""

from .get_overview import (
    EngagementOverview,
    GetOverviewRequest,
    GetOverviewResponse,
    GetOverviewUseCase,
    ModerationOverview,
    PostsOverview,
)

__all__ = [
    "EngagementOverview",
    "GetOverviewRequest",
    "GetOverviewResponse",
    "GetOverviewUseCase",
    "ModerationOverview",
    "PostsOverview",
]
