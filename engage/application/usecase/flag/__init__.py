"""Flag and moderation use cases."""

from .common import FlagItem
from .flag_post import FlagPostRequest, FlagPostUseCase
from .list_flags import ListFlagsRequest, ListFlagsResponse, ListFlagsUseCase
from .moderate_post import (
    ModeratePostRequest,
    ModeratePostResponse,
    ModeratePostUseCase,
)
from .review_flag import ReviewFlagRequest, ReviewFlagUseCase

__all__ = [
    "FlagItem",
    "FlagPostRequest",
    "FlagPostUseCase",
    "ListFlagsRequest",
    "ListFlagsResponse",
    "ListFlagsUseCase",
    "ModeratePostRequest",
    "ModeratePostResponse",
    "ModeratePostUseCase",
    "ReviewFlagRequest",
    "ReviewFlagUseCase",
]
