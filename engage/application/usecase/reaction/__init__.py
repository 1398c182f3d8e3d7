"""Reaction use cases."""

from .get_interaction import (
    GetPostInteractionRequest,
    GetPostInteractionResponse,
    GetPostInteractionUseCase,
)
from .share_post import SharePostRequest, SharePostResponse, SharePostUseCase
from .toggle_reaction import (
    ToggleReactionRequest,
    ToggleReactionResponse,
    ToggleReactionUseCase,
)

__all__ = [
    "GetPostInteractionRequest",
    "GetPostInteractionResponse",
    "GetPostInteractionUseCase",
    "SharePostRequest",
    "SharePostResponse",
    "SharePostUseCase",
    "ToggleReactionRequest",
    "ToggleReactionResponse",
    "ToggleReactionUseCase",
]
