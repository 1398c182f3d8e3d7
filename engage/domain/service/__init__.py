"""Domain services."""

from .base import Service
from .comment_service import CommentService, CommentThread
from .flag_service import FlagService
from .jwt_service import JWTService
from .post_service import PostService
from .reaction_service import PostInteraction, ReactionService, ToggleResult
from .stats_service import StatsService
from .user_service import UserService
from .view_service import ViewService

__all__ = [
    "CommentService",
    "CommentThread",
    "FlagService",
    "JWTService",
    "PostInteraction",
    "PostService",
    "ReactionService",
    "Service",
    "StatsService",
    "ToggleResult",
    "UserService",
    "ViewService",
]
