"""Repository interfaces for the interaction and moderation core.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from engage.domain.repository.comment import COMMENT_COUNTERS, CommentRepository
from engage.domain.repository.flag import CommentFlagRepository, FlagRepository
from engage.domain.repository.post import POST_COUNTERS, PostRepository
from engage.domain.repository.reaction import ReactionRepository, ShareRepository
from engage.domain.repository.user import UserRepository
from engage.domain.repository.view import ViewRepository

__all__ = [
    "COMMENT_COUNTERS",
    "POST_COUNTERS",
    "CommentFlagRepository",
    "CommentRepository",
    "FlagRepository",
    "PostRepository",
    "ReactionRepository",
    "ShareRepository",
    "UserRepository",
    "ViewRepository",
]
