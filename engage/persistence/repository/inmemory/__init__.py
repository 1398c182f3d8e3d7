"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .flag import InMemoryCommentFlagRepository, InMemoryFlagRepository
from .post import InMemoryPostRepository
from .reaction import InMemoryReactionRepository, InMemoryShareRepository
from .user import InMemoryUserRepository
from .view import InMemoryViewRepository

__all__ = [
    "InMemoryCommentFlagRepository",
    "InMemoryCommentRepository",
    "InMemoryFlagRepository",
    "InMemoryPostRepository",
    "InMemoryReactionRepository",
    "InMemoryShareRepository",
    "InMemoryUserRepository",
    "InMemoryViewRepository",
]
