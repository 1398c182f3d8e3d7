"""PostgreSQL repository implementations."""

from engage.persistence.repository.comment import PostgresCommentRepository
from engage.persistence.repository.flag import (
    PostgresCommentFlagRepository,
    PostgresFlagRepository,
)
from engage.persistence.repository.post import PostgresPostRepository
from engage.persistence.repository.reaction import (
    PostgresReactionRepository,
    PostgresShareRepository,
)
from engage.persistence.repository.user import PostgresUserRepository
from engage.persistence.repository.view import PostgresViewRepository

__all__ = [
    "PostgresCommentFlagRepository",
    "PostgresCommentRepository",
    "PostgresFlagRepository",
    "PostgresPostRepository",
    "PostgresReactionRepository",
    "PostgresShareRepository",
    "PostgresUserRepository",
    "PostgresViewRepository",
]
