"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from engage.domain.model.user import User
from engage.domain.value import Handle, UserId


class UserRepository(ABC):
    """Repository for the User projection.

    Users are written by the authentication system; this core reads them to
    resolve handles and roles.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_handle(self, handle: Handle) -> Optional[User]:
        """Find a user by their handle.

        Args:
            handle: The user's handle

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save a user (create or update)."""
        pass
