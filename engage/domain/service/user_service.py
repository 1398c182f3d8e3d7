"""User domain service."""

import logfire

from engage.domain.error import ForbiddenError, NotFoundError
from engage.domain.model import User
from engage.domain.repository import UserRepository
from engage.domain.value import Handle, UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            logfire.info("User found", user_id=str(user_id), handle=user.handle.root)
            return user

    async def get_by_handle(self, handle: Handle) -> User:
        """Get user by handle.

        Args:
            handle: User handle

        Returns:
            User entity

        Raises:
            NotFoundError: If no user has this handle
        """
        with logfire.span("user_service.get_by_handle", handle=handle.root):
            user = await self.user_repository.find_by_handle(handle)
            if not user:
                logfire.warn("User not found", handle=handle.root)
                raise NotFoundError("User", handle.root)
            return user

    async def require_reviewer(self, handle: Handle) -> User:
        """Get a user by handle, requiring a privileged role.

        Raises:
            NotFoundError: If no user has this handle
            ForbiddenError: If the user is not staff or admin
        """
        user = await self.get_by_handle(handle)
        if not user.is_privileged:
            logfire.warn("Reviewer action by unprivileged user", handle=handle.root)
            raise ForbiddenError("Reviewer role required")
        return user
