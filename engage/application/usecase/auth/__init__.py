"""Authentication use cases."""

from .get_current_user import CurrentUser, GetCurrentUserRequest, GetCurrentUserUseCase

__all__ = [
    "CurrentUser",
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
]
