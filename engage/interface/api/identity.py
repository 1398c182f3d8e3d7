"""Caller identity helpers for routes."""

from engage.application.usecase.auth import (
    CurrentUser,
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
)
from engage.domain.error import UnauthenticatedError


async def require_user(
    use_case: GetCurrentUserUseCase, auth_token: str | None
) -> CurrentUser:
    """Resolve the caller or fail.

    Raises:
        UnauthenticatedError: If no valid token names a known user
    """
    return await use_case.execute(GetCurrentUserRequest(token=auth_token))


async def optional_user(
    use_case: GetCurrentUserUseCase, auth_token: str | None
) -> CurrentUser | None:
    """Resolve the caller, or None for anonymous requests."""
    if not auth_token:
        return None
    try:
        return await use_case.execute(GetCurrentUserRequest(token=auth_token))
    except UnauthenticatedError:
        return None
