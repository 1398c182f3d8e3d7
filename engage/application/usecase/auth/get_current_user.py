"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from engage.domain.error import NotFoundError, UnauthenticatedError
from engage.domain.service import JWTService, UserService
from engage.domain.value import UserId
from engage.util.jwt import JWTError

from ..base import BaseUseCase


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str | None = None  # JWT token from the auth cookie


class CurrentUser(BaseModel):
    """The authenticated caller."""

    user_id: str
    handle: str
    is_privileged: bool


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for resolving the authenticated caller from a token."""

    def __init__(self, jwt_service: JWTService, user_service: UserService) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_service: User domain service
        """
        self.jwt_service = jwt_service
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> CurrentUser:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Load the user named by the token's user_id
        3. Return handle and reviewer privilege

        Args:
            request: Request with JWT token

        Returns:
            The current user

        Raises:
            UnauthenticatedError: If the token is missing, invalid, expired or
                names an unknown user
        """
        if not request.token:
            raise UnauthenticatedError()

        try:
            payload = self.jwt_service.verify_token(request.token)
            user = await self.user_service.get_by_id(UserId(UUID(payload.user_id)))
        except (JWTError, NotFoundError, ValueError) as e:
            raise UnauthenticatedError() from e

        return CurrentUser(
            user_id=str(user.id),
            handle=user.handle.root,
            is_privileged=user.is_privileged,
        )
