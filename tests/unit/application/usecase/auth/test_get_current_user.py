"""Unit tests for GetCurrentUserUseCase."""

from datetime import timedelta
from uuid import uuid4

import jwt
import pytest

from engage.application.usecase.auth import GetCurrentUserRequest, GetCurrentUserUseCase
from engage.config import AuthSettings
from engage.domain.error import UnauthenticatedError
from engage.domain.repository import UserRepository
from engage.domain.service import JWTService
from engage.util.time import utcnow
from tests.conftest import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestGetCurrentUserUseCase:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_valid_token_resolves_user_and_role(self, unit_env):
        # Arrange
        use_case = await unit_env.get(GetCurrentUserUseCase)
        jwt_service = await unit_env.get(JWTService)
        user = make_user("moderator", staff=True)
        await (await unit_env.get(UserRepository)).save(user)
        token = jwt_service.create_token(str(user.id), user.handle.root)

        # Act
        current = await use_case.execute(GetCurrentUserRequest(token=token))

        # Assert
        assert current.user_id == str(user.id)
        assert current.handle == "moderator"
        assert current.is_privileged is True

    @pytest.mark.asyncio
    async def test_missing_token_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(GetCurrentUserRequest(token=None))

    @pytest.mark.asyncio
    async def test_garbage_token_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(GetCurrentUserRequest(token="not-a-jwt"))

    @pytest.mark.asyncio
    async def test_expired_token_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)
        settings = await unit_env.get(AuthSettings)
        user = make_user("reader")
        await (await unit_env.get(UserRepository)).save(user)
        token = jwt.encode(
            {
                "user_id": str(user.id),
                "handle": "reader",
                "exp": utcnow() - timedelta(minutes=1),
            },
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(GetCurrentUserRequest(token=token))

    @pytest.mark.asyncio
    async def test_token_for_unknown_user_is_unauthenticated(self, unit_env):
        use_case = await unit_env.get(GetCurrentUserUseCase)
        jwt_service = await unit_env.get(JWTService)
        token = jwt_service.create_token(str(uuid4()), "ghost")

        with pytest.raises(UnauthenticatedError):
            await use_case.execute(GetCurrentUserRequest(token=token))
