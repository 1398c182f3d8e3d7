"""Session token helpers.

Tokens are issued by the sign-in service and carried in the ``auth_token``
cookie. This core only needs to read them; encoding is kept for tooling and
tests that stand in for the sign-in service.
"""

from datetime import datetime, timedelta

import jwt
from pydantic import BaseModel, ValidationError

from engage.config import AuthSettings
from engage.util.time import utcnow

REQUIRED_CLAIMS = ("user_id", "handle", "exp")


class TokenPayload(BaseModel):
    """Claims of a session token."""

    user_id: str
    handle: str
    exp: datetime


class JWTError(Exception):
    """Raised for a token that cannot identify a caller."""


def encode_session_token(user_id: str, handle: str, settings: AuthSettings) -> str:
    """Encode a session token valid for ``jwt_expiry_days``."""
    claims = {
        "user_id": user_id,
        "handle": handle,
        "exp": utcnow() + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Decode a session token and check its claims.

    Raises:
        JWTError: If the token is expired, badly signed or missing a claim
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": list(REQUIRED_CLAIMS)},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        raise JWTError("Malformed token claims") from e
