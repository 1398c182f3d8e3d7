"""Session token domain service."""

import logfire

from engage.config import AuthSettings
from engage.util.jwt import (
    JWTError,
    TokenPayload,
    decode_session_token,
    encode_session_token,
)

from .base import Service


class JWTService(Service):
    """Reads (and, for tooling, writes) session tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: str, handle: str) -> str:
        """Issue a session token for a user.

        Args:
            user_id: User ID
            handle: User handle

        Returns:
            Encoded token
        """
        return encode_session_token(user_id, handle, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a session token.

        Args:
            token: Token from the auth cookie

        Returns:
            Token claims

        Raises:
            JWTError: If the token cannot identify a caller
        """
        try:
            return decode_session_token(token, self.auth_settings)
        except JWTError as e:
            logfire.debug("Session token rejected", error=str(e))
            raise
