"""JWT token domain service."""

import logfire

from forum.config import AuthSettings
from forum.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for verifying the tokens issued by the auth service."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Args:
            token: JWT token string

        Returns:
            Token payload

        Raises:
            JWTError: If the token is invalid, expired or does not carry a
                UUID user ID
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                payload = verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.error("JWT token verification failed", error=str(e))
                raise
            logfire.info("JWT token verified", user_id=str(payload.user_id))
            return payload

    def get_user_id_from_token(self, token: str | None) -> str | None:
        """Extract user ID from JWT token without raising exceptions.

        For routes that optionally authenticate users.

        Args:
            token: JWT token string (optional)

        Returns:
            User ID (a UUID string) if the token is valid, None if it is
            missing or invalid
        """
        if not token:
            return None

        try:
            return str(self.verify_token(token).user_id)
        except JWTError as e:
            # Invalid or expired token, treat as unauthenticated
            logfire.debug(
                "JWT verification failed, treating as unauthenticated", error=str(e)
            )
            return None
