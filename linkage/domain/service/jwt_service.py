"""Caller authentication from session tokens."""

import logfire

from linkage.config import AuthSettings
from linkage.domain.value import UserId
from linkage.util.jwt import JWTError, TokenPayload, create_token, verify_token


class JWTService:
    """Issues and checks the session tokens that identify callers."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, session_id: str) -> str:
        return create_token(str(user_id), session_id, self.auth_settings)

    def authenticate(self, token: str) -> TokenPayload:
        """Resolve the caller behind ``token``.

        Raises:
            JWTError: If the token is not valid or its subject is not a
                directory user id
        """
        with logfire.span("jwt_service.authenticate"):
            try:
                payload = verify_token(token, self.auth_settings)
                UserId(payload.sub)
            except JWTError as e:
                logfire.warn("Session token rejected", reason=str(e))
                raise
            except ValueError as e:
                logfire.warn("Session token rejected", reason="malformed subject")
                raise JWTError("Token subject is not a directory user id") from e
            return payload
