"""Session token encoding.

Session tokens are issued by the embedding application after login. ``sub``
is the caller's directory user id and ``sid`` the session whose identity
view this service keeps up to date.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from linkage.config import AuthSettings

DEFAULT_TTL = timedelta(hours=1)


class TokenPayload(BaseModel):
    """Claims this service reads from a session token."""

    sub: str
    sid: str
    exp: datetime


class JWTError(Exception):
    """Session token could not be accepted."""


def create_token(
    user_id: str,
    session_id: str,
    settings: AuthSettings,
    ttl: timedelta = DEFAULT_TTL,
) -> str:
    """Encode a session token for ``user_id`` in ``session_id``."""
    claims = {
        "sub": user_id,
        "sid": session_id,
        "exp": datetime.now(timezone.utc) + ttl,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry of ``token`` and return its claims.

    Raises:
        JWTError: If the token is expired, badly signed or lacks claims
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
        return TokenPayload.model_validate(claims)
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e
    except ValidationError as e:
        raise JWTError("Token is missing required claims") from e
