"""JWT access tokens.

Lifeboard does not issue credentials itself: tokens are minted by the auth
service that shares ``SECRET_KEY`` and carry the user id in ``sub``.
``create_access_token`` exists for tooling and tests.
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt

from lifeboard.config import settings
from lifeboard.logger import get_logger

logger = get_logger(__name__)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(UTC) + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Verified claims, or None when the token is expired, forged or malformed."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.debug("Access token expired")
    except jwt.PyJWTError as exc:
        logger.warning("Access token rejected", error=str(exc), error_type=type(exc).__name__)
    return None


class TokenSubjectError(ValueError):
    """The token's ``sub`` claim is missing or not a user id."""


def token_subject(claims: dict[str, Any]) -> UUID:
    subject = claims.get("sub")
    if not subject:
        raise TokenSubjectError("Token missing subject")
    try:
        return UUID(str(subject))
    except ValueError as exc:
        raise TokenSubjectError("Invalid user ID format in token") from exc
