"""Resolves the calling user for every protected route."""

from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.database import get_db
from lifeboard.models import User
from lifeboard.security import TokenSubjectError, decode_access_token, token_subject

# tokenUrl only feeds the OpenAPI docs; the external auth service serves it
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user_id(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> UUID:
    """User id from the bearer token, provided that user still exists."""
    claims = decode_access_token(token)
    if not claims:
        raise _unauthorized("Could not validate credentials")

    try:
        user_id = token_subject(claims)
    except TokenSubjectError as exc:
        raise _unauthorized(str(exc)) from exc

    known = await db.scalar(select(User.id).where(User.id == user_id))
    if known is None:
        raise _unauthorized("User not found")
    return user_id
