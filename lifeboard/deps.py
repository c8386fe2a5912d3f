"""Common FastAPI dependencies for consistent type annotations.

Usage:
    from lifeboard.deps import AIGenerator, CurrentUserId, DbSession

    async def my_endpoint(db: DbSession, user_id: CurrentUserId, generator: AIGenerator):
        # db is AsyncSession with get_db dependency injected
        # user_id is UUID with get_current_user_id dependency injected
        # generator is the TextGenerator used for habit insights
        ...
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.auth import get_current_user_id
from lifeboard.database import get_db
from lifeboard.services.ai_client import TextGenerator, get_text_generator

DbSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUserId = Annotated[UUID, Depends(get_current_user_id)]
AIGenerator = Annotated[TextGenerator, Depends(get_text_generator)]

__all__ = ["AIGenerator", "CurrentUserId", "DbSession"]
