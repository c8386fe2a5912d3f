"""Log of AI insight requests and responses."""

from __future__ import annotations

import enum
from typing import Any

from sqlalchemy import JSON, Enum, Text
from sqlalchemy.orm import Mapped, mapped_column

from lifeboard.database import Base
from lifeboard.models.base import TimestampMixin, UserOwnedMixin, UUIDMixin


class AIInteractionType(str, enum.Enum):
    RECOMMENDATION = "recommendation"
    ANALYSIS = "analysis"
    MOTIVATION = "motivation"
    PATTERN = "pattern"


class AIInteraction(UUIDMixin, UserOwnedMixin, TimestampMixin, Base):
    """One prompt/response pair, stored whether the answer came from the model or a fallback."""

    __tablename__ = "ai_interactions"

    type: Mapped[AIInteractionType] = mapped_column(
        Enum(AIInteractionType, name="ai_interaction_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    # "metadata" is reserved on declarative classes
    details: Mapped[dict[str, Any]] = mapped_column("metadata", JSON, nullable=False, default=dict)
