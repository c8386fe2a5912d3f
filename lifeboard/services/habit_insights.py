"""AI-enriched habit insights.

Every insight degrades to a fixed fallback when the model is unavailable or
answers with something unusable, so these endpoints never fail because of
the AI provider. Each call is recorded as an ``AIInteraction``.
"""

from __future__ import annotations

import json
import re
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from lifeboard.logger import get_logger, log_exception
from lifeboard.models import AIInteraction, AIInteractionType, Habit
from lifeboard.prompts import get_analysis_prompt, get_motivation_prompt, get_recommendation_prompt
from lifeboard.schemas.habit import HabitCompletionStats, HabitRecommendation
from lifeboard.services.ai_client import TextGenerator
from lifeboard.services.errors import DependencyError, ValidationError
from lifeboard.services.habits import list_habits

logger = get_logger(__name__)

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_recommendations_adapter = TypeAdapter(list[HabitRecommendation])

FALLBACK_RECOMMENDATIONS = [
    HabitRecommendation(
        name="Morning Meditation",
        description="Start your day with 5 minutes of meditation",
        type="positive",
        reason="Helps with focus and reduces stress, supporting your goals",
    )
]
FALLBACK_ANALYSIS = (
    "We couldn't generate a detailed analysis right now. Keep logging your habits "
    "consistently; steady daily completions are the strongest signal of progress."
)
FALLBACK_MOTIVATION = (
    "Every completion counts. Keep showing up for your habits today and the "
    "progress will follow."
)

RECOMMENDATION_MAX_TOKENS = 500
ANALYSIS_MAX_TOKENS = 300
MOTIVATION_MAX_TOKENS = 150


def parse_recommendations(reply: str) -> list[HabitRecommendation]:
    """Pull the JSON array of recommendations out of a model reply.

    Models often wrap the array in prose, so the outermost ``[...]`` span is
    parsed when present, else the whole reply.

    Raises:
        ValueError: no parseable array of recommendation objects
    """
    match = JSON_ARRAY_PATTERN.search(reply)
    raw = match.group(0) if match else reply
    try:
        recommendations = _recommendations_adapter.validate_python(json.loads(raw))
    except (json.JSONDecodeError, PydanticValidationError) as exc:
        raise ValueError("AI reply is not a JSON array of recommendations") from exc
    if not recommendations:
        raise ValueError("AI reply contained no recommendations")
    return recommendations


def completion_stats(habits: list[Habit]) -> list[HabitCompletionStats]:
    stats = []
    for habit in habits:
        history = habit.completion_dates
        stats.append(
            HabitCompletionStats(
                name=habit.name,
                streak=habit.streak,
                completion_count=len(history),
                last_completion=history[-1] if history else None,
            )
        )
    return stats


def progress_sentence(habits: list[Habit]) -> tuple[str, int, int]:
    completed_count = sum(len(habit.completion_dates_raw or []) for habit in habits)
    current_streak = max((habit.streak for habit in habits), default=0)
    progress = (
        f"You've completed {completed_count} habit sessions with a current streak of {current_streak} days."
    )
    return progress, completed_count, current_streak


async def _generate(generator: TextGenerator, prompt: str, *, max_tokens: int, insight: str) -> str | None:
    try:
        return await generator.generate(prompt, max_tokens=max_tokens)
    except DependencyError as exc:
        log_exception(
            logger, exc, "AI generation failed, using fallback", level="warning", include_traceback=False, insight=insight
        )
        return None


async def _record_interaction(
    db: AsyncSession,
    user_id: UUID,
    interaction_type: AIInteractionType,
    prompt: str,
    response: str,
    details: dict[str, Any],
) -> None:
    db.add(
        AIInteraction(
            user_id=user_id,
            type=interaction_type,
            prompt=prompt,
            response=response,
            details=details,
        )
    )
    await db.commit()


async def recommend_habits(
    db: AsyncSession,
    user_id: UUID,
    generator: TextGenerator,
    goals: str | None,
) -> list[HabitRecommendation]:
    """Suggest habits for the user's goals.

    Raises:
        ValidationError: ``goals`` is missing or blank
    """
    if not goals or not goals.strip():
        raise ValidationError("Goals parameter is required")
    goals = goals.strip()

    habit_names = [habit.name for habit in await list_habits(db, user_id)]
    reply = await _generate(
        generator,
        get_recommendation_prompt(goals, habit_names),
        max_tokens=RECOMMENDATION_MAX_TOKENS,
        insight="recommendation",
    )

    recommendations = FALLBACK_RECOMMENDATIONS
    fallback = True
    if reply is not None:
        try:
            recommendations = parse_recommendations(reply)
            fallback = False
        except ValueError as exc:
            logger.warning("Unparseable AI recommendations, using fallback", error=str(exc), reply=reply[:200])

    await _record_interaction(
        db,
        user_id,
        AIInteractionType.RECOMMENDATION,
        f"Habit recommendations for goals: {goals}",
        json.dumps([rec.model_dump() for rec in recommendations]),
        {"goals": goals, "currentHabits": habit_names, "fallback": fallback},
    )
    return recommendations


async def analyze_habits(db: AsyncSession, user_id: UUID, generator: TextGenerator) -> str:
    """Narrative analysis of the user's completion patterns.

    Raises:
        ValidationError: the user has no habits
    """
    habits = await list_habits(db, user_id)
    if not habits:
        raise ValidationError("No habits to analyze")

    stats = [entry.as_prompt_dict() for entry in completion_stats(habits)]
    labels = [f"{habit.name} ({habit.type.value})" for habit in habits]
    reply = await _generate(
        generator,
        get_analysis_prompt(labels, stats),
        max_tokens=ANALYSIS_MAX_TOKENS,
        insight="analysis",
    )
    analysis = reply if reply is not None else FALLBACK_ANALYSIS

    await _record_interaction(
        db,
        user_id,
        AIInteractionType.ANALYSIS,
        "Habit pattern analysis",
        analysis,
        {"habitsCount": len(habits), "fallback": reply is None},
    )
    return analysis


async def motivate(db: AsyncSession, user_id: UUID, generator: TextGenerator) -> str:
    habits = await list_habits(db, user_id)
    progress, completed_count, current_streak = progress_sentence(habits)
    goals = ", ".join(habit.name for habit in habits)

    reply = await _generate(
        generator,
        get_motivation_prompt(progress, goals),
        max_tokens=MOTIVATION_MAX_TOKENS,
        insight="motivation",
    )
    motivation = reply if reply is not None else FALLBACK_MOTIVATION

    await _record_interaction(
        db,
        user_id,
        AIInteractionType.MOTIVATION,
        "Generate motivational message",
        motivation,
        {"completedCount": completed_count, "currentStreak": current_streak, "fallback": reply is None},
    )
    return motivation
