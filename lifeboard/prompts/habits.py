"""Prompt templates for habit insights."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any


def get_recommendation_prompt(goals: str, current_habits: Sequence[str]) -> str:
    habits = ", ".join(current_habits) if current_habits else "none"
    return (
        "As a habit-building expert, suggest 3-5 personalized habits for someone "
        f'with these goals: "{goals}".\n'
        f"They currently have these habits: {habits}.\n\n"
        "Provide the response as a JSON array with this structure for each habit:\n"
        "{\n"
        '  "name": "Habit name",\n'
        '  "description": "Brief explanation",\n'
        '  "type": "positive",\n'
        '  "reason": "Why this habit would help achieve their goals"\n'
        "}\n"
    )


def get_analysis_prompt(habit_labels: Sequence[str], completions: Sequence[dict[str, Any]]) -> str:
    return (
        "Analyze these habit patterns and provide insights:\n"
        f"Habits: {', '.join(habit_labels)}\n"
        f"Completion history: {json.dumps(list(completions))}\n\n"
        "Provide specific, actionable insights about patterns, potential obstacles, "
        "and suggestions for improvement.\n"
        "Keep the response under 200 words.\n"
    )


def get_motivation_prompt(progress: str, goals: str) -> str:
    return (
        "Create a motivational message for someone working on habit formation.\n"
        f"Their progress: {progress}\n"
        f"Their goals: {goals}\n\n"
        "Make it encouraging, specific to their situation, and keep it under 100 words.\n"
    )
