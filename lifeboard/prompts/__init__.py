"""Prompts package."""

from lifeboard.prompts.habits import (
    get_analysis_prompt,
    get_motivation_prompt,
    get_recommendation_prompt,
)

__all__ = [
    "get_analysis_prompt",
    "get_motivation_prompt",
    "get_recommendation_prompt",
]
