"""AI coach: answers a free-form question over the user's fitness context.

The model is asked for JSON but its output is treated as untrusted. Each
optional field falls back to None when malformed, and a reply that is not a
JSON object with an answer comes back verbatim as the answer. Only request
failures (network, auth) propagate, as ProviderError.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError as PydanticValidationError

from fitcoach.core.errors import ValidationError
from fitcoach.schemas.coach import AiInsight, FitnessContext, SuggestedWorkout
from fitcoach.services.llm import LanguageProvider

logger = logging.getLogger(__name__)

COACH_SYSTEM_PROMPT = """You are an expert strength and conditioning coach with access to the user's complete training history.

Base every answer on the user's actual logged data: exercises, weights, reps, sets, cardio and body-weight trend.
Favor progressive overload when suggesting workouts: small, specific increases over what the user has recently done.
Point out muscle-group imbalances or neglected movement patterns when you see them.
Be encouraging, concise and concrete.

Respond with a JSON object in this shape:
{
  "answer": "direct answer to the question",
  "recommendations": ["short actionable recommendation", "..."],
  "suggestedWorkout": {
    "name": "workout name",
    "exercises": [
      {"exerciseName": "bench press", "sets": 3, "reps": 8, "weight": 185, "notes": "optional"}
    ]
  }
}
"recommendations" and "suggestedWorkout" are optional; omit them when not relevant."""


def parse_insight(content: str) -> AiInsight:
    """Coerce the model's reply into an AiInsight, degrading field by field."""
    try:
        payload = json.loads(content)
    except json.JSONDecodeError:
        logger.warning("Coach reply was not JSON, returning raw text")
        return AiInsight(answer=content)

    answer = payload.get("answer") if isinstance(payload, dict) else None
    if not isinstance(answer, str) or not answer.strip():
        logger.warning("Coach reply had no answer field, returning raw text")
        return AiInsight(answer=content)

    recommendations = payload.get("recommendations")
    if isinstance(recommendations, list):
        recommendations = [r for r in recommendations if isinstance(r, str) and r.strip()] or None
    else:
        recommendations = None

    suggested_workout = None
    if payload.get("suggestedWorkout") is not None:
        try:
            suggested_workout = SuggestedWorkout.model_validate(payload["suggestedWorkout"])
        except PydanticValidationError:
            logger.warning("Dropping malformed suggestedWorkout from coach reply")

    return AiInsight(answer=answer, recommendations=recommendations, suggested_workout=suggested_workout)


class AiCoach:
    def __init__(self, provider: LanguageProvider, model: str) -> None:
        self.provider = provider
        self.model = model

    @staticmethod
    def build_prompt(context: FitnessContext, question: str) -> str:
        return (
            "User's fitness data:\n"
            f"{context.model_dump_json(by_alias=True)}\n\n"
            f"Question: {question.strip()}"
        )

    async def ask(self, context: FitnessContext, question: str) -> AiInsight:
        if not question or not question.strip():
            raise ValidationError("question", "question is required")
        content = await self.provider.complete_json(
            COACH_SYSTEM_PROMPT, self.build_prompt(context, question), self.model
        )
        insight = parse_insight(content)
        logger.info(
            "Coach answered (%d chars, %d recommendations, workout=%s)",
            len(insight.answer),
            len(insight.recommendations or []),
            insight.suggested_workout is not None,
        )
        return insight
