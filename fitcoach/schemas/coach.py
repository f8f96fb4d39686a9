"""Fitness context sent to the coach, and the insight it returns."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from fitcoach.schemas.analytics import CardioSummaryRow
from fitcoach.schemas.base import ApiModel


class ProfileContext(ApiModel):
    name: str
    age: int | None = None
    height_cm: float | None = None
    sex: str | None = None
    activity_level: str | None = None
    target_weight: float | None = None
    weekly_goal: float | None = None


class ContextExercise(ApiModel):
    exercise_name: str
    sets: int
    reps: int
    weight: float | None = None
    weight_unit: str | None = None


class ContextCardio(ApiModel):
    activity_type: str
    duration_minutes: float
    distance_km: float | None = None
    calories_burned: int | None = None


class ContextWorkout(ApiModel):
    date: dt.date
    name: str | None = None
    exercises: list[ContextExercise] = []
    cardio: list[ContextCardio] = []


class ContextWeightLog(ApiModel):
    date: dt.date
    weight: float


class ContextStats(ApiModel):
    total_workouts: int
    unique_exercises: list[str] = []
    cardio_summary: list[CardioSummaryRow] = []


class FitnessContext(ApiModel):
    profile: ProfileContext
    workouts: list[ContextWorkout] = []
    weight_history: list[ContextWeightLog] = []
    stats: ContextStats


# ── Coach output ─────────────────────────────────────────────────────────

class SuggestedExercise(ApiModel):
    exercise_name: str
    sets: int
    reps: int
    weight: float | None = None
    notes: str | None = None


class SuggestedWorkout(ApiModel):
    name: str
    exercises: list[SuggestedExercise] = []


class AiInsight(ApiModel):
    answer: str
    recommendations: list[str] | None = None
    suggested_workout: SuggestedWorkout | None = None


class AskRequest(ApiModel):
    question: str = Field(..., min_length=1, max_length=2000)
