"""Workout session, exercise and cardio schemas.

Exercise reps/sets bounds are enforced in services.storage so every creation
path (quick-add, voice confirm, edit) reports the same field-level error.
"""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from fitcoach.schemas.base import ApiModel


# ── Exercises ────────────────────────────────────────────────────────────

class ExerciseCreate(ApiModel):
    session_id: int
    exercise_name: str = Field(..., max_length=255)
    reps: int
    sets: int = 1
    weight: float | None = None
    weight_unit: str = Field(default="lbs", max_length=10)
    raw_voice_input: str | None = None


class ExerciseUpdate(ApiModel):
    exercise_name: str | None = Field(None, max_length=255)
    reps: int | None = None
    sets: int | None = None
    weight: float | None = None
    weight_unit: str | None = Field(None, max_length=10)


class ExerciseRead(ApiModel):
    id: int
    session_id: int
    exercise_name: str
    reps: int
    sets: int
    weight: float | None = None
    weight_unit: str
    raw_voice_input: str | None = None
    manually_edited: bool
    created_at: dt.datetime


class ExerciseNameRead(ApiModel):
    name: str
    usage_count: int
    last_used: dt.datetime


# ── Cardio ───────────────────────────────────────────────────────────────

class CardioCreate(ApiModel):
    session_id: int
    activity_type: str = Field(..., max_length=100)
    duration_minutes: float
    distance_km: float | None = None
    calories_burned: int | None = None
    notes: str | None = None


class CardioUpdate(ApiModel):
    activity_type: str | None = Field(None, max_length=100)
    duration_minutes: float | None = None
    distance_km: float | None = None
    calories_burned: int | None = None
    notes: str | None = None


class CardioRead(ApiModel):
    id: int
    session_id: int
    activity_type: str
    duration_minutes: float
    distance_km: float | None = None
    calories_burned: int | None = None
    notes: str | None = None
    created_at: dt.datetime


# ── Sessions ─────────────────────────────────────────────────────────────

class WorkoutSessionCreate(ApiModel):
    date: dt.date | None = Field(None, description="Defaults to today")
    name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    start_time: dt.datetime | None = Field(None, description="Defaults to now")


class WorkoutSessionUpdate(ApiModel):
    name: str | None = Field(None, max_length=255)
    location: str | None = Field(None, max_length=255)
    end_time: dt.datetime | None = None


class WorkoutSessionRead(ApiModel):
    id: int
    user_id: int
    date: dt.date
    name: str | None = None
    location: str | None = None
    start_time: dt.datetime | None = None
    end_time: dt.datetime | None = None
    created_at: dt.datetime


class WorkoutSessionWithExercises(WorkoutSessionRead):
    exercises: list[ExerciseRead] = []
    cardio_sessions: list[CardioRead] = []
