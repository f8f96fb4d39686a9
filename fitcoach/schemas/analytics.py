"""Analytics response schemas."""

import datetime as dt

from fitcoach.schemas.base import ApiModel


class WeightSummary(ApiModel):
    current: float
    seven_day_avg: float
    target: float | None = None


class CalorieSummary(ApiModel):
    base: int
    workout: int
    target: int


class DailySummary(ApiModel):
    weight: WeightSummary
    calories: CalorieSummary


class WorkoutCount(ApiModel):
    count: int


class ExerciseHistoryPoint(ApiModel):
    date: dt.date
    reps: int
    weight: float | None = None
    sets: int


class CardioSummaryRow(ApiModel):
    activity_type: str
    total_minutes: float
    total_sessions: int
