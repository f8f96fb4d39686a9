"""Read-side analytics: daily calorie summary, workout counts, exercise and cardio history.

Name matching is case-insensitive throughout (exercise history, distinct
names, cardio grouping); the stored casing is what gets displayed.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.core.constants import (
    DEFAULT_BASE_CALORIES,
    MOVING_AVERAGE_DAYS,
    SUMMARY_WEIGHT_WINDOW_DAYS,
)
from fitcoach.models.workout import CardioSession, Exercise, WorkoutSession
from fitcoach.schemas.analytics import (
    CalorieSummary,
    CardioSummaryRow,
    DailySummary,
    ExerciseHistoryPoint,
    WeightSummary,
)
from fitcoach.services import storage
from fitcoach.services.calculations import (
    calculate_bmr,
    calculate_moving_average,
    calculate_tdee,
    estimate_workout_calories,
    get_daily_calorie_target,
    lbs_to_kg,
    round_half_up,
)

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def session_duration_minutes(session: WorkoutSession | None) -> float:
    """Minutes between start and end; 0 for a missing or unfinished session."""
    if session is None or session.start_time is None or session.end_time is None:
        return 0.0
    delta = _as_utc(session.end_time) - _as_utc(session.start_time)
    return max(0.0, delta.total_seconds() / 60)


async def get_daily_summary(db: AsyncSession, user_id: int, today: date | None = None) -> DailySummary:
    """
    Current weight, 7-day average and today's calorie budget.

    Base calories come from BMR x activity multiplier when age, height, sex and a
    current weight are known, else a flat 2000. A finished session today adds its
    MET estimate; an open one adds nothing.
    """
    user = await storage.get_user(db, user_id)

    latest = await storage.get_latest_weight_log(db, user_id)
    current_weight = latest.weight if latest else (user.target_weight or 0)
    recent_logs = await storage.get_weight_logs(db, user_id, days=SUMMARY_WEIGHT_WINDOW_DAYS, today=today)
    moving_avg = calculate_moving_average([log.weight for log in recent_logs], MOVING_AVERAGE_DAYS)

    base_calories = DEFAULT_BASE_CALORIES
    if user.age and user.height_cm and user.sex and current_weight > 0:
        bmr = calculate_bmr(lbs_to_kg(current_weight), user.height_cm, user.age, user.sex)
        base_calories = round_half_up(calculate_tdee(bmr, user.activity_level))

    today_session = await storage.get_today_session(db, user_id, today)
    workout_calories = 0
    duration = session_duration_minutes(today_session)
    if duration > 0:
        workout_calories = round_half_up(estimate_workout_calories(duration, current_weight))

    if user.weekly_goal:
        target = round_half_up(get_daily_calorie_target(base_calories, user.weekly_goal)) + workout_calories
    else:
        target = base_calories + workout_calories

    return DailySummary(
        weight=WeightSummary(
            current=current_weight,
            seven_day_avg=round_half_up(moving_avg * 10) / 10,
            target=user.target_weight,
        ),
        calories=CalorieSummary(base=base_calories, workout=workout_calories, target=target),
    )


async def get_workout_count(db: AsyncSession, user_id: int) -> int:
    """All-time number of sessions."""
    return await storage.count_workout_sessions(db, user_id)


async def get_exercise_history(
    db: AsyncSession, user_id: int, exercise_name: str
) -> list[ExerciseHistoryPoint]:
    """Every logged instance of an exercise, newest session first."""
    result = await db.execute(
        select(WorkoutSession.date, Exercise.reps, Exercise.weight, Exercise.sets)
        .select_from(Exercise)
        .join(WorkoutSession, WorkoutSession.id == Exercise.session_id)
        .where(
            WorkoutSession.user_id == user_id,
            func.lower(Exercise.exercise_name) == exercise_name.strip().lower(),
        )
        .order_by(WorkoutSession.date.desc(), Exercise.created_at.desc(), Exercise.id.desc())
    )
    return [
        ExerciseHistoryPoint(date=row.date, reps=row.reps, weight=row.weight, sets=row.sets)
        for row in result.all()
    ]


async def get_unique_exercise_names(db: AsyncSession, user_id: int) -> list[str]:
    """Distinct exercise names the user has logged, alphabetical."""
    lowered = func.lower(Exercise.exercise_name)
    result = await db.execute(
        select(func.min(Exercise.exercise_name))
        .join(WorkoutSession, WorkoutSession.id == Exercise.session_id)
        .where(WorkoutSession.user_id == user_id)
        .group_by(lowered)
        .order_by(lowered)
    )
    return list(result.scalars().all())


async def get_cardio_summary(
    db: AsyncSession, user_id: int, activity_type: str | None = None
) -> list[CardioSummaryRow]:
    """Total minutes and session count per activity type."""
    lowered = func.lower(CardioSession.activity_type)
    stmt = (
        select(
            func.min(CardioSession.activity_type).label("activity_type"),
            func.sum(CardioSession.duration_minutes).label("total_minutes"),
            func.count(CardioSession.id).label("total_sessions"),
        )
        .join(WorkoutSession, WorkoutSession.id == CardioSession.session_id)
        .where(WorkoutSession.user_id == user_id)
        .group_by(lowered)
        .order_by(func.sum(CardioSession.duration_minutes).desc())
    )
    if activity_type:
        stmt = stmt.where(lowered == activity_type.strip().lower())
    result = await db.execute(stmt)
    return [
        CardioSummaryRow(
            activity_type=row.activity_type,
            total_minutes=float(row.total_minutes or 0),
            total_sessions=int(row.total_sessions or 0),
        )
        for row in result.all()
    ]
