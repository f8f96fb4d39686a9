"""Assemble a user's full fitness snapshot for the coach.

Runs once per coach question and is never cached. Sessions come back with
exercises and cardio batch-loaded, so the per-session reads are a fixed
number of queries rather than one per session. History is unbounded unless a
window is configured; the aggregate stats are always all-time.
"""

from __future__ import annotations

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.schemas.coach import (
    ContextCardio,
    ContextExercise,
    ContextStats,
    ContextWeightLog,
    ContextWorkout,
    FitnessContext,
    ProfileContext,
)
from fitcoach.services import analytics, storage


async def build_fitness_context(
    db: AsyncSession,
    user_id: int,
    history_days: int | None = None,
    today: date | None = None,
) -> FitnessContext:
    user = await storage.get_user(db, user_id)

    from_date = None
    if history_days:
        from_date = (today or storage.utc_today()) - timedelta(days=history_days)
    sessions = await storage.get_workout_sessions(db, user_id, from_date=from_date)
    weight_logs = await storage.get_weight_logs(db, user_id, days=history_days, today=today)

    workouts = [
        ContextWorkout(
            date=session.date,
            name=session.name,
            exercises=[
                ContextExercise.model_validate(ex)
                for ex in sorted(session.exercises, key=lambda e: e.id)
            ],
            cardio=[
                ContextCardio.model_validate(c)
                for c in sorted(session.cardio_sessions, key=lambda c: c.id)
            ],
        )
        for session in sessions
    ]

    stats = ContextStats(
        total_workouts=await analytics.get_workout_count(db, user_id),
        unique_exercises=await analytics.get_unique_exercise_names(db, user_id),
        cardio_summary=await analytics.get_cardio_summary(db, user_id),
    )

    return FitnessContext(
        profile=ProfileContext.model_validate(user),
        workouts=workouts,
        weight_history=[ContextWeightLog(date=log.date, weight=log.weight) for log in weight_logs],
        stats=stats,
    )
