"""Persistence operations over users, weight logs, sessions, exercises and cardio.

Every lookup by id is scoped to the resolved user: another user's row is
reported as NotFoundError, same as a missing one. Exercise and cardio values
are validated here so every creation path reports the same field error.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fitcoach.core.constants import EXERCISE_NAME_SUGGESTION_LIMIT
from fitcoach.core.errors import NotFoundError, ValidationError
from fitcoach.models.exercise_name import ExerciseName
from fitcoach.models.user import User
from fitcoach.models.weight_log import WeightLog
from fitcoach.models.workout import CardioSession, Exercise, WorkoutSession
from fitcoach.schemas.profile import ProfileUpdate
from fitcoach.schemas.weight import WeightLogCreate
from fitcoach.schemas.workout import (
    CardioCreate,
    CardioUpdate,
    ExerciseCreate,
    ExerciseUpdate,
    WorkoutSessionCreate,
    WorkoutSessionUpdate,
)

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


# ── Users ────────────────────────────────────────────────────────────────

async def get_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise NotFoundError("User", user_id)
    return user


async def get_or_create_user(db: AsyncSession, user_id: int, name: str = "Athlete") -> User:
    """Return the profile, creating a bare one on first access."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user:
        return user
    user = User(id=user_id, name=name)
    db.add(user)
    await db.flush()
    await db.refresh(user)
    logger.info("Created profile for user %s", user_id)
    return user


async def update_user(db: AsyncSession, user_id: int, payload: ProfileUpdate) -> User:
    """Partial profile update. The tagged goal is stored as signed lbs/week."""
    user = await get_user(db, user_id)
    data = payload.model_dump(exclude_unset=True, exclude={"goal"}, mode="json")
    if "name" in data:
        name = (data["name"] or "").strip()
        if not name:
            raise ValidationError("name", "name cannot be empty")
        data["name"] = name
    if "goal" in payload.model_fields_set:
        user.weekly_goal = payload.goal.to_signed() if payload.goal is not None else None
    for k, v in data.items():
        setattr(user, k, v)
    await db.flush()
    await db.refresh(user)
    return user


# ── Weight logs ──────────────────────────────────────────────────────────

async def create_weight_log(db: AsyncSession, user_id: int, payload: WeightLogCreate) -> WeightLog:
    data = payload.model_dump()
    if data["date"] is None:
        data["date"] = utc_today()
    log = WeightLog(user_id=user_id, **data)
    db.add(log)
    await db.flush()
    await db.refresh(log)
    return log


async def get_weight_logs(
    db: AsyncSession, user_id: int, days: int | None = None, today: date | None = None
) -> list[WeightLog]:
    """Weight logs newest first, optionally limited to the `days` days up to `today`."""
    stmt = select(WeightLog).where(WeightLog.user_id == user_id)
    if days:
        stmt = stmt.where(WeightLog.date >= (today or utc_today()) - timedelta(days=days))
    stmt = stmt.order_by(WeightLog.date.desc(), WeightLog.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_latest_weight_log(db: AsyncSession, user_id: int) -> WeightLog | None:
    result = await db.execute(
        select(WeightLog)
        .where(WeightLog.user_id == user_id)
        .order_by(WeightLog.date.desc(), WeightLog.created_at.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


# ── Workout sessions ─────────────────────────────────────────────────────

async def create_workout_session(
    db: AsyncSession, user_id: int, payload: WorkoutSessionCreate
) -> WorkoutSession:
    """Start a session. Date defaults to today and start time to now."""
    data = payload.model_dump()
    if data["date"] is None:
        data["date"] = utc_today()
    if data["start_time"] is None:
        data["start_time"] = datetime.now(timezone.utc)
    session = WorkoutSession(user_id=user_id, **data)
    db.add(session)
    await db.flush()
    await db.refresh(session)
    return session


async def get_workout_session(db: AsyncSession, user_id: int, session_id: int) -> WorkoutSession:
    result = await db.execute(
        select(WorkoutSession).where(
            WorkoutSession.id == session_id, WorkoutSession.user_id == user_id
        )
    )
    session = result.scalar_one_or_none()
    if not session:
        raise NotFoundError("WorkoutSession", session_id)
    return session


async def get_today_session(
    db: AsyncSession, user_id: int, today: date | None = None
) -> WorkoutSession | None:
    """Most recently created session dated today, with exercises and cardio loaded."""
    result = await db.execute(
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id, WorkoutSession.date == (today or utc_today()))
        .options(selectinload(WorkoutSession.exercises), selectinload(WorkoutSession.cardio_sessions))
        .order_by(WorkoutSession.created_at.desc(), WorkoutSession.id.desc())
        .limit(1)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_workout_sessions(
    db: AsyncSession,
    user_id: int,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[WorkoutSession]:
    """Sessions newest first, each with its exercises and cardio loaded."""
    stmt = (
        select(WorkoutSession)
        .where(WorkoutSession.user_id == user_id)
        .options(selectinload(WorkoutSession.exercises), selectinload(WorkoutSession.cardio_sessions))
        .execution_options(populate_existing=True)
    )
    if from_date:
        stmt = stmt.where(WorkoutSession.date >= from_date)
    if to_date:
        stmt = stmt.where(WorkoutSession.date <= to_date)
    stmt = stmt.order_by(WorkoutSession.date.desc(), WorkoutSession.created_at.desc())
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_workout_session(
    db: AsyncSession, user_id: int, session_id: int, payload: WorkoutSessionUpdate
) -> WorkoutSession:
    session = await get_workout_session(db, user_id, session_id)
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(session, k, v)
    await db.flush()
    await db.refresh(session)
    return session


async def finish_workout_session(db: AsyncSession, user_id: int, session_id: int) -> WorkoutSession:
    """Stamp the end time (now) on a session."""
    session = await get_workout_session(db, user_id, session_id)
    session.end_time = datetime.now(timezone.utc)
    await db.flush()
    await db.refresh(session)
    return session


async def delete_workout_session(db: AsyncSession, user_id: int, session_id: int) -> None:
    """Delete a session together with its exercises and cardio entries."""
    await get_workout_session(db, user_id, session_id)
    await db.execute(delete(Exercise).where(Exercise.session_id == session_id))
    await db.execute(delete(CardioSession).where(CardioSession.session_id == session_id))
    await db.execute(delete(WorkoutSession).where(WorkoutSession.id == session_id))
    await db.flush()


# ── Exercises ────────────────────────────────────────────────────────────

def _validate_exercise_values(data: dict) -> None:
    if "exercise_name" in data:
        name = (data["exercise_name"] or "").strip()
        if not name:
            raise ValidationError("exerciseName", "exercise name is required")
        data["exercise_name"] = name
    if "reps" in data and (data["reps"] is None or data["reps"] < 1):
        raise ValidationError("reps", "reps must be at least 1")
    if "sets" in data and (data["sets"] is None or data["sets"] < 1):
        raise ValidationError("sets", "sets must be at least 1")
    if data.get("weight") is not None and data["weight"] < 0:
        raise ValidationError("weight", "weight cannot be negative")
    if "weight_unit" in data and not data["weight_unit"]:
        raise ValidationError("weightUnit", "weight unit is required")


async def _get_exercise(db: AsyncSession, user_id: int, exercise_id: int) -> Exercise:
    result = await db.execute(
        select(Exercise)
        .join(WorkoutSession, WorkoutSession.id == Exercise.session_id)
        .where(Exercise.id == exercise_id, WorkoutSession.user_id == user_id)
    )
    exercise = result.scalar_one_or_none()
    if not exercise:
        raise NotFoundError("Exercise", exercise_id)
    return exercise


async def create_exercise(db: AsyncSession, user_id: int, payload: ExerciseCreate) -> Exercise:
    """Log an exercise and bump the usage counter for its name."""
    data = payload.model_dump()
    _validate_exercise_values(data)
    await get_workout_session(db, user_id, data["session_id"])
    exercise = Exercise(manually_edited=False, **data)
    db.add(exercise)
    await db.flush()
    await upsert_exercise_name(db, exercise.exercise_name)
    await db.refresh(exercise)
    return exercise


async def get_exercises_by_session(db: AsyncSession, user_id: int, session_id: int) -> list[Exercise]:
    await get_workout_session(db, user_id, session_id)
    result = await db.execute(
        select(Exercise).where(Exercise.session_id == session_id).order_by(Exercise.id)
    )
    return list(result.scalars().all())


async def update_exercise(
    db: AsyncSession, user_id: int, exercise_id: int, payload: ExerciseUpdate
) -> Exercise:
    """Apply a user edit. Any edit marks the exercise as manually edited."""
    exercise = await _get_exercise(db, user_id, exercise_id)
    data = payload.model_dump(exclude_unset=True)
    _validate_exercise_values(data)
    for k, v in data.items():
        setattr(exercise, k, v)
    exercise.manually_edited = True
    await db.flush()
    await db.refresh(exercise)
    return exercise


async def delete_exercise(db: AsyncSession, user_id: int, exercise_id: int) -> None:
    exercise = await _get_exercise(db, user_id, exercise_id)
    await db.delete(exercise)
    await db.flush()


# ── Exercise names ───────────────────────────────────────────────────────

async def get_exercise_names(
    db: AsyncSession, limit: int = EXERCISE_NAME_SUGGESTION_LIMIT
) -> list[ExerciseName]:
    """Most used names first, for quick-add chips."""
    result = await db.execute(
        select(ExerciseName)
        .order_by(ExerciseName.usage_count.desc(), ExerciseName.last_used.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def upsert_exercise_name(db: AsyncSession, name: str) -> None:
    """Atomic insert-or-increment of the usage counter for `name`."""
    now = datetime.now(timezone.utc)
    insert = sqlite_insert if db.get_bind().dialect.name == "sqlite" else pg_insert
    stmt = insert(ExerciseName).values(name=name, usage_count=1, last_used=now)
    stmt = stmt.on_conflict_do_update(
        index_elements=[ExerciseName.name],
        set_={"usage_count": ExerciseName.usage_count + 1, "last_used": now},
    )
    await db.execute(stmt)


# ── Cardio ───────────────────────────────────────────────────────────────

def _validate_cardio_values(data: dict) -> None:
    if "activity_type" in data:
        activity = (data["activity_type"] or "").strip().lower()
        if not activity:
            raise ValidationError("activityType", "activity type is required")
        data["activity_type"] = activity
    if "duration_minutes" in data and (data["duration_minutes"] is None or data["duration_minutes"] <= 0):
        raise ValidationError("durationMinutes", "duration must be greater than 0")
    if data.get("distance_km") is not None and data["distance_km"] < 0:
        raise ValidationError("distanceKm", "distance cannot be negative")
    if data.get("calories_burned") is not None and data["calories_burned"] < 0:
        raise ValidationError("caloriesBurned", "calories cannot be negative")


async def _get_cardio(db: AsyncSession, user_id: int, cardio_id: int) -> CardioSession:
    result = await db.execute(
        select(CardioSession)
        .join(WorkoutSession, WorkoutSession.id == CardioSession.session_id)
        .where(CardioSession.id == cardio_id, WorkoutSession.user_id == user_id)
    )
    cardio = result.scalar_one_or_none()
    if not cardio:
        raise NotFoundError("CardioSession", cardio_id)
    return cardio


async def create_cardio_session(db: AsyncSession, user_id: int, payload: CardioCreate) -> CardioSession:
    data = payload.model_dump()
    _validate_cardio_values(data)
    await get_workout_session(db, user_id, data["session_id"])
    cardio = CardioSession(**data)
    db.add(cardio)
    await db.flush()
    await db.refresh(cardio)
    return cardio


async def get_cardio_by_session(db: AsyncSession, user_id: int, session_id: int) -> list[CardioSession]:
    await get_workout_session(db, user_id, session_id)
    result = await db.execute(
        select(CardioSession).where(CardioSession.session_id == session_id).order_by(CardioSession.id)
    )
    return list(result.scalars().all())


async def get_cardio_by_user(db: AsyncSession, user_id: int) -> list[CardioSession]:
    result = await db.execute(
        select(CardioSession)
        .join(WorkoutSession, WorkoutSession.id == CardioSession.session_id)
        .where(WorkoutSession.user_id == user_id)
        .order_by(CardioSession.created_at.desc(), CardioSession.id.desc())
    )
    return list(result.scalars().all())


async def update_cardio_session(
    db: AsyncSession, user_id: int, cardio_id: int, payload: CardioUpdate
) -> CardioSession:
    cardio = await _get_cardio(db, user_id, cardio_id)
    data = payload.model_dump(exclude_unset=True)
    _validate_cardio_values(data)
    for k, v in data.items():
        setattr(cardio, k, v)
    await db.flush()
    await db.refresh(cardio)
    return cardio


async def delete_cardio_session(db: AsyncSession, user_id: int, cardio_id: int) -> None:
    cardio = await _get_cardio(db, user_id, cardio_id)
    await db.delete(cardio)
    await db.flush()


async def count_workout_sessions(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.count(WorkoutSession.id)).where(WorkoutSession.user_id == user_id)
    )
    return int(result.scalar() or 0)
