"""Seed the default user with a week of weight logs and yesterday's workout.

Usage: python scripts/seed.py
"""

import asyncio
import os
import sys
from datetime import datetime, time, timedelta, timezone

# Add parent directory to path so we can import fitcoach modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from fitcoach.core.config import get_settings
from fitcoach.db.session import async_session_maker, engine
from fitcoach.schemas.profile import ProfileUpdate, WeeklyGoal
from fitcoach.schemas.weight import WeightLogCreate
from fitcoach.schemas.workout import CardioCreate, ExerciseCreate, WorkoutSessionCreate, WorkoutSessionUpdate
from fitcoach.services import storage

WEIGHTS = [193.2, 193.5, 193.8, 194.5, 194.2, 194.8, 195.0]  # today first

EXERCISES = [
    ("Bench Press", 4, 8, 185),
    ("Pull Ups", 3, 10, 0),
    ("Shoulder Press", 3, 12, 50),
]


async def seed():
    try:
        await _seed()
    finally:
        await engine.dispose()


async def _seed():
    settings = get_settings()
    user_id = settings.default_user_id
    today = storage.utc_today()

    async with async_session_maker() as db:
        existing = await storage.get_weight_logs(db, user_id)
        if existing:
            print(f"User {user_id} already has data; skipping.")
            return

        await storage.get_or_create_user(db, user_id, "Alex")
        await storage.update_user(
            db,
            user_id,
            ProfileUpdate(
                age=28,
                height_cm=180,
                sex="male",
                activity_level="moderately_active",
                target_weight=185,
                goal=WeeklyGoal(direction="lose", lbs_per_week=0.5),
            ),
        )

        for i, weight in enumerate(WEIGHTS):
            await storage.create_weight_log(
                db,
                user_id,
                WeightLogCreate(date=today - timedelta(days=i), weight=weight, time_of_day="morning"),
            )

        yesterday = today - timedelta(days=1)
        session = await storage.create_workout_session(
            db,
            user_id,
            WorkoutSessionCreate(
                date=yesterday,
                name="Upper Body Power",
                location="Equinox",
                start_time=datetime.combine(yesterday, time(18, 0), tzinfo=timezone.utc),
            ),
        )
        await storage.update_workout_session(
            db,
            user_id,
            session.id,
            WorkoutSessionUpdate(end_time=datetime.combine(yesterday, time(18, 55), tzinfo=timezone.utc)),
        )
        for name, sets, reps, weight in EXERCISES:
            await storage.create_exercise(
                db,
                user_id,
                ExerciseCreate(session_id=session.id, exercise_name=name, sets=sets, reps=reps, weight=weight),
            )
        await storage.create_cardio_session(
            db,
            user_id,
            CardioCreate(session_id=session.id, activity_type="rowing", duration_minutes=10, distance_km=2.0),
        )

        await db.commit()
        print(f"Seeded user {user_id}: {len(WEIGHTS)} weight logs, 1 session, {len(EXERCISES)} exercises.")


if __name__ == "__main__":
    asyncio.run(seed())
