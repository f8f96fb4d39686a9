"""Workout session endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_current_user_id
from fitcoach.db.session import get_db
from fitcoach.schemas.workout import (
    ExerciseRead,
    WorkoutSessionCreate,
    WorkoutSessionRead,
    WorkoutSessionUpdate,
    WorkoutSessionWithExercises,
)
from fitcoach.services import storage

router = APIRouter()


@router.post("", response_model=WorkoutSessionRead, status_code=201)
async def create_session(
    payload: WorkoutSessionCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Start a workout. Date defaults to today, start time to now."""
    return await storage.create_workout_session(db, user_id, payload)


@router.get("", response_model=list[WorkoutSessionWithExercises])
async def list_sessions(
    from_date: date | None = Query(None, alias="from"),
    to_date: date | None = Query(None, alias="to"),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Sessions newest first with exercises and cardio, optionally within a date range."""
    return await storage.get_workout_sessions(db, user_id, from_date, to_date)


@router.get("/today", response_model=WorkoutSessionWithExercises)
async def get_today_session(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    session = await storage.get_today_session(db, user_id)
    if not session:
        raise HTTPException(status_code=404, detail="No session found for today")
    return session


@router.get("/{session_id}/exercises", response_model=list[ExerciseRead])
async def list_session_exercises(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await storage.get_exercises_by_session(db, user_id, session_id)


@router.patch("/{session_id}", response_model=WorkoutSessionRead)
async def update_session(
    session_id: int,
    payload: WorkoutSessionUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Update name, location or end time."""
    return await storage.update_workout_session(db, user_id, session_id, payload)


@router.post("/{session_id}/finish", response_model=WorkoutSessionRead)
async def finish_session(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await storage.finish_workout_session(db, user_id, session_id)


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Delete a session and its exercises and cardio."""
    await storage.delete_workout_session(db, user_id, session_id)
    return None
