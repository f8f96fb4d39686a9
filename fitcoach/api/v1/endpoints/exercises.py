"""Exercise endpoints (quick-add, voice confirm, edits)."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_current_user_id
from fitcoach.core.constants import EXERCISE_NAME_SUGGESTION_LIMIT
from fitcoach.db.session import get_db
from fitcoach.schemas.workout import ExerciseCreate, ExerciseNameRead, ExerciseRead, ExerciseUpdate
from fitcoach.services import storage

router = APIRouter()


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Log an exercise in one of the user's sessions. Rejects reps/sets below 1."""
    return await storage.create_exercise(db, user_id, payload)


@router.get("/names", response_model=list[ExerciseNameRead])
async def list_exercise_names(
    limit: int = Query(EXERCISE_NAME_SUGGESTION_LIMIT, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
):
    """Most used exercise names, for quick-add suggestions."""
    return await storage.get_exercise_names(db, limit)


@router.patch("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Edit an exercise; marks it as manually edited."""
    return await storage.update_exercise(db, user_id, exercise_id, payload)


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await storage.delete_exercise(db, user_id, exercise_id)
    return None
