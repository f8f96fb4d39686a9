"""Cardio session endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_current_user_id
from fitcoach.db.session import get_db
from fitcoach.schemas.workout import CardioCreate, CardioRead, CardioUpdate
from fitcoach.services import storage

router = APIRouter()


@router.post("", response_model=CardioRead, status_code=201)
async def create_cardio(
    payload: CardioCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Log cardio in one of the user's sessions. Activity type is stored lower-case."""
    return await storage.create_cardio_session(db, user_id, payload)


@router.get("", response_model=list[CardioRead])
async def list_cardio(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await storage.get_cardio_by_user(db, user_id)


@router.get("/session/{session_id}", response_model=list[CardioRead])
async def list_session_cardio(
    session_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await storage.get_cardio_by_session(db, user_id, session_id)


@router.patch("/{cardio_id}", response_model=CardioRead)
async def update_cardio(
    cardio_id: int,
    payload: CardioUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await storage.update_cardio_session(db, user_id, cardio_id, payload)


@router.delete("/{cardio_id}", status_code=204)
async def delete_cardio(
    cardio_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await storage.delete_cardio_session(db, user_id, cardio_id)
    return None
