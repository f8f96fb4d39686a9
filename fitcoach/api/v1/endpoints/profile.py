"""Profile endpoints for the resolved user."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_current_user_id
from fitcoach.db.session import get_db
from fitcoach.schemas.profile import ProfileRead, ProfileUpdate
from fitcoach.services import storage

router = APIRouter()


@router.get("", response_model=ProfileRead)
async def get_profile(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    user = await storage.get_user(db, user_id)
    return ProfileRead.from_user(user)


@router.patch("", response_model=ProfileRead)
async def update_profile(
    payload: ProfileUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Partial update. `goal` takes {direction, lbsPerWeek}; stored as signed lbs/week."""
    user = await storage.update_user(db, user_id, payload)
    return ProfileRead.from_user(user)
