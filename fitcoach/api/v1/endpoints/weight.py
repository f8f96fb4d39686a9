"""Weight logging endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_current_user_id
from fitcoach.db.session import get_db
from fitcoach.schemas.weight import WeightLogCreate, WeightLogRead
from fitcoach.services import storage

router = APIRouter()


@router.post("", response_model=WeightLogRead, status_code=201)
async def create_weight_log(
    payload: WeightLogCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await storage.create_weight_log(db, user_id, payload)


@router.get("", response_model=list[WeightLogRead])
async def list_weight_logs(
    days: int | None = Query(None, ge=1),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Weight logs newest first, optionally only the last `days` days."""
    return await storage.get_weight_logs(db, user_id, days)
