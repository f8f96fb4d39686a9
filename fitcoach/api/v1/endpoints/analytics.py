"""Analytics endpoints: daily summary, progress history, cardio totals and the AI coach."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_ai_coach, get_current_user_id
from fitcoach.core.config import get_settings
from fitcoach.db.session import get_db
from fitcoach.schemas.analytics import (
    CardioSummaryRow,
    DailySummary,
    ExerciseHistoryPoint,
    WorkoutCount,
)
from fitcoach.schemas.coach import AiInsight, AskRequest
from fitcoach.services import analytics
from fitcoach.services.ai_coach import AiCoach
from fitcoach.services.fitness_context import build_fitness_context

router = APIRouter()


@router.get("/summary", response_model=DailySummary)
async def daily_summary(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await analytics.get_daily_summary(db, user_id)


@router.get("/workout-count", response_model=WorkoutCount)
async def workout_count(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return WorkoutCount(count=await analytics.get_workout_count(db, user_id))


@router.get("/exercise-history/{exercise_name}", response_model=list[ExerciseHistoryPoint])
async def exercise_history(
    exercise_name: str,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await analytics.get_exercise_history(db, user_id, exercise_name)


@router.get("/exercise-names", response_model=list[str])
async def exercise_names(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await analytics.get_unique_exercise_names(db, user_id)


@router.get("/cardio-summary", response_model=list[CardioSummaryRow])
async def cardio_summary(
    activity_type: str | None = Query(None, alias="activityType"),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await analytics.get_cardio_summary(db, user_id, activity_type)


@router.post("/ask", response_model=AiInsight)
async def ask_coach(
    payload: AskRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    coach: AiCoach = Depends(get_ai_coach),
):
    """Build the full fitness context and ask the coach. Rebuilt on every call."""
    context = await build_fitness_context(db, user_id, get_settings().coach_history_days)
    return await coach.ask(context, payload.question)
