"""API v1 router aggregation."""

from fastapi import APIRouter

from fitcoach.api.v1.endpoints import (
    analytics,
    cardio,
    exercises,
    health,
    profile,
    sessions,
    voice,
    weight,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(weight.router, prefix="/weight", tags=["weight"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(cardio.router, prefix="/cardio", tags=["cardio"])
api_router.include_router(voice.router, prefix="/voice", tags=["voice"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
