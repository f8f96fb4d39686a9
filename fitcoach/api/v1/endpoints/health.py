"""Liveness and readiness probes."""

import logging
import os

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.core.config import get_settings
from fitcoach.db.session import get_db

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("")
async def health():
    """Process is up. Adds built_at when BACKEND_BUILT_AT is set by the deploy."""
    payload: dict = {"status": "ok", "service": get_settings().app_name}
    built_at = os.environ.get("BACKEND_BUILT_AT")
    if built_at:
        payload["built_at"] = built_at
    return payload


@router.get("/ready")
async def readiness(db: AsyncSession = Depends(get_db)):
    """
    Database reachable, plus whether an OpenAI key is configured.

    A missing key does not fail readiness: logging and analytics still work,
    only the voice and coach endpoints will answer 502.
    """
    provider = "configured" if get_settings().openai_api_key else "missing_api_key"
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.exception("Readiness check failed")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": str(e), "provider": provider},
        )
    return {"status": "ok", "database": "connected", "provider": provider}
