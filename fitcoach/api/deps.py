"""Per-request dependencies: current user resolution and provider-backed services."""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.core.config import get_settings
from fitcoach.db.session import get_db
from fitcoach.services import storage
from fitcoach.services.ai_coach import AiCoach
from fitcoach.services.llm import LanguageProvider, get_provider
from fitcoach.services.voice_parsing import VoiceParser


async def get_current_user_id(
    x_user_id: int | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> int:
    """
    Resolve the acting user. An explicit X-User-Id must exist; without one the
    single-user default profile is used (and created on first access).
    """
    settings = get_settings()
    if x_user_id is not None:
        await storage.get_user(db, x_user_id)
        return x_user_id
    user = await storage.get_or_create_user(db, settings.default_user_id, settings.default_user_name)
    return user.id


def get_voice_parser(provider: LanguageProvider = Depends(get_provider)) -> VoiceParser:
    return VoiceParser(provider, get_settings().openai_parse_model)


def get_ai_coach(provider: LanguageProvider = Depends(get_provider)) -> AiCoach:
    return AiCoach(provider, get_settings().openai_coach_model)
