"""Language provider capability: transcription and chat completions.

Services depend on the LanguageProvider protocol; OpenAIProvider is the
production implementation. No retries or timeouts are applied here, callers
own both.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Protocol

from openai import AsyncOpenAI, OpenAIError

from fitcoach.core.config import get_settings
from fitcoach.core.errors import ProviderError

logger = logging.getLogger(__name__)

# Upload file extension per declared MIME type (the API sniffs format from the name)
AUDIO_EXTENSIONS = {
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/mp4": "m4a",
    "audio/m4a": "m4a",
    "audio/x-m4a": "m4a",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
}


class LanguageProvider(Protocol):
    async def transcribe(self, audio: bytes, mime_type: str) -> str: ...

    async def complete_json(self, system: str, user: str, model: str) -> str: ...

    async def complete_text(self, system: str, user: str, model: str) -> str: ...


class OpenAIProvider:
    """LanguageProvider backed by the OpenAI API."""

    def __init__(self, api_key: str, transcription_model: str = "whisper-1") -> None:
        if not api_key:
            logger.warning("OPENAI_API_KEY not set. Voice transcription, parsing and coaching will fail.")
        self.client = AsyncOpenAI(api_key=api_key or "missing-api-key")
        self.transcription_model = transcription_model

    async def transcribe(self, audio: bytes, mime_type: str) -> str:
        extension = AUDIO_EXTENSIONS.get(mime_type.split(";")[0].strip().lower(), "webm")
        try:
            transcription = await self.client.audio.transcriptions.create(
                file=(f"audio.{extension}", audio, mime_type),
                model=self.transcription_model,
            )
        except OpenAIError as e:
            logger.exception("Transcription request failed")
            raise ProviderError("transcription", str(e)) from e
        return transcription.text

    async def complete_json(self, system: str, user: str, model: str) -> str:
        return await self._complete(system, user, model, json_mode=True)

    async def complete_text(self, system: str, user: str, model: str) -> str:
        return await self._complete(system, user, model, json_mode=False)

    async def _complete(self, system: str, user: str, model: str, json_mode: bool) -> str:
        kwargs = {"response_format": {"type": "json_object"}} if json_mode else {}
        try:
            completion = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                **kwargs,
            )
        except OpenAIError as e:
            logger.exception("Chat completion failed (model=%s)", model)
            raise ProviderError("completion", str(e)) from e
        return completion.choices[0].message.content or ""


@lru_cache
def get_provider() -> OpenAIProvider:
    """Process-wide provider (FastAPI dependency)."""
    settings = get_settings()
    return OpenAIProvider(settings.openai_api_key, settings.openai_transcription_model)
