"""Voice pipeline: audio -> transcript -> structured exercise draft.

The extraction reply is free-form JSON from the model, so it is read through
the lenient ExtractionPayload schema. Essential fields (exercise name, reps) that
cannot be determined force confidence to "low" and are listed in `missing`.
Provider failures surface as ProviderError and are never retried here; voice
input is cheap to redo.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fitcoach.core.constants import CLARIFICATION_FALLBACK, DEFAULT_SETS, DEFAULT_WEIGHT_UNIT
from fitcoach.core.enums import Confidence
from fitcoach.core.errors import ProviderError, ValidationError
from fitcoach.schemas.voice import ExtractionPayload, ParsedExercise
from fitcoach.services.llm import LanguageProvider

logger = logging.getLogger(__name__)

PARSE_SYSTEM_PROMPT = """You are a fitness tracking assistant. Parse workout descriptions into structured JSON.

Extract: exercise name, reps, sets (if mentioned), weight, unit.

Return format:
{
  "exercise": "bench press",
  "reps": 12,
  "sets": 3,
  "weight": 135,
  "unit": "lbs",
  "confidence": "high|medium|low",
  "missing": []
}

List any fields you could not determine in "missing".
If critical data is missing, set confidence to "low" and list missing fields.
Default to "lbs" if no unit specified.
If sets aren't mentioned, default to 1."""

CLARIFY_SYSTEM_PROMPT = (
    "You are a friendly fitness tracker. Ask ONE clarifying question to complete "
    "the workout log. Be conversational and brief."
)

ESSENTIAL_FIELDS = ("exercise", "reps")

UNIT_ALIASES = {
    "lb": "lbs",
    "lbs": "lbs",
    "pound": "lbs",
    "pounds": "lbs",
    "kg": "kg",
    "kgs": "kg",
    "kilo": "kg",
    "kilos": "kg",
    "kilogram": "kg",
    "kilograms": "kg",
}


def normalize_parsed_exercise(payload: dict[str, Any]) -> ParsedExercise:
    """Turn an untrusted extraction payload into a ParsedExercise with defaults applied.

    `missing` only ever names fields that are still undetermined after
    normalization, whatever the model claimed.
    """
    raw = ExtractionPayload.model_validate(payload)

    reps = raw.reps if raw.reps is not None and raw.reps >= 1 else None
    sets = raw.sets if raw.sets is not None and raw.sets >= 1 else DEFAULT_SETS
    weight = raw.weight if raw.weight is not None and raw.weight >= 0 else None
    unit = UNIT_ALIASES.get(raw.unit.lower(), DEFAULT_WEIGHT_UNIT) if raw.unit else DEFAULT_WEIGHT_UNIT
    confidence = raw.confidence or Confidence.MEDIUM

    values = {"exercise": raw.exercise, "reps": reps, "weight": weight}
    missing = [field for field in dict.fromkeys(raw.missing) if values.get(field) is None]
    for field in ESSENTIAL_FIELDS:
        if values[field] is None:
            confidence = Confidence.LOW
            if field not in missing:
                missing.append(field)
    if confidence == Confidence.LOW and weight is None and "weight" not in missing:
        missing.append("weight")

    return ParsedExercise(
        exercise=raw.exercise,
        reps=reps,
        sets=sets,
        weight=weight,
        unit=unit,
        confidence=confidence,
        missing=missing,
    )


class VoiceParser:
    """Transcription, extraction and clarification over a LanguageProvider."""

    def __init__(self, provider: LanguageProvider, model: str) -> None:
        self.provider = provider
        self.model = model

    async def transcribe(self, audio: bytes, mime_type: str = "audio/webm") -> str:
        if not audio:
            raise ValidationError("audio", "no audio provided")
        text = await self.provider.transcribe(audio, mime_type)
        logger.debug("Transcribed %d bytes of %s into %d chars", len(audio), mime_type, len(text))
        return text.strip()

    async def parse_text(self, text: str) -> ParsedExercise:
        """Extract a structured exercise from free text."""
        if not text or not text.strip():
            raise ValidationError("text", "no text provided")
        content = await self.provider.complete_json(PARSE_SYSTEM_PROMPT, text.strip(), self.model)
        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("Extraction returned non-JSON content: %.200s", content)
            raise ProviderError("extraction", "response was not valid JSON") from e
        if not isinstance(payload, dict):
            raise ProviderError("extraction", "response was not a JSON object")
        parsed = normalize_parsed_exercise(payload)
        logger.info("Parsed %r -> %s (confidence=%s)", text, parsed.exercise, parsed.confidence.value)
        return parsed

    async def parse_audio(self, audio: bytes, mime_type: str = "audio/webm") -> tuple[str, ParsedExercise]:
        """Transcribe then parse; returns the transcript alongside the draft."""
        text = await self.transcribe(audio, mime_type)
        return text, await self.parse_text(text)

    async def generate_clarification_question(self, raw_input: str, missing_fields: list[str]) -> str:
        """One short follow-up question asking for the missing fields."""
        if not missing_fields:
            raise ValidationError("missingFields", "at least one missing field is required")
        prompt = f'I logged: "{raw_input}". Missing: {", ".join(missing_fields)}. What should I ask?'
        question = await self.provider.complete_text(CLARIFY_SYSTEM_PROMPT, prompt, self.model)
        return question.strip() or CLARIFICATION_FALLBACK
