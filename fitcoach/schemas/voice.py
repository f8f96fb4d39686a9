"""Voice pipeline schemas: raw extraction replies, parsed drafts, confirm and clarify requests."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from fitcoach.core.constants import DEFAULT_SETS, DEFAULT_WEIGHT_UNIT
from fitcoach.core.enums import Confidence
from fitcoach.core.errors import ValidationError
from fitcoach.schemas.base import ApiModel
from fitcoach.schemas.workout import ExerciseCreate


class ExtractionPayload(ApiModel):
    """The model's extraction reply as received. Unusable values become None instead of failing."""

    exercise: str | None = None
    reps: int | None = None
    sets: int | None = None
    weight: float | None = None
    unit: str | None = None
    confidence: Confidence | None = None
    missing: list[str] = []

    @field_validator("exercise", "unit", mode="before")
    @classmethod
    def _blank_text_to_none(cls, value):
        if not isinstance(value, str) or not value.strip():
            return None
        return value.strip()

    @field_validator("reps", "sets", "weight", mode="wrap")
    @classmethod
    def _number_or_none(cls, value, handler):
        # pydantic's lax mode would read True as 1
        if isinstance(value, bool):
            return None
        try:
            return handler(value)
        except PydanticValidationError:
            return None

    @field_validator("confidence", mode="wrap")
    @classmethod
    def _confidence_or_none(cls, value, handler):
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return handler(value)
        except PydanticValidationError:
            return None

    @field_validator("missing", mode="before")
    @classmethod
    def _field_names_only(cls, value):
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str) and item]


class ParsedExercise(ApiModel):
    """Structured draft extracted from free text. Never persisted directly."""

    exercise: str | None = None
    reps: int | None = None
    sets: int = DEFAULT_SETS
    weight: float | None = None
    unit: str = DEFAULT_WEIGHT_UNIT
    confidence: Confidence = Confidence.MEDIUM
    missing: list[str] = []

    def to_exercise_create(self, session_id: int, raw_text: str | None = None) -> ExerciseCreate:
        """Pre-fill an exercise for the given session once the user confirms the draft."""
        if not self.exercise:
            raise ValidationError("exercise", "exercise name could not be determined")
        if self.reps is None:
            raise ValidationError("reps", "reps could not be determined")
        return ExerciseCreate(
            session_id=session_id,
            exercise_name=self.exercise,
            reps=self.reps,
            sets=self.sets,
            weight=self.weight,
            weight_unit=self.unit,
            raw_voice_input=raw_text,
        )


class TranscriptionRead(ApiModel):
    text: str


class AudioParseRead(ApiModel):
    text: str
    parsed: ParsedExercise


class ParseRequest(ApiModel):
    text: str = Field(..., min_length=1)


class ConfirmRequest(ApiModel):
    """A (possibly user-corrected) draft to log into a session."""

    session_id: int
    draft: ParsedExercise
    transcript: str | None = None


class ClarifyRequest(ApiModel):
    raw_input: str = Field(..., min_length=1)
    missing_fields: list[str] = Field(..., min_length=1)


class ClarifyResponse(ApiModel):
    question: str
