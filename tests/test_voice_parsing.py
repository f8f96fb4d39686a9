"""Voice pipeline: normalization of extraction payloads and the VoiceParser over a fake provider."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from conftest import FakeProvider
from fitcoach.core.constants import CLARIFICATION_FALLBACK
from fitcoach.core.enums import Confidence
from fitcoach.core.errors import ProviderError, ValidationError
from fitcoach.schemas.voice import ExtractionPayload
from fitcoach.services.llm import OpenAIProvider
from fitcoach.services.voice_parsing import VoiceParser, normalize_parsed_exercise


def parser_for(provider) -> VoiceParser:
    return VoiceParser(provider, "test-model")


# ── normalize_parsed_exercise ────────────────────────────────────────────

def test_normalize_full_payload_keeps_values():
    parsed = normalize_parsed_exercise(
        {"exercise": "bench press", "reps": 10, "sets": 3, "weight": 185, "unit": "lbs", "confidence": "high", "missing": []}
    )
    assert parsed.exercise == "bench press"
    assert (parsed.reps, parsed.sets, parsed.weight, parsed.unit) == (10, 3, 185.0, "lbs")
    assert parsed.confidence == Confidence.HIGH
    assert parsed.missing == []


def test_normalize_applies_defaults():
    parsed = normalize_parsed_exercise({"exercise": "squat", "reps": 5, "weight": 225, "confidence": "high"})
    assert parsed.sets == 1
    assert parsed.unit == "lbs"


@pytest.mark.parametrize("unit, expected", [("kilograms", "kg"), ("KG", "kg"), ("pounds", "lbs"), ("stone", "lbs")])
def test_normalize_unit_aliases(unit, expected):
    parsed = normalize_parsed_exercise({"exercise": "row", "reps": 8, "weight": 60, "unit": unit, "confidence": "high"})
    assert parsed.unit == expected


def test_missing_essential_field_forces_low_confidence():
    parsed = normalize_parsed_exercise({"exercise": "curls", "confidence": "high", "missing": []})
    assert parsed.confidence == Confidence.LOW
    assert "reps" in parsed.missing
    assert "weight" in parsed.missing


@pytest.mark.parametrize("reps", [0, -3, "lots", 2.5, True])
def test_unusable_reps_treated_as_missing(reps):
    parsed = normalize_parsed_exercise({"exercise": "dips", "reps": reps, "confidence": "medium"})
    assert parsed.reps is None
    assert parsed.confidence == Confidence.LOW
    assert "reps" in parsed.missing


def test_blank_exercise_name_is_missing():
    parsed = normalize_parsed_exercise({"exercise": "   ", "reps": 12, "confidence": "high"})
    assert parsed.exercise is None
    assert parsed.confidence == Confidence.LOW
    assert parsed.missing[0] == "exercise"


def test_unknown_confidence_becomes_medium():
    parsed = normalize_parsed_exercise({"exercise": "press", "reps": 8, "weight": 95, "confidence": "certain"})
    assert parsed.confidence == Confidence.MEDIUM


def test_invalid_sets_default_to_one():
    parsed = normalize_parsed_exercise({"exercise": "press", "reps": 8, "sets": 0, "confidence": "high"})
    assert parsed.sets == 1


def test_numeric_strings_are_accepted():
    parsed = normalize_parsed_exercise({"exercise": "press", "reps": "8", "sets": "4", "weight": "97.5", "confidence": "high"})
    assert (parsed.reps, parsed.sets, parsed.weight) == (8, 4, 97.5)


def test_weight_not_listed_missing_when_present():
    parsed = normalize_parsed_exercise({"exercise": "press", "weight": 95, "missing": ["weight"], "confidence": "low"})
    assert "weight" not in parsed.missing
    assert "reps" in parsed.missing


def test_missing_drops_fields_that_were_determined():
    parsed = normalize_parsed_exercise(
        {"exercise": "bench press", "reps": 10, "confidence": "high", "missing": ["reps", "exercise"]}
    )
    assert parsed.missing == []
    assert parsed.confidence == Confidence.HIGH


def test_missing_is_deduplicated_and_keeps_other_names():
    parsed = normalize_parsed_exercise(
        {"exercise": "rows", "reps": 12, "weight": 60, "confidence": "medium", "missing": ["sets", "sets", "rest"]}
    )
    assert parsed.missing == ["sets", "rest"]
    assert parsed.confidence == Confidence.MEDIUM


def test_extraction_payload_reads_loose_values():
    raw = ExtractionPayload.model_validate(
        {"exercise": 42, "reps": True, "sets": "three", "weight": "97.5", "unit": "  ", "confidence": " HIGH ", "missing": "reps"}
    )
    assert raw.exercise is None
    assert raw.reps is None
    assert raw.sets is None
    assert raw.weight == 97.5
    assert raw.unit is None
    assert raw.confidence == Confidence.HIGH
    assert raw.missing == []


def test_extraction_payload_filters_non_string_missing_entries():
    raw = ExtractionPayload.model_validate({"missing": ["reps", 3, "", None, "weight"]})
    assert raw.missing == ["reps", "weight"]


def test_to_exercise_create_requires_essentials():
    draft = normalize_parsed_exercise({"exercise": "curls", "confidence": "low"})
    with pytest.raises(ValidationError) as exc_info:
        draft.to_exercise_create(session_id=1)
    assert exc_info.value.field == "reps"


def test_to_exercise_create_prefills_draft():
    draft = normalize_parsed_exercise({"exercise": "squat", "reps": 5, "sets": 5, "weight": 100, "unit": "kg", "confidence": "high"})
    payload = draft.to_exercise_create(session_id=7, raw_text="five by five squat at 100 kilos")
    assert payload.session_id == 7
    assert payload.exercise_name == "squat"
    assert (payload.reps, payload.sets, payload.weight, payload.weight_unit) == (5, 5, 100.0, "kg")
    assert payload.raw_voice_input == "five by five squat at 100 kilos"


# ── VoiceParser ──────────────────────────────────────────────────────────

async def test_parse_text_complete_description():
    provider = FakeProvider(
        json_reply={"exercise": "bench press", "reps": 10, "sets": 3, "weight": 185, "unit": "lbs", "confidence": "high", "missing": []}
    )
    parsed = await parser_for(provider).parse_text("3 sets of bench press, 185 pounds, 10 reps")

    assert parsed.exercise == "bench press"
    assert parsed.confidence == Confidence.HIGH
    assert parsed.missing == []
    kind, _system, user_text, model = provider.calls[0]
    assert kind == "json"
    assert user_text == "3 sets of bench press, 185 pounds, 10 reps"
    assert model == "test-model"


async def test_parse_text_vague_description():
    provider = FakeProvider(json_reply={"exercise": "curls", "confidence": "low", "missing": ["reps", "weight"]})
    parsed = await parser_for(provider).parse_text("did some curls")

    assert parsed.confidence == Confidence.LOW
    assert set(parsed.missing) >= {"reps", "weight"}


async def test_parse_text_rejects_empty_input_without_calling_provider():
    provider = FakeProvider()
    with pytest.raises(ValidationError) as exc_info:
        await parser_for(provider).parse_text("   ")
    assert exc_info.value.field == "text"
    assert provider.calls == []


@pytest.mark.parametrize("reply", ["sure, here you go", "[1, 2, 3]"])
async def test_parse_text_non_object_reply_is_provider_error(reply):
    provider = FakeProvider(json_reply=reply)
    with pytest.raises(ProviderError) as exc_info:
        await parser_for(provider).parse_text("bench press 10 reps")
    assert exc_info.value.operation == "extraction"


async def test_parse_text_propagates_provider_failure():
    provider = FakeProvider(error=ProviderError("completion", "rate limited"))
    with pytest.raises(ProviderError):
        await parser_for(provider).parse_text("bench press 10 reps")


async def test_transcribe_strips_and_passes_mime_type():
    provider = FakeProvider(transcript="  squats ten reps  ")
    text = await parser_for(provider).transcribe(b"\x00\x01", "audio/ogg")
    assert text == "squats ten reps"
    assert provider.calls == [("transcribe", b"\x00\x01", "audio/ogg")]


async def test_transcribe_empty_audio_rejected():
    with pytest.raises(ValidationError) as exc_info:
        await parser_for(FakeProvider()).transcribe(b"")
    assert exc_info.value.field == "audio"


async def test_parse_audio_returns_transcript_and_draft():
    provider = FakeProvider(
        transcript="deadlift 5 reps 315",
        json_reply={"exercise": "deadlift", "reps": 5, "weight": 315, "confidence": "high"},
    )
    text, parsed = await parser_for(provider).parse_audio(b"audio")
    assert text == "deadlift 5 reps 315"
    assert parsed.exercise == "deadlift"
    assert [call[0] for call in provider.calls] == ["transcribe", "json"]


async def test_clarification_question_mentions_input_and_fields():
    provider = FakeProvider(text_reply=" How many reps did you do? ")
    question = await parser_for(provider).generate_clarification_question("did some curls", ["reps", "weight"])
    assert question == "How many reps did you do?"
    _kind, _system, prompt, _model = provider.calls[0]
    assert "did some curls" in prompt
    assert "reps, weight" in prompt


async def test_clarification_empty_reply_falls_back():
    provider = FakeProvider(text_reply="")
    question = await parser_for(provider).generate_clarification_question("curls", ["reps"])
    assert question == CLARIFICATION_FALLBACK


async def test_clarification_requires_missing_fields():
    with pytest.raises(ValidationError):
        await parser_for(FakeProvider()).generate_clarification_question("curls", [])


# ── OpenAIProvider ───────────────────────────────────────────────────────

def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


async def test_openai_provider_requests_json_mode():
    provider = OpenAIProvider(api_key="sk-test")
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(return_value=_completion('{"exercise": "row"}'))

    content = await provider.complete_json("system", "user", "gpt-test")

    assert content == '{"exercise": "row"}'
    kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-test"
    assert kwargs["response_format"] == {"type": "json_object"}
    assert kwargs["messages"][0] == {"role": "system", "content": "system"}


async def test_openai_provider_text_mode_has_no_response_format():
    provider = OpenAIProvider(api_key="sk-test")
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(return_value=_completion(None))

    assert await provider.complete_text("system", "user", "gpt-test") == ""
    assert "response_format" not in provider.client.chat.completions.create.call_args.kwargs


async def test_openai_provider_wraps_sdk_errors():
    provider = OpenAIProvider(api_key="sk-test")
    provider.client = MagicMock()
    provider.client.chat.completions.create = AsyncMock(
        side_effect=openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    )
    with pytest.raises(ProviderError) as exc_info:
        await provider.complete_json("system", "user", "gpt-test")
    assert exc_info.value.operation == "completion"


async def test_openai_provider_transcription_file_name_follows_mime_type():
    provider = OpenAIProvider(api_key="sk-test")
    provider.client = MagicMock()
    provider.client.audio.transcriptions.create = AsyncMock(return_value=SimpleNamespace(text="ten pushups"))

    assert await provider.transcribe(b"abc", "audio/mp4") == "ten pushups"
    file_arg = provider.client.audio.transcriptions.create.call_args.kwargs["file"]
    assert file_arg == ("audio.m4a", b"abc", "audio/mp4")
