"""Voice endpoints: transcribe audio, parse into an exercise draft, confirm it, ask for missing fields."""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from fitcoach.api.deps import get_current_user_id, get_voice_parser
from fitcoach.db.session import get_db
from fitcoach.schemas.voice import (
    AudioParseRead,
    ClarifyRequest,
    ClarifyResponse,
    ConfirmRequest,
    ParsedExercise,
    ParseRequest,
    TranscriptionRead,
)
from fitcoach.schemas.workout import ExerciseRead
from fitcoach.services import storage
from fitcoach.services.voice_parsing import VoiceParser

router = APIRouter(dependencies=[Depends(get_current_user_id)])


@router.post("/transcribe", response_model=TranscriptionRead)
async def transcribe(
    audio: UploadFile = File(...),
    parser: VoiceParser = Depends(get_voice_parser),
):
    """Multipart upload (field `audio`) -> transcript."""
    content = await audio.read()
    text = await parser.transcribe(content, audio.content_type or "audio/webm")
    return TranscriptionRead(text=text)


@router.post("/parse", response_model=ParsedExercise)
async def parse(
    payload: ParseRequest,
    parser: VoiceParser = Depends(get_voice_parser),
):
    """Free text -> exercise draft with confidence and missing fields."""
    return await parser.parse_text(payload.text)


@router.post("/parse-audio", response_model=AudioParseRead)
async def parse_audio(
    audio: UploadFile = File(...),
    parser: VoiceParser = Depends(get_voice_parser),
):
    """Recording -> transcript and draft in one round trip."""
    content = await audio.read()
    text, parsed = await parser.parse_audio(content, audio.content_type or "audio/webm")
    return AudioParseRead(text=text, parsed=parsed)


@router.post("/confirm", response_model=ExerciseRead, status_code=201)
async def confirm(
    payload: ConfirmRequest,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Log a confirmed draft into one of the user's sessions, keeping the transcript."""
    exercise = payload.draft.to_exercise_create(payload.session_id, payload.transcript)
    return await storage.create_exercise(db, user_id, exercise)


@router.post("/clarify", response_model=ClarifyResponse)
async def clarify(
    payload: ClarifyRequest,
    parser: VoiceParser = Depends(get_voice_parser),
):
    question = await parser.generate_clarification_question(payload.raw_input, payload.missing_fields)
    return ClarifyResponse(question=question)
