"""Shared fixtures: in-memory SQLite database, a fake language provider, and the API client."""

import os

# Must be set before fitcoach.db.session builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import json
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import fitcoach.models  # noqa: F401 - register all models
from fitcoach.db.base import Base
from fitcoach.db.session import enable_sqlite_foreign_keys, get_db
from fitcoach.main import app
from fitcoach.models.user import User
from fitcoach.schemas.weight import WeightLogCreate
from fitcoach.schemas.workout import CardioCreate, ExerciseCreate, WorkoutSessionCreate
from fitcoach.services import storage
from fitcoach.services.llm import get_provider


class FakeProvider:
    """LanguageProvider stand-in returning canned replies and recording calls."""

    def __init__(self, json_reply=None, text_reply="", transcript="", error=None):
        self.json_reply = json_reply if json_reply is not None else {}
        self.text_reply = text_reply
        self.transcript = transcript
        self.error = error
        self.calls = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    async def transcribe(self, audio, mime_type):
        self.calls.append(("transcribe", audio, mime_type))
        self._maybe_fail()
        return self.transcript

    async def complete_json(self, system, user, model):
        self.calls.append(("json", system, user, model))
        self._maybe_fail()
        if isinstance(self.json_reply, str):
            return self.json_reply
        return json.dumps(self.json_reply)

    async def complete_text(self, system, user, model):
        self.calls.append(("text", system, user, model))
        self._maybe_fail()
        return self.text_reply


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def today() -> date:
    return storage.utc_today()


@pytest_asyncio.fixture
async def user(db) -> User:
    return await storage.get_or_create_user(db, 1, "Alex")


@pytest_asyncio.fixture
async def other_user(db) -> User:
    return await storage.get_or_create_user(db, 2, "Sam")


@pytest.fixture
def make_session(db, today):
    async def _make(user_id=1, on=None, name=None, start=None, end=None):
        session = await storage.create_workout_session(
            db,
            user_id,
            WorkoutSessionCreate(date=on or today, name=name, start_time=start),
        )
        if end is not None:
            session.end_time = end
            await db.flush()
        return session

    return _make


@pytest.fixture
def make_exercise(db):
    async def _make(session_id, name="Bench Press", reps=10, sets=3, weight=135.0, user_id=1):
        return await storage.create_exercise(
            db,
            user_id,
            ExerciseCreate(session_id=session_id, exercise_name=name, reps=reps, sets=sets, weight=weight),
        )

    return _make


@pytest.fixture
def make_cardio(db):
    async def _make(session_id, activity="running", minutes=20.0, user_id=1, **extra):
        return await storage.create_cardio_session(
            db,
            user_id,
            CardioCreate(session_id=session_id, activity_type=activity, duration_minutes=minutes, **extra),
        )

    return _make


@pytest.fixture
def log_weight(db):
    async def _log(weight, on, user_id=1):
        return await storage.create_weight_log(db, user_id, WeightLogCreate(date=on, weight=weight))

    return _log


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest_asyncio.fixture
async def client(session_maker, fake_provider):
    async def _get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_provider] = lambda: fake_provider
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
