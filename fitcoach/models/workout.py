"""WorkoutSession, Exercise and CardioSession models."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitcoach.db.base import Base


class WorkoutSession(Base):
    """A gym visit on a calendar date. end_time stays null while in progress."""

    __tablename__ = "workout_sessions"
    __table_args__ = (Index("ix_workout_sessions_user_date", "user_id", "date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_time: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    end_time: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    user: Mapped["User"] = relationship("User", back_populates="workout_sessions")
    exercises: Mapped[list["Exercise"]] = relationship(
        "Exercise", back_populates="session", cascade="all, delete-orphan", passive_deletes=True
    )
    cardio_sessions: Mapped[list["CardioSession"]] = relationship(
        "CardioSession", back_populates="session", cascade="all, delete-orphan", passive_deletes=True
    )


class Exercise(Base):
    """One logged exercise: name, sets x reps at an optional weight.

    raw_voice_input keeps the transcript it was parsed from; manually_edited flips
    to True on the first user edit and never goes back.
    """

    __tablename__ = "exercises"
    __table_args__ = (
        Index("ix_exercises_session_id", "session_id"),
        CheckConstraint("reps >= 1", name="ck_exercises_reps_positive"),
        CheckConstraint("sets >= 1", name="ck_exercises_sets_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
    )
    exercise_name: Mapped[str] = mapped_column(String(255), nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="lbs")
    raw_voice_input: Mapped[str | None] = mapped_column(Text, nullable=True)
    manually_edited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="exercises")


class CardioSession(Base):
    """Cardio block inside a workout session. activity_type is stored lower-case."""

    __tablename__ = "cardio_sessions"
    __table_args__ = (Index("ix_cardio_sessions_session_id", "session_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("workout_sessions.id", ondelete="CASCADE"), nullable=False
    )
    activity_type: Mapped[str] = mapped_column(String(100), nullable=False)  # running, rowing, cycling...
    duration_minutes: Mapped[float] = mapped_column(Float, nullable=False)
    distance_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    calories_burned: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    session: Mapped["WorkoutSession"] = relationship("WorkoutSession", back_populates="cardio_sessions")
