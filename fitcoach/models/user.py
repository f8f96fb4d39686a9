"""User model - profile inputs for BMR/TDEE and goal tracking."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitcoach.db.base import Base


class User(Base):
    """One profile per user. Created on first access with only a name.

    weekly_goal is signed lbs/week: negative = lose, zero = maintain, positive = gain.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height_cm: Mapped[float | None] = mapped_column(Float, nullable=True)
    sex: Mapped[str | None] = mapped_column(String(10), nullable=True)  # male / female / other
    activity_level: Mapped[str | None] = mapped_column(String(32), nullable=True)
    target_weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # lbs
    weekly_goal: Mapped[float | None] = mapped_column(Float, nullable=True)  # lbs/week, signed
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    weight_logs: Mapped[list["WeightLog"]] = relationship(
        "WeightLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    workout_sessions: Mapped[list["WorkoutSession"]] = relationship(
        "WorkoutSession", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
