"""ExerciseName model - usage index backing quick-add suggestions."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fitcoach.db.base import Base


class ExerciseName(Base):
    """Usage counter keyed by exact exercise name. Only ever incremented."""

    __tablename__ = "exercise_names"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_used: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
