"""WeightLog model - one body-weight reading per row."""

from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fitcoach.db.base import Base


class WeightLog(Base):
    """Body weight in lbs on a calendar date, with an optional time-of-day tag."""

    __tablename__ = "weight_logs"
    __table_args__ = (Index("ix_weight_logs_user_date", "user_id", "date"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    time_of_day: Mapped[str | None] = mapped_column(String(20), nullable=True)  # morning, evening...
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: dt.datetime.now(dt.timezone.utc)
    )

    user: Mapped["User"] = relationship("User", back_populates="weight_logs")
