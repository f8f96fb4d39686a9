"""Weight log schemas."""

import datetime as dt

from pydantic import Field

from fitcoach.schemas.base import ApiModel


class WeightLogCreate(ApiModel):
    date: dt.date | None = Field(None, description="Defaults to today")
    weight: float = Field(..., gt=0, lt=1000, description="Body weight in lbs")
    time_of_day: str | None = Field(None, max_length=20)
    notes: str | None = None


class WeightLogRead(ApiModel):
    id: int
    user_id: int
    date: dt.date
    weight: float
    time_of_day: str | None = None
    notes: str | None = None
    created_at: dt.datetime
