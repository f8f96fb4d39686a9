"""Profile schemas, including the tagged weekly-goal form."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from fitcoach.core.enums import ActivityLevel, GoalDirection, Sex
from fitcoach.schemas.base import ApiModel


class WeeklyGoal(ApiModel):
    """Weekly weight-change goal as direction + magnitude.

    Converted to the signed lbs/week convention (negative = lose) only when stored.
    """

    direction: GoalDirection
    lbs_per_week: float = Field(0.0, ge=0, le=5)

    def to_signed(self) -> float:
        if self.direction == GoalDirection.LOSE:
            return -self.lbs_per_week
        if self.direction == GoalDirection.GAIN:
            return self.lbs_per_week
        return 0.0

    @classmethod
    def from_signed(cls, value: float | None) -> WeeklyGoal | None:
        if value is None:
            return None
        if value < 0:
            return cls(direction=GoalDirection.LOSE, lbs_per_week=-value)
        if value > 0:
            return cls(direction=GoalDirection.GAIN, lbs_per_week=value)
        return cls(direction=GoalDirection.MAINTAIN, lbs_per_week=0.0)


class ProfileUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    age: int | None = Field(None, ge=10, le=120)
    height_cm: float | None = Field(None, gt=50, lt=300)
    sex: Sex | None = None
    activity_level: ActivityLevel | None = None
    target_weight: float | None = Field(None, gt=0, lt=1000)
    goal: WeeklyGoal | None = None


class ProfileRead(ApiModel):
    id: int
    name: str
    age: int | None = None
    height_cm: float | None = None
    sex: str | None = None
    activity_level: str | None = None
    target_weight: float | None = None
    weekly_goal: float | None = None
    goal: WeeklyGoal | None = None
    created_at: dt.datetime

    @classmethod
    def from_user(cls, user) -> ProfileRead:
        read = cls.model_validate(user)
        read.goal = WeeklyGoal.from_signed(user.weekly_goal)
        return read
