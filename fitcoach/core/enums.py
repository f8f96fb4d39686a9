"""Shared enums for models and API."""

from enum import Enum


class Sex(str, Enum):
    """Biological sex category used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    """Ordinal activity level; each maps to a fixed TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class Intensity(str, Enum):
    """Workout intensity for MET lookup."""

    LIGHT = "light"
    MODERATE = "moderate"
    INTENSE = "intense"


class Confidence(str, Enum):
    """How sure the parser is about an extracted exercise."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class GoalDirection(str, Enum):
    """Weekly weight goal direction (UI-facing form of the signed lbs/week value)."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"
