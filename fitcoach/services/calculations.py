"""Unit and physiology calculations: BMR, TDEE, workout burn, weight trends.

All functions are pure. Inputs are not range-checked; zero or negative values
propagate arithmetically and callers are responsible for sensible inputs.
Daily targets are not clamped to a healthy minimum either.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from fitcoach.core.enums import ActivityLevel, Intensity

logger = logging.getLogger(__name__)

LBS_TO_KG = 0.453592
KCAL_PER_LB = 3500  # ~1 lb of body weight

# TDEE multipliers per activity level
activity_multipliers: dict[str, float] = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE.value: 1.375,
    ActivityLevel.MODERATELY_ACTIVE.value: 1.55,
    ActivityLevel.VERY_ACTIVE.value: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE.value: 1.9,
}
DEFAULT_ACTIVITY_LEVEL = ActivityLevel.MODERATELY_ACTIVE

# MET values per workout intensity
MET_LIGHT = 3.5
MET_MODERATE = 5.0
MET_INTENSE = 6.5
DEFAULT_MET = MET_MODERATE


def calculate_bmr(weight_kg: float, height_cm: float, age: float, sex: str | None) -> float:
    """Mifflin-St Jeor BMR (kcal/day). Anything other than "male" uses the female offset."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if sex == "male" else base - 161


def get_activity_multiplier(activity_level: str | None) -> float:
    """TDEE multiplier for an activity level. Unknown or missing levels use moderately_active."""
    key = activity_level.value if isinstance(activity_level, ActivityLevel) else activity_level
    if key not in activity_multipliers:
        logger.debug("Unknown activity level %r, using %s", activity_level, DEFAULT_ACTIVITY_LEVEL.value)
        key = DEFAULT_ACTIVITY_LEVEL.value
    return activity_multipliers[key]


def calculate_tdee(bmr: float, activity_level: str | None) -> float:
    return bmr * get_activity_multiplier(activity_level)


def get_met_for_intensity(intensity: str | None) -> float:
    """Map intensity to MET. Default moderate."""
    if not intensity:
        return DEFAULT_MET
    i = (intensity.value if isinstance(intensity, Intensity) else intensity).strip().lower()
    if i == Intensity.LIGHT.value:
        return MET_LIGHT
    if i == Intensity.INTENSE.value:
        return MET_INTENSE
    return MET_MODERATE


def estimate_workout_calories(
    duration_minutes: float,
    weight_lbs: float,
    intensity: str | None = Intensity.MODERATE,
) -> float:
    """MET x body weight (kg) x hours."""
    return get_met_for_intensity(intensity) * lbs_to_kg(weight_lbs) * (duration_minutes / 60)


def get_daily_calorie_target(tdee: float, weekly_goal_lbs: float) -> float:
    """Daily intake for a signed weekly goal (negative = lose, positive = gain)."""
    daily_adjustment = (weekly_goal_lbs * KCAL_PER_LB) / 7
    return tdee - daily_adjustment


def lbs_to_kg(lbs: float) -> float:
    return lbs * LBS_TO_KG


def kg_to_lbs(kg: float) -> float:
    return kg / LBS_TO_KG


def calculate_moving_average(weights: Sequence[float], days: int = 7) -> float:
    """Mean of the first `days` values of a most-recent-first series. Empty series -> 0."""
    if not weights:
        return 0
    window = list(weights[: min(days, len(weights))])
    return sum(window) / len(window)


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up (2.5 -> 3, -2.5 -> -2), unlike the builtin round()."""
    return math.floor(value + 0.5)
