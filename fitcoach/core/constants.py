"""Application constants."""

# Daily summary
SUMMARY_WEIGHT_WINDOW_DAYS = 30
MOVING_AVERAGE_DAYS = 7
DEFAULT_BASE_CALORIES = 2000

# Quick-add suggestions
EXERCISE_NAME_SUGGESTION_LIMIT = 50

DEFAULT_WEIGHT_UNIT = "lbs"
DEFAULT_SETS = 1

CLARIFICATION_FALLBACK = "Could you provide more details?"
