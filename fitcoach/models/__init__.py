"""ORM models - import all so Base.metadata is complete for migrations."""

from fitcoach.models.exercise_name import ExerciseName
from fitcoach.models.user import User
from fitcoach.models.weight_log import WeightLog
from fitcoach.models.workout import CardioSession, Exercise, WorkoutSession

__all__ = [
    "CardioSession",
    "Exercise",
    "ExerciseName",
    "User",
    "WeightLog",
    "WorkoutSession",
]
