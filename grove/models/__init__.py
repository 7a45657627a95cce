"""ORM models - import all so Base.metadata is complete for migrations."""

from grove.models.exercise import Exercise
from grove.models.session import WorkoutSession
from grove.models.user import User
from grove.models.weight_log import WeightLog
from grove.models.workout import Workout, WorkoutExercise

__all__ = [
    "Exercise",
    "User",
    "WeightLog",
    "Workout",
    "WorkoutExercise",
    "WorkoutSession",
]
