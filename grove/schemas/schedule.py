"""Weekly schedule schemas: one optional workout per weekday."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict

from grove.core.enums import Difficulty, WorkoutType
from grove.schemas.workout import WorkoutRead


class ScheduledWorkout(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    workout_type: WorkoutType | None = None
    difficulty: Difficulty | None = None
    estimated_duration: int | None = None


class WeeklyScheduleUpdate(BaseModel):
    """Replaces the whole week. Days left out become rest days."""

    model_config = ConfigDict(extra="forbid")

    monday: UUID | None = None
    tuesday: UUID | None = None
    wednesday: UUID | None = None
    thursday: UUID | None = None
    friday: UUID | None = None
    saturday: UUID | None = None
    sunday: UUID | None = None


class WeeklySchedule(BaseModel):
    monday: ScheduledWorkout | None = None
    tuesday: ScheduledWorkout | None = None
    wednesday: ScheduledWorkout | None = None
    thursday: ScheduledWorkout | None = None
    friday: ScheduledWorkout | None = None
    saturday: ScheduledWorkout | None = None
    sunday: ScheduledWorkout | None = None


class TodayWorkout(BaseModel):
    today: str
    workout: WorkoutRead | None = None
    message: str | None = None
