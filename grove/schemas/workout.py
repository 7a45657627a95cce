"""Workout and WorkoutExercise schemas."""

from datetime import datetime
from uuid import UUID

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from grove.core.enums import Difficulty, WorkoutType
from grove.schemas.exercise import ExerciseRef


class WorkoutRef(BaseModel):
    """Minimal workout info for embedding in session responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    workout_type: WorkoutType | None = None


class WorkoutExerciseBase(BaseModel):
    exercise_id: UUID
    order: int = 0
    custom_sets: int | None = Field(None, ge=1, le=20)
    custom_reps: int | None = Field(None, ge=1, le=100)
    custom_rest_seconds: int | None = Field(None, ge=0, le=600)
    custom_weight: str | None = Field(None, max_length=50)
    custom_duration: int | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=500)


class WorkoutExerciseCreate(WorkoutExerciseBase):
    pass


class WorkoutExerciseRead(WorkoutExerciseBase):
    model_config = ConfigDict(from_attributes=True)

    exercise: ExerciseRef | None = None


class WorkoutBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    workout_type: WorkoutType | None = None
    difficulty: Difficulty | None = None
    estimated_duration: int | None = Field(None, ge=1)
    is_template: bool = True


class WorkoutCreate(WorkoutBase):
    exercises: list[WorkoutExerciseCreate] = []


class WorkoutUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    workout_type: WorkoutType | None = None
    difficulty: Difficulty | None = None
    estimated_duration: int | None = Field(None, ge=1)
    is_template: bool | None = None
    exercises: list[WorkoutExerciseCreate] | None = None

    @field_validator("name", "is_template", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class WorkoutRead(WorkoutBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    exercises: list[WorkoutExerciseRead] = []
    times_completed: int = 0
    last_performed: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
