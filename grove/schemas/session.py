"""Workout session schemas (performance records, lifecycle payloads, projections)."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from grove.core.enums import Mood
from grove.schemas.exercise import ExerciseRef
from grove.schemas.workout import WorkoutRef

if TYPE_CHECKING:
    from grove.models.exercise import Exercise
    from grove.models.session import WorkoutSession


class SetData(BaseModel):
    """A set as reported by the client while training."""

    reps_completed: int | None = Field(None, ge=0)
    weight_used: str | None = Field(None, max_length=50)  # "10kg", "22.5", "corporal"
    duration_seconds: int | None = Field(None, ge=0)
    rest_after_seconds: int | None = Field(None, ge=0)
    rpe: int | None = Field(None, ge=1, le=10)
    notes: str | None = Field(None, max_length=500)


class SetRecord(SetData):
    set_number: int | None = None
    completed: bool = True


class ExercisePerformed(BaseModel):
    exercise_id: UUID
    total_sets: int = Field(0, ge=0)
    completed_sets: int = Field(0, ge=0)
    sets_completed: list[SetRecord] = []
    exercise_duration: int | None = Field(None, ge=0)
    personal_best: bool = False


class ExercisePerformedRead(ExercisePerformed):
    exercise: ExerciseRef | None = None


class SessionStart(BaseModel):
    workout_id: UUID


class SessionUpdate(BaseModel):
    exercises_performed: list[ExercisePerformed]


class SessionAddSet(BaseModel):
    exercise_index: int = Field(..., ge=0)
    set_data: SetData


class SessionComplete(BaseModel):
    perceived_difficulty: int | None = Field(None, ge=1, le=10)
    energy_level: int | None = Field(None, ge=1, le=10)
    mood_after: Mood | None = None
    notes: str | None = None


class SessionAbandon(BaseModel):
    abandon_reason: str | None = Field(None, max_length=500)


class SessionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workout_id: UUID | None = None
    workout: WorkoutRef | None = None
    started_at: datetime
    completed_at: datetime | None = None
    total_duration_minutes: int | None = None
    paused_at: datetime | None = None
    total_paused_seconds: int = 0
    exercises_performed: list[ExercisePerformedRead] = []
    total_volume_kg: float = 0
    total_reps: int = 0
    total_rest_seconds: int = 0
    completion_percentage: float = 0
    perceived_difficulty: int | None = None
    energy_level: int | None = None
    mood_after: Mood | None = None
    notes: str | None = None
    completed: bool = False
    abandoned: bool = False
    abandon_reason: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_session(
        cls,
        session: "WorkoutSession",
        exercises: Mapping[UUID, "Exercise"],
    ) -> "SessionRead":
        """Project a session, populating workout and exercise references."""
        performed = []
        for entry in session.exercises_performed or []:
            item = ExercisePerformedRead.model_validate(entry)
            ex = exercises.get(item.exercise_id)
            if ex is not None:
                item.exercise = ExerciseRef.model_validate(ex)
            performed.append(item)
        return cls(
            id=session.id,
            workout_id=session.workout_id,
            workout=WorkoutRef.model_validate(session.workout) if session.workout else None,
            started_at=session.started_at,
            completed_at=session.completed_at,
            total_duration_minutes=session.total_duration_minutes,
            paused_at=session.paused_at,
            total_paused_seconds=session.total_paused_seconds or 0,
            exercises_performed=performed,
            total_volume_kg=session.total_volume_kg or 0,
            total_reps=session.total_reps or 0,
            total_rest_seconds=session.total_rest_seconds or 0,
            completion_percentage=session.completion_percentage or 0,
            perceived_difficulty=session.perceived_difficulty,
            energy_level=session.energy_level,
            mood_after=session.mood_after,
            notes=session.notes,
            completed=session.completed,
            abandoned=session.abandoned,
            abandon_reason=session.abandon_reason,
            created_at=session.created_at,
        )


class AddSetResult(BaseModel):
    session: SessionRead
    personal_best_achieved: bool


class SessionResumeResult(BaseModel):
    session: SessionRead
    pause_duration_seconds: int
