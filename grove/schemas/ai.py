"""AI coach request/response schemas and the structured workout the model must return."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from grove.core.enums import CoachPersonality, Difficulty, ExerciseType, WorkoutType
from grove.schemas.workout import WorkoutRead


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    response: str
    personality: CoachPersonality
    usage: dict[str, Any] | None = None


class GenerateWorkoutRequest(BaseModel):
    prompt: str
    save_to_library: bool = True


class AskRequest(BaseModel):
    question: str


class PersonalityRequest(BaseModel):
    personality: str


class GeneratedExercise(BaseModel):
    """One exercise as proposed by the model. Lenient: the model is not a schema validator."""

    name: str = Field(..., min_length=2, max_length=100)
    type: ExerciseType = ExerciseType.REPS
    category: str | None = Field(None, max_length=50)
    muscle_groups: list[str] = []
    equipment: list[str] = []
    sets: int | None = Field(None, ge=1, le=20)
    reps: int | None = Field(None, ge=1, le=100)
    rest_seconds: int | None = Field(None, ge=5, le=600)
    notes: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _unknown_type_is_reps(cls, value: Any) -> Any:
        try:
            return ExerciseType(value)
        except ValueError:
            return ExerciseType.REPS


class GeneratedWorkout(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    workout_type: WorkoutType = WorkoutType.CUSTOM
    difficulty: Difficulty | None = None
    estimated_duration_minutes: int | None = Field(None, ge=1)
    exercises: list[GeneratedExercise] = Field(..., min_length=1)
    ai_notes: str | None = None

    @field_validator("workout_type", mode="before")
    @classmethod
    def _unknown_type_is_custom(cls, value: Any) -> Any:
        try:
            return WorkoutType(value)
        except ValueError:
            return WorkoutType.CUSTOM

    @field_validator("difficulty", mode="before")
    @classmethod
    def _unknown_difficulty_is_none(cls, value: Any) -> Any:
        try:
            return Difficulty(value)
        except ValueError:
            return None


class GenerateWorkoutResponse(BaseModel):
    success: bool
    saved: bool
    workout: WorkoutRead | None = None
    workout_data: GeneratedWorkout | None = None
    ai_notes: str | None = None
    error: str | None = None
    raw_response: str | None = None


class StarterWorkoutResponse(BaseModel):
    workout: GeneratedWorkout
    preferences: dict[str, Any]


class ProgressAnalysis(BaseModel):
    stats: dict[str, Any]
    ai_feedback: str


class AnswerResponse(BaseModel):
    answer: str


class MessageResponse(BaseModel):
    message: str
    personality: CoachPersonality | None = None
