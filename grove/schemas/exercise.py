"""Exercise schemas."""

from datetime import datetime
from uuid import UUID

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from grove.core.enums import Difficulty, ExerciseType


class ExerciseRef(BaseModel):
    """Minimal exercise info for embedding in workout/session responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: ExerciseType
    category: str | None = None


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    type: ExerciseType
    category: str | None = Field(None, max_length=50)
    muscle_groups: list[str] = []
    equipment: list[str] = []
    default_sets: int | None = Field(None, ge=1, le=20)
    default_reps: int | None = Field(None, ge=1, le=100)
    default_rest_seconds: int | None = Field(None, ge=5, le=600)
    default_duration_seconds: int | None = Field(None, ge=5, le=3600)
    default_distance_km: float | None = Field(None, ge=0.1, le=100)
    difficulty: Difficulty | None = None
    instructions: str | None = Field(None, max_length=1000)
    video_url: str | None = Field(None, max_length=500)
    notes: str | None = Field(None, max_length=500)


class ExerciseCreate(ExerciseBase):
    pass


class ExerciseUpdate(BaseModel):
    name: str | None = Field(None, min_length=2, max_length=100)
    type: ExerciseType | None = None
    category: str | None = Field(None, max_length=50)
    muscle_groups: list[str] | None = None
    equipment: list[str] | None = None
    default_sets: int | None = Field(None, ge=1, le=20)
    default_reps: int | None = Field(None, ge=1, le=100)
    default_rest_seconds: int | None = Field(None, ge=5, le=600)
    default_duration_seconds: int | None = Field(None, ge=5, le=3600)
    default_distance_km: float | None = Field(None, ge=0.1, le=100)
    difficulty: Difficulty | None = None
    instructions: str | None = Field(None, max_length=1000)
    video_url: str | None = Field(None, max_length=500)
    notes: str | None = Field(None, max_length=500)

    @field_validator("name", "type", "muscle_groups", "equipment", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID | None = None
    is_custom: bool = True
    times_performed: int = 0
    last_performed: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
