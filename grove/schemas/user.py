"""User, auth and dashboard schemas."""

from datetime import datetime
from uuid import UUID

from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from grove.core.enums import CoachPersonality, Difficulty, WorkoutLocation
from grove.schemas.workout import WorkoutRef


class UserRegister(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6)
    username: str | None = Field(None, min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9]+$")
    weight: float | None = Field(None, ge=30, le=200)
    height: float | None = Field(None, ge=120, le=220)
    age: int | None = Field(None, ge=13, le=100)
    fitness_level: Difficulty | None = None
    onboarding_text: str | None = Field(None, max_length=1000)


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class ProfileUpdate(BaseModel):
    """Profile fields a user may change. Email and password are not accepted here."""

    name: str | None = Field(None, min_length=2, max_length=50)
    weight: float | None = Field(None, ge=30, le=200)
    height: float | None = Field(None, ge=120, le=220)
    age: int | None = Field(None, ge=13, le=100)
    fitness_level: Difficulty | None = None
    onboarding_text: str | None = Field(None, max_length=1000)

    @field_validator("name", "fitness_level", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class PreferencesUpdate(BaseModel):
    available_equipment: list[str] | None = None
    workout_location: WorkoutLocation | None = None
    time_per_session: int | None = Field(None, ge=5, le=300)
    days_per_week: int | None = Field(None, ge=1, le=7)
    goals: list[str] | None = None
    personality: CoachPersonality | None = None

    @field_validator("available_equipment", "goals", "personality", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class UsernameUpdate(BaseModel):
    username: str = Field(..., min_length=3, max_length=30, pattern=r"^[a-zA-Z0-9]+$")


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class PasswordChanged(BaseModel):
    message: str = "Password changed successfully. Please login again with your new password."
    tokens_invalidated: bool = True


class WeightEntryCreate(BaseModel):
    weight: float = Field(..., ge=30, le=300)  # kg


class WeightEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    weight_kg: float
    logged_at: datetime


class WeightHistory(BaseModel):
    current_weight: float | None = None
    weight_history: list[WeightEntryRead] = []


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    username: str | None = None
    email: str
    weight: float | None = None
    height: float | None = None
    age: int | None = None
    fitness_level: Difficulty
    available_equipment: list[str] = []
    workout_location: WorkoutLocation | None = None
    time_per_session: int | None = None
    days_per_week: int | None = None
    goals: list[str] = []
    personality: CoachPersonality
    created_at: datetime | None = None


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: UserRead


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RecentSession(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    workout: WorkoutRef | None = None
    completed_at: datetime | None = None
    total_duration_minutes: int | None = None
    total_volume_kg: float = 0


class UserStats(BaseModel):
    total_workouts: int
    total_exercises: int
    this_week_workouts: int
    current_streak: int
    longest_streak: int
    total_volume_kg: float
    recent_sessions: list[RecentSession] = []
