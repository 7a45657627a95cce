"""User model: identity, physical data, preferences and AI coach memory."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grove.core.enums import CoachPersonality, Difficulty, WorkoutLocation
from grove.db.base import Base, JSONType


class User(Base):
    """Registered user. Never hard-deleted."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    username: Mapped[str | None] = mapped_column(String(30), nullable=True, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Physical data
    weight: Mapped[float | None] = mapped_column(Float, nullable=True)  # kg
    height: Mapped[float | None] = mapped_column(Float, nullable=True)  # cm
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    fitness_level: Mapped[Difficulty] = mapped_column(
        Enum(Difficulty), default=Difficulty.BEGINNER, nullable=False
    )

    # Preferences
    available_equipment: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    workout_location: Mapped[WorkoutLocation | None] = mapped_column(Enum(WorkoutLocation), nullable=True)
    time_per_session: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    days_per_week: Mapped[int | None] = mapped_column(Integer, nullable=True)

    goals: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    onboarding_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    # {"monday": workout id or None, ...}; ids of deleted workouts read back as None
    weekly_schedule: Mapped[dict] = mapped_column(JSONType, default=dict, nullable=False)

    # AI coach
    personality: Mapped[CoachPersonality] = mapped_column(
        Enum(CoachPersonality), default=CoachPersonality.MOTIVATOR, nullable=False
    )
    # [{"role": "user"|"assistant", "content": str, "timestamp": iso}], most recent 20
    ai_context_history: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)

    # Auth: [{"token", "created_at", "expires_at"}] and [{"token", "blacklisted_at", "expires_at"}]
    refresh_tokens: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    blacklisted_tokens: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    # Access tokens issued before this instant no longer authenticate
    password_changed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    exercises: Mapped[list["Exercise"]] = relationship("Exercise", back_populates="user")
    workouts: Mapped[list["Workout"]] = relationship("Workout", back_populates="user")
