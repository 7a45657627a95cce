"""Exercise model - a named movement owned by a user, or predefined when unowned."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grove.core.enums import Difficulty, ExerciseType
from grove.db.base import Base, JSONType


class Exercise(Base):
    """Exercise definition with classification and default performance parameters."""

    __tablename__ = "exercises"
    __table_args__ = (Index("ix_exercises_user_type", "user_id", "type"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # NULL owner = predefined exercise shared by everyone
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    type: Mapped[ExerciseType] = mapped_column(Enum(ExerciseType), nullable=False)
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    muscle_groups: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)
    equipment: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)

    # Defaults for type "reps"
    default_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Defaults for "time" / "cardio"
    default_duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_distance_km: Mapped[float | None] = mapped_column(Float, nullable=True)

    difficulty: Mapped[Difficulty | None] = mapped_column(Enum(Difficulty), nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_custom: Mapped[bool] = mapped_column(default=True, nullable=False)

    # Progress tracking (bumped when a session completes)
    times_performed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_performed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User | None"] = relationship("User", back_populates="exercises")
    workout_entries: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise", back_populates="exercise", cascade="all, delete-orphan"
    )
