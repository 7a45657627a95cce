"""Workout and WorkoutExercise models - a named, ordered list of exercise references."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grove.core.enums import Difficulty, WorkoutType
from grove.db.base import Base


class Workout(Base):
    """Saved workout structure owned by a user."""

    __tablename__ = "workouts"
    __table_args__ = (
        Index("ix_workouts_user_type", "user_id", "workout_type"),
        Index("ix_workouts_user_template", "user_id", "is_template"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    workout_type: Mapped[WorkoutType | None] = mapped_column(Enum(WorkoutType), nullable=True)
    difficulty: Mapped[Difficulty | None] = mapped_column(Enum(Difficulty), nullable=True)
    estimated_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    is_template: Mapped[bool] = mapped_column(default=True, nullable=False)

    times_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    last_performed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship("User", back_populates="workouts")
    exercises: Mapped[list["WorkoutExercise"]] = relationship(
        "WorkoutExercise",
        back_populates="workout",
        cascade="all, delete-orphan",
        order_by="WorkoutExercise.order",
    )


class WorkoutExercise(Base):
    """One entry of a workout: exercise reference, position and optional overrides."""

    __tablename__ = "workout_exercises"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    workout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False, index=True
    )
    order: Mapped[int] = mapped_column(Integer, default=0)

    custom_sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    custom_reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    custom_rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    custom_weight: Mapped[str | None] = mapped_column(String(50), nullable=True)  # "10kg", "corporal"
    custom_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)

    workout: Mapped["Workout"] = relationship("Workout", back_populates="exercises")
    exercise: Mapped["Exercise"] = relationship("Exercise", back_populates="workout_entries")
