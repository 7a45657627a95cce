"""WorkoutSession model - one performance of a workout."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from grove.core.enums import Mood
from grove.db.base import Base, JSONType

# A session is active until it is completed or abandoned
ACTIVE_SESSION_WHERE = text("NOT completed AND NOT abandoned")


class WorkoutSession(Base):
    """
    Session lifecycle: ACTIVE -> COMPLETED or ACTIVE -> ABANDONED (both terminal).

    exercises_performed is stored as a document:
    [{"exercise_id", "total_sets", "completed_sets", "exercise_duration", "personal_best",
      "sets_completed": [{"set_number", "reps_completed", "weight_used", "duration_seconds",
                          "rest_after_seconds", "rpe", "completed", "notes"}]}]
    """

    __tablename__ = "workout_sessions"
    __table_args__ = (
        Index("ix_workout_sessions_user_started", "user_id", "started_at"),
        Index("ix_workout_sessions_user_completed", "user_id", "completed"),
        # At most one active session per user
        Index(
            "uq_workout_sessions_active_user",
            "user_id",
            unique=True,
            postgresql_where=ACTIVE_SESSION_WHERE,
            sqlite_where=ACTIVE_SESSION_WHERE,
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    workout_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("workouts.id", ondelete="SET NULL"), nullable=True, index=True
    )

    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Set while paused; resume folds the elapsed time into total_paused_seconds
    paused_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    total_paused_seconds: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    exercises_performed: Mapped[list] = mapped_column(JSONType, default=list, nullable=False)

    total_volume_kg: Mapped[float] = mapped_column(Float, default=0, nullable=False)
    total_reps: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_rest_seconds: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    completion_percentage: Mapped[float] = mapped_column(Float, default=0, nullable=False)

    # User feedback on completion
    perceived_difficulty: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-10
    energy_level: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 1-10
    mood_after: Mapped[Mood | None] = mapped_column(Enum(Mood), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    completed: Mapped[bool] = mapped_column(default=False, nullable=False)
    abandoned: Mapped[bool] = mapped_column(default=False, nullable=False)
    abandon_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    workout: Mapped["Workout | None"] = relationship("Workout")

    @property
    def is_active(self) -> bool:
        return not self.completed and not self.abandoned
