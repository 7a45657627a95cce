"""Initial schema: users, exercises, workouts, workout_exercises, workout_sessions.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# Enums are stored by member name, matching the ORM's Enum(PyEnum) columns
difficulty = sa.Enum("BEGINNER", "INTERMEDIATE", "ADVANCED", name="difficulty")
workout_location = sa.Enum("HOME", "GYM", name="workoutlocation")
coach_personality = sa.Enum("MOTIVATOR", "ANALYTICAL", "BEAST", "RELAXED", name="coachpersonality")
exercise_type = sa.Enum("REPS", "TIME", "CARDIO", name="exercisetype")
workout_type = sa.Enum("PUSH", "PULL", "LEGS", "FULL_BODY", "CARDIO", "CUSTOM", name="workouttype")
mood = sa.Enum("GREAT", "GOOD", "OKAY", "TIRED", "EXHAUSTED", name="mood")

json_type = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("weight", sa.Float(), nullable=True),
        sa.Column("height", sa.Float(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("fitness_level", difficulty, nullable=False),
        sa.Column("available_equipment", json_type, nullable=False),
        sa.Column("workout_location", workout_location, nullable=True),
        sa.Column("time_per_session", sa.Integer(), nullable=True),
        sa.Column("days_per_week", sa.Integer(), nullable=True),
        sa.Column("goals", json_type, nullable=False),
        sa.Column("onboarding_text", sa.Text(), nullable=True),
        sa.Column("personality", coach_personality, nullable=False),
        sa.Column("ai_context_history", json_type, nullable=False),
        sa.Column("refresh_tokens", json_type, nullable=False),
        sa.Column("blacklisted_tokens", json_type, nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("type", exercise_type, nullable=False),
        sa.Column("category", sa.String(length=50), nullable=True),
        sa.Column("muscle_groups", json_type, nullable=False),
        sa.Column("equipment", json_type, nullable=False),
        sa.Column("default_sets", sa.Integer(), nullable=True),
        sa.Column("default_reps", sa.Integer(), nullable=True),
        sa.Column("default_rest_seconds", sa.Integer(), nullable=True),
        sa.Column("default_duration_seconds", sa.Integer(), nullable=True),
        sa.Column("default_distance_km", sa.Float(), nullable=True),
        sa.Column("difficulty", difficulty, nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("video_url", sa.String(length=500), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("is_custom", sa.Boolean(), nullable=False),
        sa.Column("times_performed", sa.Integer(), nullable=False),
        sa.Column("last_performed", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_exercises_user_id"), "exercises", ["user_id"], unique=False)
    op.create_index(op.f("ix_exercises_name"), "exercises", ["name"], unique=False)
    op.create_index("ix_exercises_user_type", "exercises", ["user_id", "type"], unique=False)

    op.create_table(
        "workouts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("workout_type", workout_type, nullable=True),
        sa.Column("difficulty", difficulty, nullable=True),
        sa.Column("estimated_duration", sa.Integer(), nullable=True),
        sa.Column("is_template", sa.Boolean(), nullable=False),
        sa.Column("times_completed", sa.Integer(), nullable=False),
        sa.Column("last_performed", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workouts_user_id"), "workouts", ["user_id"], unique=False)
    op.create_index("ix_workouts_user_type", "workouts", ["user_id", "workout_type"], unique=False)
    op.create_index("ix_workouts_user_template", "workouts", ["user_id", "is_template"], unique=False)

    op.create_table(
        "workout_exercises",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workout_id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=True),
        sa.Column("custom_sets", sa.Integer(), nullable=True),
        sa.Column("custom_reps", sa.Integer(), nullable=True),
        sa.Column("custom_rest_seconds", sa.Integer(), nullable=True),
        sa.Column("custom_weight", sa.String(length=50), nullable=True),
        sa.Column("custom_duration", sa.Integer(), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.ForeignKeyConstraint(["exercise_id"], ["exercises.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_exercises_workout_id"), "workout_exercises", ["workout_id"], unique=False)
    op.create_index(op.f("ix_workout_exercises_exercise_id"), "workout_exercises", ["exercise_id"], unique=False)

    op.create_table(
        "workout_sessions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("workout_id", sa.Uuid(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("total_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("exercises_performed", json_type, nullable=False),
        sa.Column("total_volume_kg", sa.Float(), nullable=False),
        sa.Column("total_reps", sa.Integer(), nullable=False),
        sa.Column("total_rest_seconds", sa.Integer(), nullable=False),
        sa.Column("completion_percentage", sa.Float(), nullable=False),
        sa.Column("perceived_difficulty", sa.Integer(), nullable=True),
        sa.Column("energy_level", sa.Integer(), nullable=True),
        sa.Column("mood_after", mood, nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("completed", sa.Boolean(), nullable=False),
        sa.Column("abandoned", sa.Boolean(), nullable=False),
        sa.Column("abandon_reason", sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["workout_id"], ["workouts.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_sessions_workout_id"), "workout_sessions", ["workout_id"], unique=False)
    op.create_index("ix_workout_sessions_user_started", "workout_sessions", ["user_id", "started_at"], unique=False)
    op.create_index("ix_workout_sessions_user_completed", "workout_sessions", ["user_id", "completed"], unique=False)
    # At most one active (not completed, not abandoned) session per user
    op.create_index(
        "uq_workout_sessions_active_user",
        "workout_sessions",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("NOT completed AND NOT abandoned"),
        sqlite_where=sa.text("NOT completed AND NOT abandoned"),
    )


def downgrade() -> None:
    op.drop_index("uq_workout_sessions_active_user", table_name="workout_sessions")
    op.drop_table("workout_sessions")
    op.drop_table("workout_exercises")
    op.drop_table("workouts")
    op.drop_table("exercises")
    op.drop_table("users")
    bind = op.get_bind()
    for enum in (mood, workout_type, exercise_type, coach_personality, workout_location, difficulty):
        enum.drop(bind, checkfirst=True)
