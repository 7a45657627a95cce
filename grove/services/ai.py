"""AI coach: chat with memory, workout generation, progress feedback and Q&A."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.constants import (
    CHAT_CONTEXT_MESSAGES,
    COACH_CONTEXT_SESSIONS,
    COACH_TOP_EXERCISES,
    DEFAULT_PERCEIVED_DIFFICULTY,
    MAX_CHAT_HISTORY,
)
from grove.core.enums import ChatRole, CoachPersonality, Difficulty, WorkoutLocation
from grove.core.errors import BadRequestError, UpstreamError
from grove.models.user import User
from grove.repositories.exercises import ExerciseRepository
from grove.repositories.sessions import SessionRepository
from grove.repositories.users import UserRepository
from grove.schemas.ai import (
    ChatResponse,
    GeneratedExercise,
    GeneratedWorkout,
    GenerateWorkoutResponse,
    ProgressAnalysis,
    StarterWorkoutResponse,
)
from grove.schemas.workout import WorkoutCreate, WorkoutExerciseCreate, WorkoutRead
from grove.services import prompts
from grove.services.coach import CoachGateway
from grove.services.exercises import ExerciseService
from grove.services.stats import StatsService
from grove.services.workouts import WorkoutService

logger = logging.getLogger(__name__)

STARTER_WORKOUT = GeneratedWorkout(
    name="Your First Workout",
    description="A simple full-body session to start your fitness journey",
    workout_type="full_body",
    difficulty="beginner",
    estimated_duration_minutes=30,
    exercises=[
        GeneratedExercise(name="Squats", category="legs", sets=3, reps=12, rest_seconds=60),
        GeneratedExercise(name="Push-ups", category="chest", sets=3, reps=10, rest_seconds=60),
        GeneratedExercise(name="Plank", type="time", category="core", sets=3, rest_seconds=45),
        GeneratedExercise(name="Lunges", category="legs", sets=3, reps=10, rest_seconds=60),
    ],
)


def _trim(text: str | None, limit: int) -> str | None:
    return text[:limit] if text else text


class CoachService:
    def __init__(self, db: AsyncSession, gateway: CoachGateway):
        self.gateway = gateway
        self.users = UserRepository(db)
        self.sessions = SessionRepository(db)
        self.exercises = ExerciseRepository(db)
        self.exercise_service = ExerciseService(db)
        self.workout_service = WorkoutService(db)
        self.stats = StatsService(db)

    async def user_context(self, user: User) -> dict[str, Any]:
        """Profile, recent completed sessions and most performed exercises."""
        recent = await self.sessions.recent_completed(user.id, COACH_CONTEXT_SESSIONS)
        difficulties = [s.perceived_difficulty for s in recent if s.perceived_difficulty]
        avg_difficulty = (
            round(sum(difficulties) / len(difficulties), 1)
            if difficulties
            else DEFAULT_PERCEIVED_DIFFICULTY
        )
        top = await self.exercises.top_performed(user.id, COACH_TOP_EXERCISES)
        return {
            "name": user.name,
            "fitness_level": user.fitness_level.value if user.fitness_level else None,
            "available_equipment": user.available_equipment or [],
            "workout_location": user.workout_location.value if user.workout_location else None,
            "time_per_session": user.time_per_session,
            "days_per_week": user.days_per_week,
            "goals": user.goals or [],
            "recent_sessions": [
                {
                    "workout": s.workout.name if s.workout else "Workout",
                    "difficulty": s.perceived_difficulty or DEFAULT_PERCEIVED_DIFFICULTY,
                    "energy": s.energy_level or DEFAULT_PERCEIVED_DIFFICULTY,
                    "mood": s.mood_after.value if s.mood_after else "okay",
                }
                for s in recent
            ],
            "avg_difficulty": avg_difficulty,
            "top_exercises": [
                {"name": e.name, "times": e.times_performed} for e in top if e.times_performed
            ],
        }

    async def chat(self, user: User, message: str) -> ChatResponse:
        if not message or not message.strip():
            raise BadRequestError("Message is required")

        history = list(user.ai_context_history or [])
        context = await self.user_context(user)
        result = await self.gateway.chat(
            message,
            [{"role": m["role"], "content": m["content"]} for m in history[-CHAT_CONTEXT_MESSAGES:]],
            user.personality,
            context,
        )
        if not result.success:
            raise UpstreamError("The AI coach is unavailable right now, try again later")

        now = datetime.now(timezone.utc).isoformat()
        history.append({"role": ChatRole.USER.value, "content": message, "timestamp": now})
        history.append({"role": ChatRole.ASSISTANT.value, "content": result.text, "timestamp": now})
        user.ai_context_history = history[-MAX_CHAT_HISTORY:]
        await self.users.save(user)

        return ChatResponse(response=result.text, personality=user.personality, usage=result.usage)

    async def generate_workout(
        self, user: User, prompt: str, save_to_library: bool = True
    ) -> GenerateWorkoutResponse:
        if not prompt or not prompt.strip():
            raise BadRequestError("Prompt is required")

        context = await self.user_context(user)
        result = await self.gateway.generate_workout(prompt, context)
        if not result.success and result.raw_response is None:
            raise UpstreamError("Failed to generate workout")
        if result.workout is None:
            return GenerateWorkoutResponse(
                success=False,
                saved=False,
                error=result.error,
                raw_response=result.raw_response,
            )

        generated = result.workout
        if not save_to_library:
            return GenerateWorkoutResponse(
                success=True, saved=False, workout_data=generated, ai_notes=generated.ai_notes
            )

        workout = await self.save_generated(user, generated)
        logger.info("Saved generated workout %s for user %s", workout.id, user.id)
        return GenerateWorkoutResponse(
            success=True,
            saved=True,
            workout=WorkoutRead.model_validate(workout),
            ai_notes=generated.ai_notes,
        )

    async def save_generated(self, user: User, generated: GeneratedWorkout):
        """Reuse same-named exercises, create the missing ones, then the workout."""
        entries = []
        for order, item in enumerate(generated.exercises, start=1):
            exercise = await self.exercise_service.find_or_create_by_name(
                user.id,
                item.name,
                {
                    "type": item.type,
                    "category": item.category,
                    "muscle_groups": item.muscle_groups,
                    "equipment": item.equipment,
                    "default_sets": item.sets,
                    "default_reps": item.reps,
                    "default_rest_seconds": item.rest_seconds,
                    "notes": _trim(item.notes, 500),
                },
            )
            entries.append(
                WorkoutExerciseCreate(
                    exercise_id=exercise.id,
                    order=order,
                    custom_sets=item.sets,
                    custom_reps=item.reps,
                    custom_rest_seconds=item.rest_seconds,
                    notes=_trim(item.notes, 500),
                )
            )
        return await self.workout_service.create(
            user.id,
            WorkoutCreate(
                name=generated.name,
                description=generated.description,
                workout_type=generated.workout_type,
                difficulty=generated.difficulty,
                estimated_duration=generated.estimated_duration_minutes,
                exercises=entries,
            ),
        )

    async def starter_workout(self, user: User) -> StarterWorkoutResponse:
        """First workout from onboarding preferences. Falls back to a fixed plan."""
        preferences = {
            "fitness_level": (user.fitness_level or Difficulty.BEGINNER).value,
            "available_equipment": user.available_equipment or [],
            "workout_location": (user.workout_location or WorkoutLocation.HOME).value,
            "time_per_session": user.time_per_session or 30,
            "days_per_week": user.days_per_week or 3,
            "goals": user.goals or [],
        }
        result = await self.gateway.generate_workout(
            prompts.starter_workout_prompt(preferences), preferences
        )
        if result.workout is None:
            logger.info("Using fallback starter workout for user %s: %s", user.id, result.error)
            return StarterWorkoutResponse(workout=STARTER_WORKOUT, preferences=preferences)
        return StarterWorkoutResponse(workout=result.workout, preferences=preferences)

    async def analyze_progress(self, user: User) -> ProgressAnalysis:
        stats = await self.stats.get_stats(user.id)
        summary = {
            "total_workouts": stats.total_workouts,
            "this_week_workouts": stats.this_week_workouts,
            "current_streak": stats.current_streak,
            "longest_streak": stats.longest_streak,
            "total_volume_kg": round(stats.total_volume_kg),
        }
        result = await self.gateway.analyze_progress(summary, user.personality)
        if not result.success:
            raise UpstreamError("Failed to analyze progress")
        return ProgressAnalysis(stats=summary, ai_feedback=result.text)

    async def ask(self, user: User, question: str) -> str:
        if not question or not question.strip():
            raise BadRequestError("Question is required")
        result = await self.gateway.answer_question(question, user.personality)
        if not result.success:
            raise UpstreamError("Failed to answer question")
        return result.text

    async def change_personality(self, user: User, personality: str) -> CoachPersonality:
        try:
            value = CoachPersonality(personality)
        except ValueError:
            valid = ", ".join(p.value for p in CoachPersonality)
            raise BadRequestError(f"Invalid personality. Options: {valid}") from None
        user.personality = value
        await self.users.save(user)
        return value

    async def clear_history(self, user: User) -> None:
        user.ai_context_history = []
        await self.users.save(user)
