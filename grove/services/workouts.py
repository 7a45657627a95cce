"""Workout composition: ordered exercise references with per-entry overrides."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.enums import WorkoutType
from grove.core.errors import BadRequestError, NotFoundError
from grove.models.workout import Workout, WorkoutExercise
from grove.repositories.exercises import ExerciseRepository
from grove.repositories.workouts import WorkoutRepository
from grove.schemas.workout import WorkoutCreate, WorkoutExerciseCreate, WorkoutUpdate

_ENTRY_FIELDS = (
    "exercise_id",
    "order",
    "custom_sets",
    "custom_reps",
    "custom_rest_seconds",
    "custom_weight",
    "custom_duration",
    "notes",
)


def _copy_entry(entry: WorkoutExercise) -> WorkoutExercise:
    return WorkoutExercise(**{f: getattr(entry, f) for f in _ENTRY_FIELDS})


class WorkoutService:
    def __init__(self, db: AsyncSession):
        self.workouts = WorkoutRepository(db)
        self.exercises = ExerciseRepository(db)

    async def _validate_exercises(
        self, user_id: uuid.UUID, entries: list[WorkoutExerciseCreate]
    ) -> None:
        """Every distinct referenced id must be owned by the user or predefined."""
        requested = {e.exercise_id for e in entries}
        if not requested:
            return
        found = await self.exercises.find_visible_ids(user_id, requested)
        if found != requested:
            raise BadRequestError("Some exercises not found or not accessible")

    async def list(
        self,
        user_id: uuid.UUID,
        workout_type: WorkoutType | None = None,
        is_template: bool | None = None,
    ) -> list[Workout]:
        return await self.workouts.list_owned(
            user_id, workout_type=workout_type, is_template=is_template
        )

    async def get(self, workout_id: uuid.UUID, user_id: uuid.UUID) -> Workout:
        workout = await self.workouts.get_owned(workout_id, user_id)
        if workout is None:
            raise NotFoundError("Workout not found")
        return workout

    async def create(self, user_id: uuid.UUID, data: WorkoutCreate) -> Workout:
        await self._validate_exercises(user_id, data.exercises)
        workout = Workout(
            user_id=user_id,
            **data.model_dump(exclude={"exercises"}),
            exercises=[WorkoutExercise(**e.model_dump()) for e in data.exercises],
        )
        return await self.workouts.add(workout)

    async def update(
        self, workout_id: uuid.UUID, user_id: uuid.UUID, data: WorkoutUpdate
    ) -> Workout:
        """Partial update. A given `exercises` list replaces the entries wholesale."""
        workout = await self.get(workout_id, user_id)
        changes = data.model_dump(exclude_unset=True, exclude={"exercises"})
        if data.exercises is not None:
            await self._validate_exercises(user_id, data.exercises)
            workout.exercises = [WorkoutExercise(**e.model_dump()) for e in data.exercises]
        for key, value in changes.items():
            setattr(workout, key, value)
        return await self.workouts.save(workout)

    async def delete(self, workout_id: uuid.UUID, user_id: uuid.UUID) -> None:
        workout = await self.get(workout_id, user_id)
        await self.workouts.delete(workout)

    async def duplicate(self, workout_id: uuid.UUID, user_id: uuid.UUID) -> Workout:
        source = await self.get(workout_id, user_id)
        copy = Workout(
            user_id=user_id,
            name=f"{source.name} (Copy)",
            description=source.description,
            workout_type=source.workout_type,
            difficulty=source.difficulty,
            estimated_duration=source.estimated_duration,
            is_template=source.is_template,
            exercises=[_copy_entry(e) for e in source.exercises],
        )
        return await self.workouts.add(copy)
