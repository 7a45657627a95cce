"""Exercise catalogue: user-owned exercises plus the shared predefined ones."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.enums import ExerciseType
from grove.core.errors import NotFoundError
from grove.models.exercise import Exercise
from grove.repositories.exercises import ExerciseRepository
from grove.schemas.exercise import ExerciseCreate, ExerciseUpdate


class ExerciseService:
    def __init__(self, db: AsyncSession):
        self.exercises = ExerciseRepository(db)

    async def list(
        self,
        user_id: uuid.UUID,
        type: ExerciseType | None = None,
        category: str | None = None,
    ) -> list[Exercise]:
        return await self.exercises.list_visible(user_id, type=type, category=category)

    async def get(self, exercise_id: uuid.UUID, user_id: uuid.UUID) -> Exercise:
        exercise = await self.exercises.get_visible(exercise_id, user_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        return exercise

    async def create(self, user_id: uuid.UUID, data: ExerciseCreate) -> Exercise:
        exercise = Exercise(**data.model_dump(), user_id=user_id, is_custom=True)
        return await self.exercises.add(exercise)

    async def update(
        self, exercise_id: uuid.UUID, user_id: uuid.UUID, data: ExerciseUpdate
    ) -> Exercise:
        """Partial update; predefined exercises are not editable."""
        exercise = await self.exercises.get_owned(exercise_id, user_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(exercise, key, value)
        return await self.exercises.save(exercise)

    async def delete(self, exercise_id: uuid.UUID, user_id: uuid.UUID) -> None:
        exercise = await self.exercises.get_owned(exercise_id, user_id)
        if exercise is None:
            raise NotFoundError("Exercise not found")
        await self.exercises.delete(exercise)

    async def find_or_create_by_name(
        self, user_id: uuid.UUID, name: str, defaults: dict[str, Any]
    ) -> Exercise:
        """Reuse the user's exercise with this exact name, else create one from defaults."""
        existing = await self.exercises.find_by_name(user_id, name)
        if existing is not None:
            return existing
        exercise = Exercise(user_id=user_id, name=name, is_custom=True, **defaults)
        return await self.exercises.add(exercise)
