"""Exercise CRUD endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from grove.api.deps import get_current_user, get_exercise_service
from grove.core.enums import ExerciseType
from grove.models.user import User
from grove.schemas.exercise import ExerciseCreate, ExerciseRead, ExerciseUpdate
from grove.services.exercises import ExerciseService

router = APIRouter()


@router.get("", response_model=list[ExerciseRead])
async def list_exercises(
    type: ExerciseType | None = None,
    category: str | None = None,
    user: User = Depends(get_current_user),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Own exercises plus the predefined catalogue, optionally filtered."""
    return await service.list(user.id, type=type, category=category)


@router.post("", response_model=ExerciseRead, status_code=201)
async def create_exercise(
    payload: ExerciseCreate,
    user: User = Depends(get_current_user),
    service: ExerciseService = Depends(get_exercise_service),
):
    return await service.create(user.id, payload)


@router.get("/{exercise_id}", response_model=ExerciseRead)
async def get_exercise(
    exercise_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: ExerciseService = Depends(get_exercise_service),
):
    return await service.get(exercise_id, user.id)


@router.put("/{exercise_id}", response_model=ExerciseRead)
async def update_exercise(
    exercise_id: uuid.UUID,
    payload: ExerciseUpdate,
    user: User = Depends(get_current_user),
    service: ExerciseService = Depends(get_exercise_service),
):
    return await service.update(exercise_id, user.id, payload)


@router.delete("/{exercise_id}", status_code=204)
async def delete_exercise(
    exercise_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: ExerciseService = Depends(get_exercise_service),
):
    """Delete an owned exercise (also removes it from workouts)."""
    await service.delete(exercise_id, user.id)
