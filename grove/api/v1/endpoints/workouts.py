"""Workout CRUD endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends

from grove.api.deps import get_current_user, get_workout_service
from grove.core.enums import WorkoutType
from grove.models.user import User
from grove.schemas.workout import WorkoutCreate, WorkoutRead, WorkoutUpdate
from grove.services.workouts import WorkoutService

router = APIRouter()


@router.get("", response_model=list[WorkoutRead])
async def list_workouts(
    workout_type: WorkoutType | None = None,
    is_template: bool | None = None,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.list(user.id, workout_type=workout_type, is_template=is_template)


@router.post("", response_model=WorkoutRead, status_code=201)
async def create_workout(
    payload: WorkoutCreate,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.create(user.id, payload)


@router.get("/{workout_id}", response_model=WorkoutRead)
async def get_workout(
    workout_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Get a workout with its ordered exercises."""
    return await service.get(workout_id, user.id)


@router.put("/{workout_id}", response_model=WorkoutRead)
async def update_workout(
    workout_id: uuid.UUID,
    payload: WorkoutUpdate,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    return await service.update(workout_id, user.id, payload)


@router.delete("/{workout_id}", status_code=204)
async def delete_workout(
    workout_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    await service.delete(workout_id, user.id)


@router.post("/{workout_id}/duplicate", response_model=WorkoutRead, status_code=201)
async def duplicate_workout(
    workout_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: WorkoutService = Depends(get_workout_service),
):
    """Copy a workout and its entries under the name "<name> (Copy)"."""
    return await service.duplicate(workout_id, user.id)
