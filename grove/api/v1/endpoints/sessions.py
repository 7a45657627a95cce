"""Workout session endpoints: start, log sets, update, pause, complete, abandon."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from grove.api.deps import get_current_user, get_session_service
from grove.core.constants import DEFAULT_SESSION_LIST_LIMIT
from grove.models.user import User
from grove.schemas.session import (
    AddSetResult,
    SessionAbandon,
    SessionAddSet,
    SessionComplete,
    SessionRead,
    SessionResumeResult,
    SessionStart,
    SessionUpdate,
)
from grove.services.sessions import SessionService

router = APIRouter()


@router.get("", response_model=list[SessionRead])
async def list_sessions(
    completed: bool | None = None,
    limit: int = Query(DEFAULT_SESSION_LIST_LIMIT, ge=1, le=200),
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Sessions newest first, optionally only completed (or only not completed)."""
    sessions = await service.list(user.id, completed=completed, limit=limit)
    return [await service.read(s) for s in sessions]


@router.get("/active", response_model=SessionRead)
async def get_active_session(
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    return await service.read(await service.get_active(user.id))


@router.post("/start", response_model=SessionRead)
async def start_session(
    payload: SessionStart,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Start a session for an owned workout. 400 if another session is still active."""
    session = await service.start(user.id, payload.workout_id)
    return await service.read(session)


@router.get("/{session_id}", response_model=SessionRead)
async def get_session(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    return await service.read(await service.get(session_id, user.id))


@router.post("/{session_id}/add-set", response_model=AddSetResult)
async def add_set(
    session_id: uuid.UUID,
    payload: SessionAddSet,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    return await service.add_set(session_id, user.id, payload.exercise_index, payload.set_data)


@router.put("/{session_id}", response_model=SessionRead)
async def update_session(
    session_id: uuid.UUID,
    payload: SessionUpdate,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    session = await service.update(session_id, user.id, payload.exercises_performed)
    return await service.read(session)


@router.post("/{session_id}/pause", response_model=SessionRead)
async def pause_session(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    return await service.read(await service.pause(session_id, user.id))


@router.post("/{session_id}/resume", response_model=SessionResumeResult)
async def resume_session(
    session_id: uuid.UUID,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    """Resume a paused session. The response carries how long the pause lasted."""
    return await service.resume(session_id, user.id)


@router.post("/{session_id}/complete", response_model=SessionRead)
async def complete_session(
    session_id: uuid.UUID,
    payload: SessionComplete,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    session = await service.complete(session_id, user.id, payload)
    return await service.read(session)


@router.post("/{session_id}/abandon", response_model=SessionRead)
async def abandon_session(
    session_id: uuid.UUID,
    payload: SessionAbandon | None = None,
    user: User = Depends(get_current_user),
    service: SessionService = Depends(get_session_service),
):
    reason = payload.abandon_reason if payload else None
    session = await service.abandon(session_id, user.id, reason)
    return await service.read(session)
