"""Shared FastAPI dependencies: caller identity and per-request services."""

from __future__ import annotations

import uuid

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from grove.core.errors import UnauthorizedError
from grove.core.security import decode_claims
from grove.db.session import get_db
from grove.models.user import User
from grove.repositories.users import UserRepository
from grove.services.ai import CoachService
from grove.services.auth import AuthService, is_revoked
from grove.services.coach import CoachGateway
from grove.services.exercises import ExerciseService
from grove.services.llm import CompletionClient, get_completion_client
from grove.services.schedule import ScheduleService
from grove.services.sessions import SessionService
from grove.services.stats import StatsService
from grove.services.users import UserService
from grove.services.workouts import WorkoutService

bearer_scheme = HTTPBearer(auto_error=False)


async def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_token),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user. Invalid, expired or revoked tokens are 401."""
    try:
        claims = decode_claims(token)
        user_id = uuid.UUID(claims.get("sub", ""))
    except (jwt.InvalidTokenError, ValueError):
        raise UnauthorizedError("Invalid or expired token") from None
    user = await UserRepository(db).get(user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    if is_revoked(user, token, claims.get("iat")):
        raise UnauthorizedError("Token has been revoked")
    return user


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_user_service(db: AsyncSession = Depends(get_db)) -> UserService:
    return UserService(db)


def get_exercise_service(db: AsyncSession = Depends(get_db)) -> ExerciseService:
    return ExerciseService(db)


def get_workout_service(db: AsyncSession = Depends(get_db)) -> WorkoutService:
    return WorkoutService(db)


def get_session_service(db: AsyncSession = Depends(get_db)) -> SessionService:
    return SessionService(db)


def get_stats_service(db: AsyncSession = Depends(get_db)) -> StatsService:
    return StatsService(db)


def get_schedule_service(db: AsyncSession = Depends(get_db)) -> ScheduleService:
    return ScheduleService(db)


def get_coach_service(
    db: AsyncSession = Depends(get_db),
    client: CompletionClient = Depends(get_completion_client),
) -> CoachService:
    return CoachService(db, CoachGateway(client))
