"""Profile, account, body weight, weekly schedule and dashboard stats for the current user."""

from fastapi import APIRouter, Depends, Query

from grove.api.deps import (
    get_auth_service,
    get_current_user,
    get_schedule_service,
    get_stats_service,
    get_token,
    get_user_service,
)
from grove.core.constants import DEFAULT_WEIGHT_HISTORY_LIMIT
from grove.models.user import User
from grove.schemas.schedule import TodayWorkout, WeeklySchedule, WeeklyScheduleUpdate
from grove.schemas.user import (
    PasswordChange,
    PasswordChanged,
    PreferencesUpdate,
    ProfileUpdate,
    UsernameUpdate,
    UserRead,
    UserStats,
    WeightEntryCreate,
    WeightHistory,
)
from grove.services.auth import AuthService
from grove.services.schedule import ScheduleService
from grove.services.stats import StatsService
from grove.services.users import UserService

router = APIRouter()


@router.put("/profile", response_model=UserRead)
async def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.update_profile(user, payload)


@router.put("/preferences", response_model=UserRead)
async def update_preferences(
    payload: PreferencesUpdate,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.update_preferences(user, payload)


@router.put("/username", response_model=UserRead)
async def change_username(
    payload: UsernameUpdate,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.change_username(user, payload.username)


@router.put("/password", response_model=PasswordChanged)
async def change_password(
    payload: PasswordChange,
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    service: AuthService = Depends(get_auth_service),
):
    """Change password. Every existing token stops working; the client must log in again."""
    return await service.change_password(user, payload, token)


@router.post("/weight", response_model=WeightHistory)
async def add_weight(
    payload: WeightEntryCreate,
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.add_weight(user, payload.weight)


@router.get("/weight-history", response_model=WeightHistory)
async def get_weight_history(
    limit: int = Query(DEFAULT_WEIGHT_HISTORY_LIMIT, ge=1, le=365),
    user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.weight_history(user, limit)


@router.get("/weekly-schedule", response_model=WeeklySchedule)
async def get_weekly_schedule(
    user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    return await service.get(user)


@router.put("/weekly-schedule", response_model=WeeklySchedule)
async def update_weekly_schedule(
    payload: WeeklyScheduleUpdate,
    user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    return await service.update(user, payload)


@router.get("/today-workout", response_model=TodayWorkout)
async def get_today_workout(
    user: User = Depends(get_current_user),
    service: ScheduleService = Depends(get_schedule_service),
):
    return await service.today(user)


@router.get("/stats", response_model=UserStats)
async def get_stats(
    user: User = Depends(get_current_user),
    service: StatsService = Depends(get_stats_service),
):
    """Completed workouts, this week's count, streaks, volume and recent sessions."""
    return await service.get_stats(user.id)
