"""Registration, login and token endpoints."""

from fastapi import APIRouter, Depends

from grove.api.deps import get_auth_service, get_current_user, get_token
from grove.models.user import User
from grove.schemas.ai import MessageResponse
from grove.schemas.user import (
    AccessToken,
    RefreshRequest,
    TokenPair,
    UserLogin,
    UserRead,
    UserRegister,
)
from grove.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=TokenPair, status_code=201)
async def register(payload: UserRegister, service: AuthService = Depends(get_auth_service)):
    return await service.register(payload)


@router.post("/login", response_model=TokenPair)
async def login(payload: UserLogin, service: AuthService = Depends(get_auth_service)):
    return await service.login(payload)


@router.post("/refresh", response_model=AccessToken)
async def refresh(payload: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    return await service.refresh(payload.refresh_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    service: AuthService = Depends(get_auth_service),
):
    await service.logout(user, token)
    return MessageResponse(message="Logged out")


@router.post("/logout-all", response_model=MessageResponse)
async def logout_all(
    user: User = Depends(get_current_user),
    token: str = Depends(get_token),
    service: AuthService = Depends(get_auth_service),
):
    """Revoke every refresh token and the current access token."""
    await service.logout_all(user, token)
    return MessageResponse(message="Logged out from all devices")


@router.get("/me", response_model=UserRead)
async def me(user: User = Depends(get_current_user)):
    return user
