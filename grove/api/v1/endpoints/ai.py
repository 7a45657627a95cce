"""AI coach endpoints."""

from fastapi import APIRouter, Depends

from grove.api.deps import get_coach_service, get_current_user
from grove.models.user import User
from grove.schemas.ai import (
    AnswerResponse,
    AskRequest,
    ChatRequest,
    ChatResponse,
    GenerateWorkoutRequest,
    GenerateWorkoutResponse,
    MessageResponse,
    PersonalityRequest,
    ProgressAnalysis,
    StarterWorkoutResponse,
)
from grove.services.ai import CoachService

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    payload: ChatRequest,
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return await service.chat(user, payload.message)


@router.post("/generate-workout", response_model=GenerateWorkoutResponse)
async def generate_workout(
    payload: GenerateWorkoutRequest,
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    """
    Generate a workout from a free-text prompt. With save_to_library the exercises
    and workout are stored; a malformed model reply comes back with raw_response.
    """
    return await service.generate_workout(user, payload.prompt, payload.save_to_library)


@router.get("/starter-workout", response_model=StarterWorkoutResponse)
async def starter_workout(
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return await service.starter_workout(user)


@router.get("/analyze-progress", response_model=ProgressAnalysis)
async def analyze_progress(
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return await service.analyze_progress(user)


@router.post("/ask", response_model=AnswerResponse)
async def ask(
    payload: AskRequest,
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    return AnswerResponse(answer=await service.ask(user, payload.question))


@router.put("/personality", response_model=MessageResponse)
async def change_personality(
    payload: PersonalityRequest,
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    personality = await service.change_personality(user, payload.personality)
    return MessageResponse(message="Personality updated", personality=personality)


@router.delete("/history", response_model=MessageResponse)
async def clear_history(
    user: User = Depends(get_current_user),
    service: CoachService = Depends(get_coach_service),
):
    await service.clear_history(user)
    return MessageResponse(message="Conversation history cleared")
