"""
Playback Endpoints - play/pause and frame rate
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_animation_service
from api.schemas.playback import FpsRequest
from api.schemas.session import SessionResponse
from services.animation_service import AnimationService

router = APIRouter(prefix="/playback", tags=["Playback"])


@router.post("/play", response_model=SessionResponse, summary="Start looping playback")
async def play(service: AnimationService = Depends(get_animation_service)) -> SessionResponse:
    await service.set_playing(True)
    return SessionResponse.from_state(service.get_state())


@router.post("/pause", response_model=SessionResponse, summary="Stop playback on the current frame")
async def pause(service: AnimationService = Depends(get_animation_service)) -> SessionResponse:
    await service.set_playing(False)
    return SessionResponse.from_state(service.get_state())


@router.post("/toggle", response_model=SessionResponse, summary="Toggle playback")
async def toggle(service: AnimationService = Depends(get_animation_service)) -> SessionResponse:
    await service.toggle_playback()
    return SessionResponse.from_state(service.get_state())


@router.put(
    "/fps",
    response_model=SessionResponse,
    summary="Set frame rate",
    description="Takes effect on the next advance; does not restart playback"
)
async def set_fps(
    request: FpsRequest,
    service: AnimationService = Depends(get_animation_service)
) -> SessionResponse:
    await service.set_fps(request.fps)
    return SessionResponse.from_state(service.get_state())
