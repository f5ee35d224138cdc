"""
Session Endpoints - editing session state and key input
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.schemas.session import KeyPressRequest, KeyPressResponse, SessionResponse
from models.events import KeyboardKeyPressEvent
from services.service_container import ServiceContainer

router = APIRouter(tags=["Session"])


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Get session state",
    description="Active frame, frame count, playback status, fps, keyframes and undo availability"
)
async def get_session(services: ServiceContainer = Depends(get_service_container)) -> SessionResponse:
    return SessionResponse.from_state(services.animation_service.get_state())


@router.post(
    "/keyboard",
    response_model=KeyPressResponse,
    summary="Forward a key press",
    description="Published on the event bus; Ctrl/Cmd+Z (without Shift) triggers undo when not playing"
)
async def key_press(
    request: KeyPressRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> KeyPressResponse:
    event = KeyboardKeyPressEvent(key=request.key, modifiers=list(request.modifiers))
    await services.event_bus.publish(event)
    return KeyPressResponse(
        accepted=not services.animation_service.is_playing,
        session=SessionResponse.from_state(services.animation_service.get_state()),
    )
