"""
Frame Endpoints - frame content, navigation, drawing, undo, keyframes, resize

Navigation, undo and keyframe toggles return 409 PLAYBACK_ACTIVE while
playing. Out-of-range indices return 422 FRAME_INDEX_OUT_OF_RANGE.
"""

from fastapi import APIRouter, Depends, Response

from api.dependencies import get_animation_service
from api.schemas.frames import (
    DrawingRequest,
    FrameCountRequest,
    FrameDataRequest,
    FrameListResponse,
    FrameResponse,
    FramesLoadRequest,
    FramesLoadResponse,
    KeyframeToggleResponse,
    OverlayListResponse,
    OverlayResponse,
    SelectFrameRequest,
    UndoResponse,
)
from api.schemas.session import SessionResponse
from engine.errors import FrameIndexError
from models.domain import AnimationState
from models.enums import LogCategory
from models.snapshot import is_blank
from services.animation_service import AnimationService
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/frames", tags=["Frames"])


def _frame(state: AnimationState, index: int) -> FrameResponse:
    snapshot = state.frames[index]
    return FrameResponse(
        index=index,
        snapshot=snapshot,
        is_blank=is_blank(snapshot),
        is_keyframe=index in state.keyframes,
        is_active=index == state.active_frame,
    )


# ============================================================================
# Frame content
# ============================================================================

@router.get("", response_model=FrameListResponse, summary="List all frames")
async def list_frames(service: AnimationService = Depends(get_animation_service)) -> FrameListResponse:
    state = service.get_state()
    return FrameListResponse(
        frames=[_frame(state, i) for i in range(state.num_frames)],
        count=state.num_frames,
    )


@router.get("/overlays", response_model=OverlayListResponse, summary="Reference layers for the active frame")
async def get_overlays(service: AnimationService = Depends(get_animation_service)) -> OverlayListResponse:
    """Onion skin of the previous frames, then recolored keyframes. Empty while playing."""
    return OverlayListResponse(
        overlays=[OverlayResponse(**layer.to_dict()) for layer in service.get_overlays()]
    )


@router.post("/load", response_model=FramesLoadResponse, summary="Bulk load frames from index 0")
async def load_frames(
    request: FramesLoadRequest,
    service: AnimationService = Depends(get_animation_service)
) -> FramesLoadResponse:
    loaded = service.set_frames(request.frames)
    return FramesLoadResponse(
        loaded=loaded,
        ignored=len(request.frames) - loaded,
        session=SessionResponse.from_state(service.get_state()),
    )


# Registered before /{index} so "count" is not parsed as an index
@router.put("/count", response_model=SessionResponse, summary="Propose a frame count")
async def set_frame_count(
    request: FrameCountRequest,
    service: AnimationService = Depends(get_animation_service)
) -> SessionResponse:
    service.set_pending_frame_count(request.count)
    return SessionResponse.from_state(service.get_state())


@router.get("/{index}", response_model=FrameResponse, summary="Get one frame")
async def get_frame(index: int, service: AnimationService = Depends(get_animation_service)) -> FrameResponse:
    state = service.get_state()
    if not 0 <= index < state.num_frames:
        raise FrameIndexError(index, state.num_frames)
    return _frame(state, index)


@router.get(
    "/{index}/image",
    summary="Rasterized frame (PNG)",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
async def get_frame_image(index: int, service: AnimationService = Depends(get_animation_service)) -> Response:
    return Response(content=service.render_frame_png(index), media_type="image/png")


@router.put("/{index}", response_model=FrameResponse, summary="Overwrite one frame (bypasses undo)")
async def put_frame(
    index: int,
    request: FrameDataRequest,
    service: AnimationService = Depends(get_animation_service)
) -> FrameResponse:
    if not service.set_frame_data(index, request.snapshot):
        raise FrameIndexError(index, service.get_state().num_frames)
    return _frame(service.get_state(), index)


# ============================================================================
# Navigation
# ============================================================================

@router.post("/active", response_model=SessionResponse, summary="Select the active frame")
async def select_frame(
    request: SelectFrameRequest,
    service: AnimationService = Depends(get_animation_service)
) -> SessionResponse:
    await service.set_active_frame(request.index)
    return SessionResponse.from_state(service.get_state())


@router.post("/next", response_model=SessionResponse, summary="Next frame (wraps to 0)")
async def next_frame(service: AnimationService = Depends(get_animation_service)) -> SessionResponse:
    await service.next_frame()
    return SessionResponse.from_state(service.get_state())


@router.post("/prev", response_model=SessionResponse, summary="Previous frame (wraps to last)")
async def prev_frame(service: AnimationService = Depends(get_animation_service)) -> SessionResponse:
    await service.prev_frame()
    return SessionResponse.from_state(service.get_state())


# ============================================================================
# Drawing & undo
# ============================================================================

@router.post("/drawing", response_model=SessionResponse, summary="Commit a drawing gesture to the active frame")
async def save_drawing(
    request: DrawingRequest,
    service: AnimationService = Depends(get_animation_service)
) -> SessionResponse:
    await service.save_drawing_state(request.snapshot)
    return SessionResponse.from_state(service.get_state())


@router.post("/undo", response_model=UndoResponse, summary="Undo the last gesture on the active frame")
async def undo(service: AnimationService = Depends(get_animation_service)) -> UndoResponse:
    applied = await service.undo()
    return UndoResponse(applied=applied, session=SessionResponse.from_state(service.get_state()))


# ============================================================================
# Keyframes & frame count
# ============================================================================

@router.post("/{index}/keyframe", response_model=KeyframeToggleResponse, summary="Toggle keyframe marker")
async def toggle_keyframe(
    index: int,
    service: AnimationService = Depends(get_animation_service)
) -> KeyframeToggleResponse:
    is_keyframe = await service.toggle_keyframe(index)
    return KeyframeToggleResponse(
        index=index,
        is_keyframe=is_keyframe,
        keyframes=service.get_state().to_dict()["keyframes"],
    )


@router.post("/count/apply", response_model=SessionResponse, summary="Apply the proposed frame count")
async def apply_frame_count(service: AnimationService = Depends(get_animation_service)) -> SessionResponse:
    """Grows with blank frames or truncates the tail. Stops playback."""
    await service.apply_frame_count()
    return SessionResponse.from_state(service.get_state())
