"""
Frame schemas - frame content, navigation, undo, keyframes and overlays
"""

from pydantic import BaseModel, Field
from typing import List, Literal

from api.schemas.session import SessionResponse


class FrameResponse(BaseModel):
    index: int
    snapshot: str = Field(description="Drawing save data; empty string = blank frame")
    is_blank: bool
    is_keyframe: bool
    is_active: bool


class FrameListResponse(BaseModel):
    frames: List[FrameResponse]
    count: int


class FrameDataRequest(BaseModel):
    """Overwrite one frame (bypasses undo)"""
    snapshot: str = Field("", description="Drawing save data; empty string clears the frame")


class FramesLoadRequest(BaseModel):
    """Bulk load starting at frame 0; entries past the last frame are ignored"""
    frames: List[str]


class FramesLoadResponse(BaseModel):
    loaded: int
    ignored: int
    session: SessionResponse


class SelectFrameRequest(BaseModel):
    index: int = Field(ge=0)


class DrawingRequest(BaseModel):
    """One committed drawing gesture (pointer-up)"""
    snapshot: str


class UndoResponse(BaseModel):
    applied: bool = Field(description="False when there was no history")
    session: SessionResponse


class KeyframeToggleResponse(BaseModel):
    index: int
    is_keyframe: bool
    keyframes: List[int]


class FrameCountRequest(BaseModel):
    """Clamped to the configured range (default 1..120)"""
    count: int = Field(ge=1)


class OverlayResponse(BaseModel):
    index: int
    snapshot: str
    opacity: float = Field(ge=0, le=1)
    kind: Literal["NEARBY", "KEYFRAME"]


class OverlayListResponse(BaseModel):
    """Layers in render order; empty while playing"""
    overlays: List[OverlayResponse]
