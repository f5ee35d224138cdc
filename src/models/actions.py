"""
Engine actions - every state mutation is one of these.

AnimationEngine.dispatch() applies them one at a time, so each action
observes a consistent pre-state and leaves a consistent post-state.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from models.enums import ActionType


@dataclass(frozen=True)
class SetFrameData:
    """Overwrite one frame (bulk load); bypasses undo"""
    type: ClassVar[ActionType] = ActionType.SET_FRAME_DATA
    index: int
    snapshot: str


@dataclass(frozen=True)
class SetActiveFrame:
    """Select a frame; resets the undo ledger to it"""
    type: ClassVar[ActionType] = ActionType.SET_ACTIVE_FRAME
    index: int


@dataclass(frozen=True)
class SetPlaying:
    type: ClassVar[ActionType] = ActionType.SET_PLAYING
    is_playing: bool


@dataclass(frozen=True)
class SetPendingFrameCount:
    type: ClassVar[ActionType] = ActionType.SET_PENDING_FRAME_COUNT
    count: int


@dataclass(frozen=True)
class ApplyFrameCount:
    """Commit the pending frame count (stops playback)"""
    type: ClassVar[ActionType] = ActionType.APPLY_FRAME_COUNT


@dataclass(frozen=True)
class SetFps:
    type: ClassVar[ActionType] = ActionType.SET_FPS
    fps: float


@dataclass(frozen=True)
class SaveDrawingState:
    """Commit one drawing gesture to the active frame (pointer-up)"""
    type: ClassVar[ActionType] = ActionType.SAVE_DRAWING_STATE
    snapshot: str


@dataclass(frozen=True)
class Undo:
    type: ClassVar[ActionType] = ActionType.UNDO


@dataclass(frozen=True)
class ToggleKeyframe:
    type: ClassVar[ActionType] = ActionType.TOGGLE_KEYFRAME
    index: int


Action = Union[
    SetFrameData,
    SetActiveFrame,
    SetPlaying,
    SetPendingFrameCount,
    ApplyFrameCount,
    SetFps,
    SaveDrawingState,
    Undo,
    ToggleKeyframe,
]
