"""
Animation domain models

Read-only views of the engine state handed to consumers (API, UI, tests).
The engine owns the mutable FrameStore/UndoLedger; these are copies.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Tuple

from models.enums import PlaybackStatus
from models.snapshot import is_blank


@dataclass(frozen=True)
class UndoState:
    """Bounded history of snapshots for a single frame"""
    frame_index: int = -1
    states: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnimationState:
    """Immutable snapshot of an editing session"""
    frames: Tuple[str, ...]
    active_frame: int
    is_playing: bool
    num_frames: int
    pending_frame_count: int
    fps: float
    keyframes: FrozenSet[int] = field(default_factory=frozenset)
    undo: UndoState = field(default_factory=UndoState)
    is_exporting: bool = False

    @property
    def can_undo(self) -> bool:
        return len(self.undo.states) > 0

    @property
    def status(self) -> PlaybackStatus:
        return PlaybackStatus.PLAYING if self.is_playing else PlaybackStatus.STOPPED

    @property
    def is_empty(self) -> bool:
        """True when every frame is blank (nothing to export)"""
        return all(is_blank(frame) for frame in self.frames)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active_frame": self.active_frame,
            "is_playing": self.is_playing,
            "status": self.status.name,
            "num_frames": self.num_frames,
            "pending_frame_count": self.pending_frame_count,
            "fps": self.fps,
            "keyframes": sorted(i for i in self.keyframes if i < self.num_frames),
            "can_undo": self.can_undo,
            "is_exporting": self.is_exporting,
            "is_empty": self.is_empty,
            "blank_frames": [i for i, frame in enumerate(self.frames) if is_blank(frame)],
        }
