"""
AnimationEngine - one editing session's state and its single dispatch point.

Every mutation (user edits, navigation, playback advances, resizes) is an
Action applied by dispatch(). Dispatch is synchronous and never awaits, so
on a single event loop no two mutations interleave.
"""

from typing import Callable, Dict

from engine.errors import FrameIndexError, InvalidFpsError
from engine.frame_store import FrameStore
from engine.undo_ledger import MAX_UNDO_STATES, UndoLedger
from models.actions import (
    Action,
    ApplyFrameCount,
    SaveDrawingState,
    SetActiveFrame,
    SetFps,
    SetFrameData,
    SetPendingFrameCount,
    SetPlaying,
    ToggleKeyframe,
    Undo,
)
from models.domain import AnimationState
from models.enums import ActionType, LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.FRAMES)

DEFAULT_NUM_FRAMES = 12
DEFAULT_FPS = 12


class AnimationEngine:
    """
    Owns FrameStore, UndoLedger and playback state for one session.

    Consumers read through state(), which returns an immutable copy.
    """

    def __init__(
        self,
        num_frames: int = DEFAULT_NUM_FRAMES,
        fps: float = DEFAULT_FPS,
        max_undo_states: int = MAX_UNDO_STATES,
    ):
        if fps <= 0:
            raise InvalidFpsError(fps)

        self.store = FrameStore(num_frames)
        self.undo_ledger = UndoLedger(max_undo_states)
        self.undo_ledger.reset(self.store.active_frame, self.store.active_snapshot)
        self.is_playing = False
        self.fps = fps

        self._handlers: Dict[ActionType, Callable] = {
            ActionType.SET_FRAME_DATA: self._set_frame_data,
            ActionType.SET_ACTIVE_FRAME: self._set_active_frame,
            ActionType.SET_PLAYING: self._set_playing,
            ActionType.SET_PENDING_FRAME_COUNT: self._set_pending_frame_count,
            ActionType.APPLY_FRAME_COUNT: self._apply_frame_count,
            ActionType.SET_FPS: self._set_fps,
            ActionType.SAVE_DRAWING_STATE: self._save_drawing_state,
            ActionType.UNDO: self._undo,
            ActionType.TOGGLE_KEYFRAME: self._toggle_keyframe,
        }

        log.info("AnimationEngine initialized", num_frames=num_frames, fps=fps, undo_depth=max_undo_states)

    # === Dispatch ===

    def dispatch(self, action: Action) -> AnimationState:
        """Apply one action and return the resulting state"""
        handler = self._handlers.get(action.type)
        if handler is None:
            raise ValueError(f"Unknown action: {action!r}")
        handler(action)
        return self.state()

    # === Read access ===

    @property
    def active_frame(self) -> int:
        return self.store.active_frame

    @property
    def num_frames(self) -> int:
        return self.store.num_frames

    def next_index(self) -> int:
        return (self.store.active_frame + 1) % self.store.num_frames

    def prev_index(self) -> int:
        active = self.store.active_frame
        return self.store.num_frames - 1 if active == 0 else active - 1

    def state(self, is_exporting: bool = False) -> AnimationState:
        return AnimationState(
            frames=self.store.frames,
            active_frame=self.store.active_frame,
            is_playing=self.is_playing,
            num_frames=self.store.num_frames,
            pending_frame_count=self.store.pending_frame_count,
            fps=self.fps,
            keyframes=self.store.keyframes,
            undo=self.undo_ledger.state(),
            is_exporting=is_exporting,
        )

    # === Action handlers ===

    def _set_frame_data(self, action: SetFrameData) -> None:
        self.store.set_frame_data(action.index, action.snapshot)

    def _set_active_frame(self, action: SetActiveFrame) -> None:
        self.store.set_active_frame(action.index)
        self.undo_ledger.reset(action.index, self.store.active_snapshot)

    def _set_playing(self, action: SetPlaying) -> None:
        self.is_playing = bool(action.is_playing)

    def _set_pending_frame_count(self, action: SetPendingFrameCount) -> None:
        self.store.set_pending_frame_count(action.count)

    def _apply_frame_count(self, action: ApplyFrameCount) -> None:
        previous_active = self.store.active_frame
        self.is_playing = False
        self.store.apply_pending_frame_count()

        # Clamped onto another frame: history must not follow
        if self.store.active_frame != previous_active:
            self.undo_ledger.reset(self.store.active_frame, self.store.active_snapshot)

    def _set_fps(self, action: SetFps) -> None:
        if action.fps <= 0:
            raise InvalidFpsError(action.fps)
        self.fps = action.fps

    def _save_drawing_state(self, action: SaveDrawingState) -> None:
        self.store.set_active_snapshot(action.snapshot)
        self.undo_ledger.save(action.snapshot)

    def _undo(self, action: Undo) -> None:
        restored = self.undo_ledger.undo()
        if restored is not None:
            self.store.set_active_snapshot(restored)

    def _toggle_keyframe(self, action: ToggleKeyframe) -> None:
        if not self.store.in_range(action.index):
            raise FrameIndexError(action.index, self.store.num_frames)
        self.store.toggle_keyframe(action.index)
