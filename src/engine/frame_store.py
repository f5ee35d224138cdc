"""
FrameStore - ordered per-frame snapshots plus the keyframe marker set.

Invariants:
  - len(frames) == num_frames at all times
  - 0 <= active_frame < num_frames
  - num_frames only changes in apply_pending_frame_count()

Keyframe indices are never renumbered; indices beyond the current length are
kept in the set but ignored by every reader (see live_keyframes()).
"""

from typing import FrozenSet, List, Set, Tuple

from engine.errors import FrameCountError, FrameIndexError
from models.enums import LogCategory
from models.snapshot import BLANK_SNAPSHOT, is_blank
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.FRAMES)


class FrameStore:
    """Single source of truth for frame content. Owned by AnimationEngine."""

    def __init__(self, num_frames: int = 12):
        if num_frames < 1:
            raise FrameCountError(num_frames)
        self._frames: List[str] = [BLANK_SNAPSHOT] * num_frames
        self._keyframes: Set[int] = set()
        self.active_frame = 0
        self.pending_frame_count = num_frames

    # === Read access ===

    @property
    def num_frames(self) -> int:
        return len(self._frames)

    @property
    def frames(self) -> Tuple[str, ...]:
        return tuple(self._frames)

    @property
    def keyframes(self) -> FrozenSet[int]:
        return frozenset(self._keyframes)

    def live_keyframes(self) -> List[int]:
        """Keyframe indices that still address an existing frame, ascending"""
        return sorted(i for i in self._keyframes if i < len(self._frames))

    def get(self, index: int) -> str:
        self._check_index(index)
        return self._frames[index]

    @property
    def active_snapshot(self) -> str:
        return self._frames[self.active_frame]

    def in_range(self, index: int) -> bool:
        return 0 <= index < len(self._frames)

    def is_keyframe(self, index: int) -> bool:
        return index in self._keyframes

    # === Mutation ===

    def set_frame_data(self, index: int, snapshot: str) -> bool:
        """Overwrite one frame. Out-of-range index is a silent no-op."""
        if not self.in_range(index):
            log.debug("Ignoring frame data for missing frame", index=index, num_frames=self.num_frames)
            return False
        self._frames[index] = snapshot or BLANK_SNAPSHOT
        return True

    def set_active_snapshot(self, snapshot: str) -> None:
        self._frames[self.active_frame] = snapshot or BLANK_SNAPSHOT

    def set_active_frame(self, index: int) -> None:
        """Select a frame; out-of-range input raises FrameIndexError (no wrap)"""
        self._check_index(index)
        self.active_frame = index

    def set_pending_frame_count(self, count: int) -> None:
        """Propose a new frame count; the store is not resized until applied"""
        if count < 1:
            raise FrameCountError(count)
        self.pending_frame_count = count

    def apply_pending_frame_count(self) -> None:
        """
        Commit pending_frame_count.

        Grows with blank frames or truncates from the tail, then clamps
        active_frame into range.
        """
        count = self.pending_frame_count
        current = len(self._frames)
        if count > current:
            self._frames.extend([BLANK_SNAPSHOT] * (count - current))
        elif count < current:
            del self._frames[count:]

        self.active_frame = min(self.active_frame, count - 1)

        if count != current:
            log.info("Frame count applied", previous=current, num_frames=count, active_frame=self.active_frame)

    def toggle_keyframe(self, index: int) -> bool:
        """Flip keyframe membership. Returns the new membership."""
        if index in self._keyframes:
            self._keyframes.discard(index)
            return False
        self._keyframes.add(index)
        return True

    # === Helpers ===

    def is_blank(self, index: int) -> bool:
        return is_blank(self.get(index))

    def all_blank(self) -> bool:
        return all(is_blank(frame) for frame in self._frames)

    def non_blank(self) -> List[str]:
        """Non-blank snapshots in store order"""
        return [frame for frame in self._frames if not is_blank(frame)]

    def _check_index(self, index: int) -> None:
        if not self.in_range(index):
            raise FrameIndexError(index, len(self._frames))
