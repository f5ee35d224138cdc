"""
UndoLedger - bounded, frame-scoped snapshot history.

The ledger tracks exactly one frame. It is reset whenever the active frame
changes, so history never crosses a frame boundary.
"""

from collections import deque
from typing import Deque, Optional

from models.domain import UndoState
from models.enums import LogCategory
from models.snapshot import BLANK_SNAPSHOT, is_blank
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.UNDO)

MAX_UNDO_STATES = 3


class UndoLedger:
    """
    Stack of up to `max_states` snapshots for `frame_index`.

    The ledger does not write frames itself: save() and undo() tell the
    caller what the active frame's content should become.
    """

    def __init__(self, max_states: int = MAX_UNDO_STATES):
        if max_states < 1:
            raise ValueError(f"max_states must be >= 1, got {max_states}")
        self.max_states = max_states
        self.frame_index = -1
        # deque(maxlen) evicts the oldest entry on overflow
        self._states: Deque[str] = deque(maxlen=max_states)

    def __len__(self) -> int:
        return len(self._states)

    @property
    def can_undo(self) -> bool:
        return len(self._states) > 0

    def reset(self, frame_index: int, snapshot: str) -> None:
        """Track a new frame: [snapshot], or empty if the frame is blank"""
        self.frame_index = frame_index
        self._states.clear()
        if not is_blank(snapshot):
            self._states.append(snapshot)
        log.debug("Undo ledger reset", frame=frame_index, depth=len(self._states))

    def save(self, snapshot: str) -> None:
        """Record one committed drawing gesture"""
        self._states.append(snapshot)

    def undo(self) -> Optional[str]:
        """
        Drop the most recent state.

        Returns:
            New content for the tracked frame (previous state, or blank when
            history is exhausted), or None if there was nothing to undo.
        """
        if not self._states:
            return None
        self._states.pop()
        restored = self._states[-1] if self._states else BLANK_SNAPSHOT
        log.debug("Undo applied", frame=self.frame_index, depth=len(self._states))
        return restored

    def state(self) -> UndoState:
        return UndoState(frame_index=self.frame_index, states=tuple(self._states))
