from enum import Enum, auto


class EventType(Enum):
    # Input
    KEYBOARD_KEYPRESS = auto()

    # Frame store / undo
    FRAME_CHANGED = auto()
    DRAWING_SAVED = auto()
    UNDO_APPLIED = auto()
    KEYFRAME_TOGGLED = auto()
    FRAME_COUNT_APPLIED = auto()

    # Playback
    PLAYBACK_STARTED = auto()
    PLAYBACK_STOPPED = auto()
    FPS_CHANGED = auto()

    # Export
    EXPORT_STARTED = auto()
    EXPORT_FINISHED = auto()
    EXPORT_FAILED = auto()
