"""
Enums for the FlipFrame animation engine
"""

from enum import Enum, auto


class PlaybackStatus(Enum):
    """
    Playback scheduler states

    STOPPED: No timed advance; overlays visible, navigation allowed
    PLAYING: Active frame advances at the configured fps
    """
    STOPPED = auto()
    PLAYING = auto()


class OverlayKind(Enum):
    """Reference layer types produced by the overlay compositor"""
    NEARBY = auto()     # Onion skin of the previous frames (fading with distance)
    KEYFRAME = auto()   # Recolored keyframe highlight (fixed opacity)


class ActionType(Enum):
    """Mutation types accepted by AnimationEngine.dispatch()"""
    SET_FRAME_DATA = auto()
    SET_ACTIVE_FRAME = auto()
    SET_PLAYING = auto()
    SET_PENDING_FRAME_COUNT = auto()
    APPLY_FRAME_COUNT = auto()
    SET_FPS = auto()
    SAVE_DRAWING_STATE = auto()
    UNDO = auto()
    TOGGLE_KEYFRAME = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    FRAMES = auto()      # Frame store edits, navigation, resize
    UNDO = auto()        # Undo ledger pushes, pops, resets
    PLAYBACK = auto()    # Playback loop start/stop/advance
    EXPORT = auto()      # Export pipeline and encoder
    CODEC = auto()       # Snapshot parsing and rasterization
    EVENT = auto()       # Event bus events and handling
    SYSTEM = auto()      # Startup, shutdown, errors

    API = auto()

    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
