from enum import Enum, auto


class KeyboardSource(Enum):
    API = auto()        # Key presses forwarded by the frontend


class EventSource(Enum):
    """Event source identifiers for application events"""
    ANIMATION_SERVICE = auto()   # Frame, undo and keyframe edits
    PLAYBACK = auto()            # Timed advances from the scheduler
    EXPORT = auto()              # Export pipeline progress
