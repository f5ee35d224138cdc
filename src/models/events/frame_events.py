from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class FrameChangedEvent(Event[EventSource]):
    """Active frame changed (navigation, resize clamp or playback advance)"""
    frame: int
    previous: int

    def __init__(self, frame: int, previous: int, source: EventSource = EventSource.ANIMATION_SERVICE):
        super().__init__(type=EventType.FRAME_CHANGED, source=source)
        self.frame = frame
        self.previous = previous


@dataclass(init=False)
class DrawingSavedEvent(Event[EventSource]):
    """A drawing gesture was committed to the active frame"""
    frame: int
    undo_depth: int

    def __init__(self, frame: int, undo_depth: int):
        super().__init__(type=EventType.DRAWING_SAVED, source=EventSource.ANIMATION_SERVICE)
        self.frame = frame
        self.undo_depth = undo_depth


@dataclass(init=False)
class UndoAppliedEvent(Event[EventSource]):
    frame: int
    undo_depth: int

    def __init__(self, frame: int, undo_depth: int):
        super().__init__(type=EventType.UNDO_APPLIED, source=EventSource.ANIMATION_SERVICE)
        self.frame = frame
        self.undo_depth = undo_depth


@dataclass(init=False)
class KeyframeToggledEvent(Event[EventSource]):
    frame: int
    is_keyframe: bool

    def __init__(self, frame: int, is_keyframe: bool):
        super().__init__(type=EventType.KEYFRAME_TOGGLED, source=EventSource.ANIMATION_SERVICE)
        self.frame = frame
        self.is_keyframe = is_keyframe


@dataclass(init=False)
class FrameCountAppliedEvent(Event[EventSource]):
    num_frames: int
    active_frame: int

    def __init__(self, num_frames: int, active_frame: int):
        super().__init__(type=EventType.FRAME_COUNT_APPLIED, source=EventSource.ANIMATION_SERVICE)
        self.num_frames = num_frames
        self.active_frame = active_frame
