from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class PlaybackStartedEvent(Event[EventSource]):
    fps: float
    frame: int

    def __init__(self, fps: float, frame: int):
        super().__init__(type=EventType.PLAYBACK_STARTED, source=EventSource.PLAYBACK)
        self.fps = fps
        self.frame = frame


@dataclass(init=False)
class PlaybackStoppedEvent(Event[EventSource]):
    """reason: 'stopped' (explicit) or 'frame_count_applied'"""
    frame: int
    reason: str

    def __init__(self, frame: int, reason: str = "stopped"):
        super().__init__(type=EventType.PLAYBACK_STOPPED, source=EventSource.PLAYBACK)
        self.frame = frame
        self.reason = reason


@dataclass(init=False)
class FpsChangedEvent(Event[EventSource]):
    fps: float

    def __init__(self, fps: float):
        super().__init__(type=EventType.FPS_CHANGED, source=EventSource.ANIMATION_SERVICE)
        self.fps = fps
