from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class ExportStartedEvent(Event[EventSource]):
    frame_count: int
    fps: float

    def __init__(self, frame_count: int, fps: float):
        super().__init__(type=EventType.EXPORT_STARTED, source=EventSource.EXPORT)
        self.frame_count = frame_count
        self.fps = fps


@dataclass(init=False)
class ExportFinishedEvent(Event[EventSource]):
    frame_count: int
    size_bytes: int

    def __init__(self, frame_count: int, size_bytes: int):
        super().__init__(type=EventType.EXPORT_FINISHED, source=EventSource.EXPORT)
        self.frame_count = frame_count
        self.size_bytes = size_bytes


@dataclass(init=False)
class ExportFailedEvent(Event[EventSource]):
    """error: exception class name (NothingToExportError, EncoderError, ...)"""
    error: str
    message: str

    def __init__(self, error: BaseException):
        super().__init__(type=EventType.EXPORT_FAILED, source=EventSource.EXPORT)
        self.error = type(error).__name__
        self.message = str(error)
