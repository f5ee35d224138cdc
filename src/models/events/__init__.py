"""
Event system for FlipFrame

Engine state changes are published on the EventBus so presentation layers
(API clients, keyboard shortcuts) stay decoupled from AnimationService.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource, KeyboardSource

# Input events
from models.events.input_events import KeyboardKeyPressEvent

# Frame store / undo events
from models.events.frame_events import (
    FrameChangedEvent,
    DrawingSavedEvent,
    UndoAppliedEvent,
    KeyframeToggledEvent,
    FrameCountAppliedEvent,
)

# Playback events
from models.events.playback_events import (
    PlaybackStartedEvent,
    PlaybackStoppedEvent,
    FpsChangedEvent,
)

# Export events
from models.events.export_events import (
    ExportStartedEvent,
    ExportFinishedEvent,
    ExportFailedEvent,
)

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",
    "KeyboardSource",

    # Input
    "KeyboardKeyPressEvent",

    # Frames
    "FrameChangedEvent",
    "DrawingSavedEvent",
    "UndoAppliedEvent",
    "KeyframeToggledEvent",
    "FrameCountAppliedEvent",

    # Playback
    "PlaybackStartedEvent",
    "PlaybackStoppedEvent",
    "FpsChangedEvent",

    # Export
    "ExportStartedEvent",
    "ExportFinishedEvent",
    "ExportFailedEvent",
]
