from __future__ import annotations

from enum import Enum
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, TypeVar

from models.events.types import EventType


TSource = TypeVar("TSource", bound=Enum)

@dataclass(init=False)
class Event(Generic[TSource]):
    """
    Base event class.

    - type: EventType
    - source: EventSource / KeyboardSource
    - timestamp: auto
    """

    type: EventType
    source: TSource | None
    timestamp: float = field(default_factory=time.time)

    def __init__(self, *, type: EventType, source: TSource | None):
        self.type = type
        self.source = source
        self.timestamp = time.time()

    def to_data(self) -> Dict[str, Any]:
        """Event payload without metadata (type, source, timestamp)"""
        return {
            k: v for k, v in self.__dict__.items()
            if k not in ("type", "source", "timestamp")
        }
