from dataclasses import dataclass
from typing import List, Optional

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import KeyboardSource


@dataclass(init=False)
class KeyboardKeyPressEvent(Event[KeyboardSource]):
    """
    Key press forwarded by a frontend

    key: pressed key ('z', 'Enter', ...)
    modifiers: held modifiers, lowercase ('ctrl', 'meta', 'shift', 'alt')
    """
    key: str
    modifiers: List[str]

    def __init__(self, key: str, modifiers: Optional[List[str]] = None, source: KeyboardSource = KeyboardSource.API):
        super().__init__(type=EventType.KEYBOARD_KEYPRESS, source=source)
        self.key = key
        self.modifiers = [m.lower() for m in (modifiers or [])]
