"""
Keyboard shortcuts

Ctrl+Z / Cmd+Z (without Shift) undoes the last gesture on the active frame.
Shortcuts are ignored while playing.
"""

from models.events import EventType, KeyboardKeyPressEvent
from services.animation_service import AnimationService
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GENERAL)


class KeyboardShortcutHandler:

    def __init__(self, animation_service: AnimationService, event_bus: EventBus):
        self.animation_service = animation_service
        self.event_bus = event_bus
        event_bus.subscribe(EventType.KEYBOARD_KEYPRESS, self.handle_keypress, priority=10)

    @staticmethod
    def is_undo(event: KeyboardKeyPressEvent) -> bool:
        modifiers = set(event.modifiers)
        return (
            event.key.lower() == "z"
            and bool(modifiers & {"ctrl", "meta"})
            and "shift" not in modifiers
        )

    async def handle_keypress(self, event: KeyboardKeyPressEvent) -> None:
        if self.animation_service.is_playing:
            return

        if self.is_undo(event):
            applied = await self.animation_service.undo()
            log.debug("Undo shortcut", applied=applied)
