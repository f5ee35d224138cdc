"""Services layer"""

from .animation_service import AnimationService
from .event_bus import EventBus
from .keyboard_shortcuts import KeyboardShortcutHandler
from .service_container import ServiceContainer

__all__ = [
    "AnimationService",
    "EventBus",
    "KeyboardShortcutHandler",
    "ServiceContainer",
]
