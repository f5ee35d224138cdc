"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from managers.config_manager import ConfigManager
from services.animation_service import AnimationService
from services.event_bus import EventBus
from services.keyboard_shortcuts import KeyboardShortcutHandler


@dataclass
class ServiceContainer:
    """
    Everything the API layer and shutdown handlers need, built once at startup.

    - animation_service: the editing session (engine, playback, export)
    - event_bus: pub-sub routing for editor events
    - keyboard: shortcut handler subscribed to KEYBOARD_KEYPRESS
    - config_manager: loaded configuration

    Usage:
        services = ServiceContainer(
            animation_service=animation_service,
            event_bus=event_bus,
            keyboard=KeyboardShortcutHandler(animation_service, event_bus),
            config_manager=config_manager,
        )
        set_service_container(services)
    """

    animation_service: AnimationService
    event_bus: EventBus
    keyboard: KeyboardShortcutHandler
    config_manager: ConfigManager
