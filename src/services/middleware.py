"""
Middleware for EventBus

Pipeline functions that see every event before handlers do.
"""

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

# High-frequency events logged at DEBUG only
_QUIET_EVENTS = {EventType.FRAME_CHANGED}


def log_middleware(event: Event) -> Event:
    """
    Log all events

    Usage:
        event_bus.add_middleware(log_middleware)
    """
    source_str = event.source.name if event.source is not None else "-"
    message = f"Event: {event.type.name} from {source_str} | {event.to_data()}"

    if event.type in _QUIET_EVENTS:
        log.debug(message)
    else:
        log.info(message)
    return event
