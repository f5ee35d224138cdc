"""
Event Bus - publish/subscribe routing for editor events

- Publishers: await bus.publish(event)
- Subscribers: bus.subscribe(event_type, handler, priority, filter_fn)
- Middleware: bus.add_middleware(fn) runs before any handler
"""

import asyncio
from typing import Callable, List, Dict, Optional
from dataclasses import dataclass
from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)


@dataclass
class EventHandler:
    """Event handler registration"""
    handler: Callable[[Event], None]
    priority: int
    filter_fn: Optional[Callable[[Event], bool]]


class EventBus:
    """
    Central event bus

    - Handlers run highest priority first
    - filter_fn skips a handler for events it does not care about
    - Middleware can rewrite an event or drop it (return None)
    - Sync and async handlers are both accepted
    - A failing handler is logged and the remaining handlers still run

    Example:
        bus = EventBus()
        bus.subscribe(
            EventType.FRAME_CHANGED,
            on_frame_changed,
            priority=10,
            filter_fn=lambda e: e.source == EventSource.PLAYBACK
        )
        await bus.publish(FrameChangedEvent(frame=3, previous=2))
    """

    def __init__(self, history_limit: int = 100):
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        self._middleware: List[Callable[[Event], Optional[Event]]] = []

        # Recent events, oldest first
        self._event_history: List[Event] = []
        self._history_limit = history_limit

    def subscribe(
        self,
        event_type: EventType,
        handler: Callable[[Event], None],
        priority: int = 0,
        filter_fn: Optional[Callable[[Event], bool]] = None
    ) -> None:
        """
        Subscribe to an event type

        Args:
            event_type: Which events to listen for
            handler: Sync or async callable taking the event
            priority: Higher runs first (default 0)
            filter_fn: Return False to skip this handler for an event
        """
        entries = self._handlers.setdefault(event_type, [])
        entries.append(EventHandler(handler, priority, filter_fn))
        entries.sort(key=lambda h: h.priority, reverse=True)

        log.debug(
            "Event handler subscribed",
            event_type=event_type.name,
            handler=getattr(handler, "__name__", repr(handler)),
            priority=priority
        )

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> bool:
        """Remove a handler. Returns False if it was not subscribed."""
        entries = self._handlers.get(event_type, [])
        remaining = [h for h in entries if h.handler != handler]
        if len(remaining) == len(entries):
            return False
        self._handlers[event_type] = remaining
        return True

    def subscriber_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, []))

    def add_middleware(self, middleware: Callable[[Event], Optional[Event]]) -> None:
        """
        Add a middleware function (runs in registration order)

        Middleware returns the (possibly modified) event, or None to block it.
        """
        self._middleware.append(middleware)
        log.debug("Middleware registered", middleware=middleware.__name__)

    async def publish(self, event: Event) -> None:
        """
        Publish an event

        Middleware first, then history, then handlers by priority.
        Handler exceptions are logged and do not reach the publisher.
        """
        for middleware in self._middleware:
            processed = middleware(event)
            if processed is None:
                return
            event = processed

        self._event_history.append(event)
        if len(self._event_history) > self._history_limit:
            self._event_history.pop(0)

        handlers = self._handlers.get(event.type, [])
        if not handlers:
            log.debug("No handlers for event", event_type=event.type.name)
            return

        for entry in list(handlers):
            if entry.filter_fn and not entry.filter_fn(event):
                continue

            try:
                if asyncio.iscoroutinefunction(entry.handler):
                    await entry.handler(event)
                else:
                    entry.handler(event)
            except Exception as e:
                log.error(
                    f"Event handler failed: {getattr(entry.handler, '__name__', entry.handler)} for {event.type.name}",
                    error=type(e).__name__,
                    reason=str(e)
                )

    def get_event_history(self, limit: int = 10, event_type: Optional[EventType] = None) -> List[Event]:
        """Most recent events (newest last), optionally of one type"""
        events = self._event_history
        if event_type is not None:
            events = [e for e in events if e.type == event_type]
        return events[-limit:]

    def clear_history(self) -> None:
        self._event_history.clear()
