"""
Shutdown coordinator

Installs SIGINT/SIGTERM handlers, waits for a signal or a failed critical
task, then runs registered shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import List, Optional, Set
from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

# Task categories whose failure brings the application down
CRITICAL_CATEGORIES: Set[str] = {"API", "PLAYBACK"}


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(PlaybackShutdownHandler(animation_service))
        coordinator.register(APIServerShutdownHandler(api_wrapper))
        coordinator.register(TaskCancellationHandler())

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0, poll_interval: float = 0.2):
        self._handlers: List[IShutdownHandler] = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._poll_interval = poll_interval
        self.reason: Optional[str] = None

    def register(self, handler: IShutdownHandler) -> None:
        """Handler must expose shutdown_priority and async shutdown()"""
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Route SIGINT (Ctrl+C) and SIGTERM to request_shutdown()"""
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))
        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        if self.reason is None:
            self.reason = reason
        log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    def _failed_critical_task(self) -> Optional[str]:
        for record in TaskRegistry.instance().failed():
            if record.info.category.name in CRITICAL_CATEGORIES:
                return record.info.description
        return None

    async def wait_for_shutdown(self) -> None:
        """Return on shutdown request or when a critical task has failed"""
        while not self._shutdown_event.is_set():
            failed = self._failed_critical_task()
            if failed is not None:
                log.error(f"Critical task failed: {failed}")
                self.request_shutdown(f"Task failure: {failed}")
                return
            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=self._poll_interval)
            except asyncio.TimeoutError:
                continue

    async def shutdown_all(self) -> None:
        """
        Run handlers highest priority first.

        Each handler gets timeout_per_handler seconds; a failing or slow
        handler is logged and the sequence continues.
        """
        log.info("Initiating graceful shutdown", reason=self.reason or "UNKNOWN")

        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True):
            name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {name} (priority={handler.shutdown_priority})")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
            except asyncio.TimeoutError:
                log.error(f"{name} shutdown timeout ({self._timeout_per_handler}s)")
            except Exception as e:
                log.error(f"Error shutting down {name}: {e}", error=type(e).__name__)

        log.info("Shutdown sequence complete")

    def get_handler(self, handler_type: type) -> Optional[IShutdownHandler]:
        for handler in self._handlers:
            if isinstance(handler, handler_type):
                return handler
        return None
