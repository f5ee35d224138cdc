"""
Shutdown handler protocol

Components that need cleanup implement IShutdownHandler and register with
ShutdownCoordinator.
"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Example:
        class PlaybackShutdownHandler:
            @property
            def shutdown_priority(self) -> int:
                return 130  # Shutdown first

            async def shutdown(self) -> None:
                await self.animation_service.stop()
    """

    @property
    def shutdown_priority(self) -> int:
        """Higher priority shuts down earlier."""
        ...

    async def shutdown(self) -> None:
        """Called during coordinated shutdown."""
        ...
