from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.animation_service import AnimationService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class PlaybackShutdownHandler(IShutdownHandler):
    """
    Stops the playback loop before anything else goes down.

    Priority: 130 (first)
    """

    def __init__(self, animation_service: "AnimationService"):
        self.animation_service = animation_service

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        log.info("Stopping playback...")
        await self.animation_service.stop()
        log.debug("Playback stopped", frame=self.animation_service.engine.active_frame)
