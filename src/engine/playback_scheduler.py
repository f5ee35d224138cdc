"""
PlaybackScheduler - advances the active frame at `fps` while playing.

The loop ticks at the host redraw rate (tick_hz, default 60). A tick only
advances when at least 1000/fps ms have passed since the *last advance*, so
the advance rate is independent of the tick rate and never drifts.

States: STOPPED -> PLAYING -> STOPPED. Starting stamps last_advance = now
(no immediate jump); stopping clears it so resuming never catches up.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional

from engine.animation_engine import AnimationEngine
from lifecycle.task_registry import TaskCategory, create_tracked_task
from models.actions import SetActiveFrame
from models.enums import LogCategory, PlaybackStatus
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.PLAYBACK)

# (previous, new) active frame
AdvanceCallback = Callable[[int, int], Awaitable[None]]


def monotonic_ms() -> float:
    return time.perf_counter() * 1000


class PlaybackScheduler:
    """
    Elapsed-time-gated frame advance.

    tick() is the whole timing contract and is driven directly by tests with
    explicit timestamps; start()/stop() wrap it in an asyncio loop.
    """

    def __init__(
        self,
        engine: AnimationEngine,
        tick_hz: float = 60,
        clock: Callable[[], float] = monotonic_ms,
        on_advance: Optional[AdvanceCallback] = None,
    ):
        self.engine = engine
        self.tick_hz = max(1.0, tick_hz)
        self.clock = clock
        self.on_advance = on_advance

        self.last_advance: Optional[float] = None
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def status(self) -> PlaybackStatus:
        return PlaybackStatus.PLAYING if self.engine.is_playing else PlaybackStatus.STOPPED

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def interval_ms(self) -> float:
        return 1000 / self.engine.fps

    # === Timing core ===

    def reset(self, now: Optional[float] = None) -> None:
        """Start the elapsed-time window at `now`"""
        self.last_advance = self.clock() if now is None else now

    def clear(self) -> None:
        self.last_advance = None

    def tick(self, now: Optional[float] = None) -> bool:
        """
        Advance once if the frame interval has elapsed.

        Returns:
            True if the active frame advanced
        """
        if not self.engine.is_playing:
            return False

        now = self.clock() if now is None else now
        if self.last_advance is None:
            self.last_advance = now
            return False

        if now - self.last_advance < self.interval_ms:
            return False

        self.engine.dispatch(SetActiveFrame(self.engine.next_index()))
        self.last_advance = now
        return True

    # === Async loop ===

    def start(self) -> None:
        """Start the tick loop (engine must already be playing)"""
        if self.running:
            return

        self._generation += 1
        self.reset()
        self._task = create_tracked_task(
            self._run(self._generation),
            category=TaskCategory.PLAYBACK,
            description=f"Playback loop @ {self.engine.fps} fps",
        )
        log.info("Playback loop started", fps=self.engine.fps, tick_hz=self.tick_hz)

    async def stop(self) -> None:
        """Cancel the loop; no advance can happen after this returns"""
        self._generation += 1
        self.clear()

        task, self._task = self._task, None
        if task is None or task.done():
            return

        task.cancel()
        if task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass
        log.info("Playback loop stopped", frame=self.engine.active_frame)

    async def _run(self, generation: int) -> None:
        period = 1 / self.tick_hz
        while generation == self._generation and self.engine.is_playing:
            previous = self.engine.active_frame
            if self.tick() and self.on_advance is not None:
                await self.on_advance(previous, self.engine.active_frame)
            await asyncio.sleep(period)

        if generation == self._generation:
            # Playback was switched off under us (e.g. frame count applied)
            self.clear()
            log.debug("Playback loop observed stop", frame=self.engine.active_frame)
