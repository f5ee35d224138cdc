"""Animation service - editing session facade over AnimationEngine"""

import io
from pathlib import Path
from typing import List, Optional, Sequence

import aiofiles

from engine.animation_engine import AnimationEngine
from engine.errors import AlreadyExportingError, ExportError, PlaybackActiveError
from engine.export_pipeline import ExportPipeline, ExportResult, GifEncoder
from engine.overlay_compositor import OverlayCompositor
from engine.playback_scheduler import PlaybackScheduler
from engine.snapshot_codec import SnapshotCodec
from models.actions import (
    ApplyFrameCount,
    SaveDrawingState,
    SetActiveFrame,
    SetFps,
    SetFrameData,
    SetPendingFrameCount,
    SetPlaying,
    ToggleKeyframe,
    Undo,
)
from models.config import EditorConfig
from models.domain import AnimationState
from models.events import (
    EventSource,
    DrawingSavedEvent,
    ExportFailedEvent,
    ExportFinishedEvent,
    ExportStartedEvent,
    FpsChangedEvent,
    FrameChangedEvent,
    FrameCountAppliedEvent,
    KeyframeToggledEvent,
    PlaybackStartedEvent,
    PlaybackStoppedEvent,
    UndoAppliedEvent,
)
from models.overlay import OverlayLayer
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.FRAMES)


class AnimationService:
    """
    One editing session.

    Wraps the engine's dispatch point with the UI policy (navigation and
    keyframe toggles are disabled while playing), drives the playback loop,
    runs exports, and publishes an event for every state change.
    """

    def __init__(
        self,
        engine: AnimationEngine,
        event_bus: EventBus,
        exporter: ExportPipeline,
        compositor: Optional[OverlayCompositor] = None,
        config: Optional[EditorConfig] = None,
        scheduler: Optional[PlaybackScheduler] = None,
    ):
        self.engine = engine
        self.event_bus = event_bus
        self.exporter = exporter
        self.compositor = compositor or OverlayCompositor()
        self.config = config or EditorConfig()
        self.scheduler = scheduler or PlaybackScheduler(engine, tick_hz=self.config.playback.tick_hz)
        self.scheduler.on_advance = self._on_playback_advance

        log.info(
            "AnimationService ready",
            frames=engine.num_frames,
            fps=engine.fps,
            canvas=f"{exporter.codec.width}x{exporter.codec.height}",
        )

    @classmethod
    def from_config(cls, config: EditorConfig, event_bus: EventBus) -> 'AnimationService':
        """Build engine, codec, exporter and compositor from configuration"""
        engine = AnimationEngine(
            num_frames=config.frames.default_count,
            fps=config.playback.default_fps,
            max_undo_states=config.undo.max_states,
        )
        codec = SnapshotCodec(config.canvas.width, config.canvas.height, config.canvas.background_color)
        exporter = ExportPipeline(
            codec,
            GifEncoder(loop=config.export.loop, colors=config.export.colors),
            filename=config.export.filename,
        )
        compositor = OverlayCompositor(
            nearby_depth=config.overlay.nearby_depth,
            keyframe_color=config.overlay.keyframe_color,
            keyframe_opacity=config.overlay.keyframe_opacity,
        )
        return cls(engine, event_bus, exporter, compositor=compositor, config=config)

    # === Queries ===

    def get_state(self) -> AnimationState:
        return self.engine.state(is_exporting=self.exporter.is_exporting)

    @property
    def is_playing(self) -> bool:
        return self.engine.is_playing

    def get_overlays(self) -> List[OverlayLayer]:
        state = self.engine.state()
        return self.compositor.compose_state(state)

    def render_frame_png(self, index: int) -> bytes:
        """Rasterize one frame as PNG (timeline thumbnails)"""
        snapshot = self.engine.store.get(index)
        image = self.exporter.codec.rasterize(snapshot)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()

    # === Frame data ===

    def set_frame_data(self, index: int, snapshot: str) -> bool:
        """Overwrite one frame without touching undo. False if index is out of range."""
        in_range = self.engine.store.in_range(index)
        self.engine.dispatch(SetFrameData(index, snapshot))
        return in_range

    def set_frames(self, snapshots: Sequence[str]) -> int:
        """Bulk load from index 0. Entries past the last frame are ignored."""
        loaded = 0
        for index, snapshot in enumerate(snapshots):
            if self.set_frame_data(index, snapshot):
                loaded += 1
        log.info("Frames loaded", loaded=loaded, ignored=len(snapshots) - loaded)
        return loaded

    # === Navigation ===

    async def set_active_frame(self, index: int) -> AnimationState:
        self._require_stopped("change frame")
        return await self._select(index)

    async def next_frame(self) -> AnimationState:
        self._require_stopped("go to next frame")
        return await self._select(self.engine.next_index())

    async def prev_frame(self) -> AnimationState:
        self._require_stopped("go to previous frame")
        return await self._select(self.engine.prev_index())

    async def _select(self, index: int) -> AnimationState:
        previous = self.engine.active_frame
        state = self.engine.dispatch(SetActiveFrame(index))
        if state.active_frame != previous:
            await self.event_bus.publish(FrameChangedEvent(state.active_frame, previous))
        return state

    # === Drawing & undo ===

    async def save_drawing_state(self, snapshot: str) -> AnimationState:
        """Commit one drawing gesture to the active frame"""
        state = self.engine.dispatch(SaveDrawingState(snapshot))
        await self.event_bus.publish(DrawingSavedEvent(state.active_frame, len(state.undo.states)))
        return state

    async def undo(self) -> bool:
        """Undo the last gesture on the active frame. False when there is no history."""
        self._require_stopped("undo")
        if not self.engine.undo_ledger.can_undo:
            return False
        state = self.engine.dispatch(Undo())
        await self.event_bus.publish(UndoAppliedEvent(state.active_frame, len(state.undo.states)))
        return True

    async def toggle_keyframe(self, index: int) -> bool:
        """Returns True if the frame is now a keyframe"""
        self._require_stopped("toggle keyframe")
        state = self.engine.dispatch(ToggleKeyframe(index))
        is_keyframe = index in state.keyframes
        await self.event_bus.publish(KeyframeToggledEvent(index, is_keyframe))
        return is_keyframe

    # === Frame count ===

    def set_pending_frame_count(self, count: int) -> AnimationState:
        """Propose a frame count, clamped to the configured range"""
        limits = self.config.frames
        clamped = max(limits.min_count, min(int(count), limits.max_count))
        if clamped != count:
            log.debug("Frame count clamped", requested=count, clamped=clamped)
        return self.engine.dispatch(SetPendingFrameCount(clamped))

    async def apply_frame_count(self) -> AnimationState:
        """Resize to the pending count. Stops playback."""
        was_playing = self.engine.is_playing
        previous_active = self.engine.active_frame

        state = self.engine.dispatch(ApplyFrameCount())

        if was_playing:
            await self.scheduler.stop()
            await self.event_bus.publish(PlaybackStoppedEvent(state.active_frame, reason="frame_count_applied"))

        await self.event_bus.publish(FrameCountAppliedEvent(state.num_frames, state.active_frame))
        if state.active_frame != previous_active:
            await self.event_bus.publish(FrameChangedEvent(state.active_frame, previous_active))
        return state

    # === Playback ===

    async def set_playing(self, playing: bool) -> AnimationState:
        if playing == self.engine.is_playing:
            return self.get_state()

        if playing:
            self.engine.dispatch(SetPlaying(True))
            self.scheduler.start()
            await self.event_bus.publish(PlaybackStartedEvent(self.engine.fps, self.engine.active_frame))
        else:
            self.engine.dispatch(SetPlaying(False))
            await self.scheduler.stop()
            await self.event_bus.publish(PlaybackStoppedEvent(self.engine.active_frame))

        return self.get_state()

    async def toggle_playback(self) -> AnimationState:
        return await self.set_playing(not self.engine.is_playing)

    async def set_fps(self, fps: float) -> AnimationState:
        state = self.engine.dispatch(SetFps(fps))
        if fps not in self.config.playback.fps_options:
            log.debug("FPS outside UI options", fps=fps, options=list(self.config.playback.fps_options))
        await self.event_bus.publish(FpsChangedEvent(fps))
        return state

    async def _on_playback_advance(self, previous: int, frame: int) -> None:
        await self.event_bus.publish(FrameChangedEvent(frame, previous, source=EventSource.PLAYBACK))

    # === Export ===

    async def export_animation(self) -> ExportResult:
        """Export every non-blank frame as an animated GIF"""
        if self.exporter.is_exporting:
            raise AlreadyExportingError()

        state = self.engine.state()

        async def publish_started(frame_count: int, fps: float) -> None:
            await self.event_bus.publish(ExportStartedEvent(frame_count, fps))

        try:
            result = await self.exporter.export(state.frames, state.fps, on_started=publish_started)
        except ExportError as e:
            await self.event_bus.publish(ExportFailedEvent(e))
            raise

        await self.event_bus.publish(ExportFinishedEvent(result.frame_count, result.size_bytes))
        return result

    async def export_to_file(self, directory: Optional[str] = None) -> Path:
        """Export and write <directory>/<filename>. Returns the written path."""
        result = await self.export_animation()

        target_dir = Path(directory or self.config.export.output_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / result.filename

        async with aiofiles.open(path, "wb") as f:
            await f.write(result.data)

        log.info("Export written", path=str(path), size=f"{result.size_bytes} B")
        return path

    # === Lifecycle ===

    async def stop(self) -> None:
        """Stop playback if running (shutdown path)"""
        if self.engine.is_playing:
            await self.set_playing(False)
        else:
            await self.scheduler.stop()

    def _require_stopped(self, operation: str) -> None:
        if self.engine.is_playing:
            raise PlaybackActiveError(operation)
