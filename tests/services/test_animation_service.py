"""
Tests for AnimationService: editing policy, playback control, export and the
events published for each state change.
"""

import asyncio

import pytest

from engine.animation_engine import AnimationEngine
from engine.errors import (
    AlreadyExportingError,
    FrameIndexError,
    InvalidFpsError,
    NothingToExportError,
    PlaybackActiveError,
)
from engine.export_pipeline import ExportPipeline
from engine.snapshot_codec import SnapshotCodec
from models.config import EditorConfig, FramesConfig
from models.events import EventSource, EventType
from services.animation_service import AnimationService


def types_of(events):
    return [e.type for e in events]


class TestFrames:

    @pytest.mark.asyncio
    async def test_set_frames_bulk_load(self, service, make_snapshot):
        snaps = [make_snapshot(x=i) for i in range(14)]

        loaded = service.set_frames(snaps)

        assert loaded == 12
        assert service.get_state().frames == tuple(snaps[:12])

    @pytest.mark.asyncio
    async def test_set_frame_data_out_of_range(self, service, make_snapshot):
        assert service.set_frame_data(12, make_snapshot()) is False
        assert service.get_state().is_empty

    @pytest.mark.asyncio
    async def test_navigation_publishes_frame_changed(self, service, recorded_events):
        await service.next_frame()
        await service.prev_frame()
        await service.prev_frame()

        changes = [(e.previous, e.frame) for e in recorded_events if e.type == EventType.FRAME_CHANGED]
        assert changes == [(0, 1), (1, 0), (0, 11)]

    @pytest.mark.asyncio
    async def test_selecting_same_frame_publishes_nothing(self, service, recorded_events):
        await service.set_active_frame(0)
        assert recorded_events == []

    @pytest.mark.asyncio
    async def test_select_out_of_range(self, service):
        with pytest.raises(FrameIndexError):
            await service.set_active_frame(40)

    @pytest.mark.asyncio
    async def test_render_frame_png(self, service, make_snapshot):
        service.set_frame_data(0, make_snapshot())
        png = service.render_frame_png(0)
        assert png.startswith(b"\x89PNG")

        with pytest.raises(FrameIndexError):
            service.render_frame_png(99)


class TestDrawingAndUndo:

    @pytest.mark.asyncio
    async def test_save_and_undo(self, service, recorded_events, make_snapshot):
        await service.save_drawing_state(make_snapshot(x=1))
        await service.save_drawing_state(make_snapshot(x=2))

        assert await service.undo() is True
        assert service.get_state().frames[0] == make_snapshot(x=1)
        assert types_of(recorded_events) == [
            EventType.DRAWING_SAVED,
            EventType.DRAWING_SAVED,
            EventType.UNDO_APPLIED,
        ]
        assert recorded_events[-1].undo_depth == 1

    @pytest.mark.asyncio
    async def test_undo_without_history(self, service, recorded_events):
        assert await service.undo() is False
        assert recorded_events == []

    @pytest.mark.asyncio
    async def test_overlays(self, service, make_snapshot):
        service.set_frame_data(3, make_snapshot(x=3))
        service.set_frame_data(5, make_snapshot(x=5))
        await service.toggle_keyframe(5)
        await service.set_active_frame(4)

        overlays = service.get_overlays()
        assert [(o.index, o.kind.name) for o in overlays] == [(3, "NEARBY"), (5, "KEYFRAME")]


class TestPlaybackPolicy:

    @pytest.mark.asyncio
    async def test_navigation_blocked_while_playing(self, service):
        await service.set_playing(True)

        with pytest.raises(PlaybackActiveError):
            await service.next_frame()
        with pytest.raises(PlaybackActiveError):
            await service.set_active_frame(3)
        with pytest.raises(PlaybackActiveError):
            await service.toggle_keyframe(3)
        with pytest.raises(PlaybackActiveError):
            await service.undo()

    @pytest.mark.asyncio
    async def test_overlays_hidden_while_playing(self, service, make_snapshot):
        service.set_frame_data(0, make_snapshot())
        await service.set_active_frame(1)
        await service.set_playing(True)

        assert service.get_overlays() == []

    @pytest.mark.asyncio
    async def test_play_pause_events(self, service, recorded_events):
        await service.set_playing(True)
        await service.set_playing(True)
        await service.toggle_playback()

        assert types_of(recorded_events) == [EventType.PLAYBACK_STARTED, EventType.PLAYBACK_STOPPED]
        assert not service.scheduler.running

    @pytest.mark.asyncio
    async def test_playback_advances_frames(self, event_bus, exporter, recorded_events):
        service = AnimationService(AnimationEngine(num_frames=4, fps=100), event_bus, exporter)
        await service.set_playing(True)
        await asyncio.sleep(0.1)
        await service.set_playing(False)

        advances = [e for e in recorded_events if e.type == EventType.FRAME_CHANGED]
        assert advances
        assert all(e.source == EventSource.PLAYBACK for e in advances)

    @pytest.mark.asyncio
    async def test_apply_frame_count_stops_playback(self, service, recorded_events):
        await service.set_playing(True)
        service.set_pending_frame_count(5)

        state = await service.apply_frame_count()

        assert state.is_playing is False
        assert state.num_frames == 5
        assert not service.scheduler.running
        stopped = [e for e in recorded_events if e.type == EventType.PLAYBACK_STOPPED]
        assert stopped[0].reason == "frame_count_applied"

    @pytest.mark.asyncio
    async def test_drawing_allowed_while_playing(self, service, make_snapshot):
        await service.set_playing(True)
        await service.save_drawing_state(make_snapshot())
        assert not service.get_state().is_empty


class TestFrameCount:

    @pytest.mark.asyncio
    async def test_truncate_clamps_active_frame(self, service, recorded_events):
        await service.set_active_frame(9)
        recorded_events.clear()

        service.set_pending_frame_count(5)
        state = await service.apply_frame_count()

        assert state.active_frame == 4
        assert types_of(recorded_events) == [EventType.FRAME_COUNT_APPLIED, EventType.FRAME_CHANGED]

    @pytest.mark.asyncio
    async def test_pending_count_is_clamped(self, event_bus, engine, exporter):
        config = EditorConfig(frames=FramesConfig(default_count=12, min_count=2, max_count=20))
        service = AnimationService(engine, event_bus, exporter, config=config)

        assert service.set_pending_frame_count(500).pending_frame_count == 20
        assert service.set_pending_frame_count(0).pending_frame_count == 2


class TestFps:

    @pytest.mark.asyncio
    async def test_set_fps(self, service, recorded_events):
        state = await service.set_fps(24)

        assert state.fps == 24
        assert recorded_events[-1].type == EventType.FPS_CHANGED

    @pytest.mark.asyncio
    async def test_invalid_fps(self, service, recorded_events):
        with pytest.raises(InvalidFpsError):
            await service.set_fps(0)
        assert recorded_events == []


class TestExport:

    @pytest.mark.asyncio
    async def test_export_events(self, service, recorded_events, make_snapshot):
        service.set_frames([make_snapshot(x=1), "", make_snapshot(x=2)])

        result = await service.export_animation()

        assert result.data.startswith(b"GIF8")
        assert result.frame_count == 2
        assert types_of(recorded_events) == [EventType.EXPORT_STARTED, EventType.EXPORT_FINISHED]
        assert recorded_events[0].frame_count == 2

    @pytest.mark.asyncio
    async def test_nothing_to_export(self, service, recorded_events):
        with pytest.raises(NothingToExportError):
            await service.export_animation()

        assert recorded_events[-1].type == EventType.EXPORT_FAILED
        assert recorded_events[-1].error == "NothingToExportError"
        assert service.get_state().is_exporting is False

    @pytest.mark.asyncio
    async def test_guard_is_held_when_started_is_published(self, service, event_bus, make_snapshot):
        service.set_frame_data(0, make_snapshot())
        seen = []
        event_bus.subscribe(EventType.EXPORT_STARTED, lambda e: seen.append(service.get_state().is_exporting))

        await service.export_animation()

        assert seen == [True]
        assert service.get_state().is_exporting is False

    @pytest.mark.asyncio
    async def test_concurrent_exports_publish_one_start(self, service, recorded_events, make_snapshot):
        service.set_frame_data(0, make_snapshot())

        results = await asyncio.gather(
            service.export_animation(),
            service.export_animation(),
            return_exceptions=True,
        )

        assert isinstance(results[1], AlreadyExportingError)
        assert types_of(recorded_events) == [EventType.EXPORT_STARTED, EventType.EXPORT_FINISHED]

    @pytest.mark.asyncio
    async def test_already_exporting(self, service, make_snapshot):
        service.set_frame_data(0, make_snapshot())
        service.exporter.is_exporting = True

        with pytest.raises(AlreadyExportingError):
            await service.export_animation()

    @pytest.mark.asyncio
    async def test_export_to_file(self, service, tmp_path, make_snapshot):
        service.set_frame_data(0, make_snapshot())

        path = await service.export_to_file(str(tmp_path / "out"))

        assert path == tmp_path / "out" / "animation.gif"
        assert path.read_bytes().startswith(b"GIF8")


def test_from_config(event_bus):
    config = EditorConfig()
    service = AnimationService.from_config(config, event_bus)

    state = service.get_state()
    assert state.num_frames == 12
    assert state.fps == 12
    assert service.engine.undo_ledger.max_states == 3
    assert isinstance(service.exporter, ExportPipeline)
    assert isinstance(service.exporter.codec, SnapshotCodec)
    assert (service.exporter.codec.width, service.exporter.codec.height) == (1000, 562)
