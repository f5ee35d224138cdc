"""
Tests for ExportPipeline: frame selection, timing, the in-flight guard and
failure reporting.
"""

import asyncio
import io
import threading

import pytest
from PIL import Image

from engine.errors import AlreadyExportingError, EncoderError, InvalidFpsError, NothingToExportError
from engine.export_pipeline import GIF_MEDIA_TYPE, ExportPipeline, GifEncoder
from engine.snapshot_codec import SnapshotCodec


class RecordingEncoder:
    """Captures what would have been encoded"""

    def __init__(self):
        self.images = []
        self.delay_ms = None

    def encode(self, images, delay_ms):
        self.images = list(images)
        self.delay_ms = delay_ms
        return b"GIF89a-fake"


class FailingEncoder:

    def encode(self, images, delay_ms):
        raise RuntimeError("disk full")


class SlowEncoder:

    def __init__(self):
        self.release = None

    def encode(self, images, delay_ms):
        self.release.wait(timeout=2)
        return b"GIF89a"


@pytest.fixture
def codec():
    return SnapshotCodec(width=32, height=18)


@pytest.mark.asyncio
async def test_all_blank_raises_nothing_to_export(codec):
    pipeline = ExportPipeline(codec, RecordingEncoder())

    with pytest.raises(NothingToExportError):
        await pipeline.export([""] * 12, fps=12)

    assert pipeline.is_exporting is False


@pytest.mark.asyncio
async def test_blank_frames_are_omitted(codec, make_snapshot):
    encoder = RecordingEncoder()
    pipeline = ExportPipeline(codec, encoder)
    frames = ["", make_snapshot(x=1), "", make_snapshot(x=2), ""]

    result = await pipeline.export(frames, fps=12)

    assert result.frame_count == 2
    assert len(encoder.images) == 2
    assert encoder.delay_ms == pytest.approx(1000 / 12)


@pytest.mark.asyncio
async def test_result_metadata(codec, make_snapshot):
    pipeline = ExportPipeline(codec, RecordingEncoder(), filename="walk.gif")
    result = await pipeline.export([make_snapshot()], fps=24)

    assert result.media_type == GIF_MEDIA_TYPE
    assert result.filename == "walk.gif"
    assert (result.width, result.height) == (32, 18)
    assert result.size_bytes == len(result.data)
    assert result.delay_ms == pytest.approx(41.67, abs=0.01)


@pytest.mark.asyncio
async def test_encoder_failure_clears_guard(codec, make_snapshot):
    pipeline = ExportPipeline(codec, FailingEncoder())

    with pytest.raises(EncoderError):
        await pipeline.export([make_snapshot()], fps=12)

    assert pipeline.is_exporting is False


@pytest.mark.asyncio
async def test_second_export_while_running_is_rejected(codec, make_snapshot):
    encoder = SlowEncoder()
    encoder.release = threading.Event()
    pipeline = ExportPipeline(codec, encoder)

    first = asyncio.create_task(pipeline.export([make_snapshot()], fps=12))
    await asyncio.sleep(0.05)
    assert pipeline.is_exporting is True

    with pytest.raises(AlreadyExportingError):
        await pipeline.export([make_snapshot()], fps=12)

    encoder.release.set()
    result = await first
    assert result.frame_count == 1
    assert pipeline.is_exporting is False


@pytest.mark.asyncio
async def test_frames_are_copied_at_invocation(codec, make_snapshot):
    encoder = RecordingEncoder()
    pipeline = ExportPipeline(codec, encoder)
    frames = [make_snapshot()]

    task = asyncio.create_task(pipeline.export(frames, fps=12))
    await asyncio.sleep(0)
    frames.append(make_snapshot(x=50))
    result = await task

    assert result.frame_count == 1


@pytest.mark.asyncio
async def test_malformed_frame_exports_as_background(codec, make_snapshot):
    encoder = RecordingEncoder()
    pipeline = ExportPipeline(codec, encoder)
    frames = [make_snapshot(x=1), make_snapshot(width="1000"), make_snapshot(x=2)]

    result = await pipeline.export(frames, fps=12)

    assert result.frame_count == 3
    assert encoder.images[1].getcolors() == [(32 * 18, (255, 255, 255))]


@pytest.mark.asyncio
async def test_invalid_fps(codec, make_snapshot):
    pipeline = ExportPipeline(codec, RecordingEncoder())
    with pytest.raises(InvalidFpsError):
        await pipeline.export([make_snapshot()], fps=0)


class TestGifEncoder:

    @pytest.mark.asyncio
    async def test_real_gif(self, codec, make_snapshot):
        pipeline = ExportPipeline(codec, GifEncoder())
        frames = [make_snapshot(x=0), "", make_snapshot(x=100, color="#ff0000")]

        result = await pipeline.export(frames, fps=12)

        assert result.data.startswith(b"GIF8")
        with Image.open(io.BytesIO(result.data)) as gif:
            assert gif.n_frames == 2
            assert gif.info["loop"] == 0
            # GIF delays are stored in centiseconds
            assert gif.info["duration"] == pytest.approx(83, abs=10)

    def test_empty_input(self):
        with pytest.raises(EncoderError):
            GifEncoder().encode([], 100)

    def test_colors_are_clamped(self):
        assert GifEncoder(colors=1000).colors == 256
        assert GifEncoder(colors=1).colors == 2
