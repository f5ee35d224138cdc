"""
ExportPipeline - frames -> animated GIF bytes.

Steps:
  1. Reject if an export is already in flight (is_exporting guard)
  2. Drop blank frames; nothing left -> NothingToExportError
  3. Rasterize each snapshot at the canvas size, in store order
  4. Encode with a uniform per-frame delay of 1000/fps ms

Rasterizing and encoding run in a worker thread. The guard is cleared on
every path; a failed export produces no artifact.
"""

from __future__ import annotations
import asyncio
import io
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence

from PIL import Image

from engine.errors import (
    AlreadyExportingError,
    EncoderError,
    ExportError,
    InvalidFpsError,
    NothingToExportError,
    RasterizationError,
)
from engine.snapshot_codec import SnapshotCodec
from models.enums import LogCategory
from models.snapshot import is_blank
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.EXPORT)

GIF_MEDIA_TYPE = "image/gif"
DEFAULT_FILENAME = "animation.gif"


@dataclass(frozen=True)
class ExportResult:
    """Finished artifact, ready to download or write to disk"""
    data: bytes
    frame_count: int
    delay_ms: float
    width: int
    height: int
    media_type: str = GIF_MEDIA_TYPE
    filename: str = DEFAULT_FILENAME

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class FrameEncoder(Protocol):
    """Turns ordered images plus a uniform delay into an animated image"""

    def encode(self, images: Sequence[Image.Image], delay_ms: float) -> bytes:
        ...


class GifEncoder:
    """Pillow GIF writer; loops forever by default"""

    def __init__(self, loop: int = 0, colors: int = 256):
        self.loop = loop
        self.colors = max(2, min(colors, 256))

    def encode(self, images: Sequence[Image.Image], delay_ms: float) -> bytes:
        if not images:
            raise EncoderError("No images to encode")

        frames = [img.convert("RGB").quantize(colors=self.colors) for img in images]
        buffer = io.BytesIO()
        try:
            frames[0].save(
                buffer,
                format="GIF",
                save_all=True,
                append_images=frames[1:],
                duration=int(round(delay_ms)),
                loop=self.loop,
                optimize=False,
                disposal=2,
            )
        except (OSError, ValueError) as e:
            raise EncoderError(f"GIF encoding failed: {e}") from e
        return buffer.getvalue()


class ExportPipeline:

    def __init__(self, codec: SnapshotCodec, encoder: FrameEncoder, filename: str = DEFAULT_FILENAME):
        self.codec = codec
        self.encoder = encoder
        self.filename = filename
        self.is_exporting = False

    async def export(
        self,
        frames: Sequence[str],
        fps: float,
        on_started: Optional[Callable[[int, float], Awaitable[None]]] = None,
    ) -> ExportResult:
        """
        Export `frames` (copied at call time) as one animated image.

        `on_started(frame_count, fps)` is awaited once the guard is held, so
        observers never see a started export with `is_exporting` still False.

        Raises:
            AlreadyExportingError: another export is in flight
            NothingToExportError: every frame is blank
            RasterizationError / EncoderError: rendering or encoding failed
        """
        if self.is_exporting:
            raise AlreadyExportingError()
        if fps <= 0:
            raise InvalidFpsError(fps)

        snapshots = [frame for frame in frames if not is_blank(frame)]
        if not snapshots:
            raise NothingToExportError()

        delay_ms = 1000 / fps
        self.is_exporting = True
        log.info("Export started", frames=len(snapshots), delay_ms=f"{delay_ms:.2f}")

        try:
            if on_started is not None:
                await on_started(len(snapshots), fps)
            data = await asyncio.to_thread(self._build, snapshots, delay_ms)
        except ExportError as e:
            log.error("Export failed", error=type(e).__name__, reason=str(e))
            raise
        finally:
            self.is_exporting = False

        log.info("Export finished", frames=len(snapshots), size=f"{len(data)} B")
        return ExportResult(
            data=data,
            frame_count=len(snapshots),
            delay_ms=delay_ms,
            width=self.codec.width,
            height=self.codec.height,
            filename=self.filename,
        )

    def _build(self, snapshots: List[str], delay_ms: float) -> bytes:
        images = [self._rasterize(position, snapshot) for position, snapshot in enumerate(snapshots)]
        try:
            return self.encoder.encode(images, delay_ms)
        except EncoderError:
            raise
        except Exception as e:
            raise EncoderError(f"Encoder failed: {e}") from e

    def _rasterize(self, position: int, snapshot: str) -> Image.Image:
        try:
            return self.codec.rasterize(snapshot)
        except Exception as e:
            raise RasterizationError(position, e) from e
