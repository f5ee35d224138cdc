"""
SnapshotCodec - snapshot text <-> DrawingData, and DrawingData -> pixels.

Parsing is strict (raises SnapshotParseError). Rendering paths catch that
error and degrade: recolor returns the original text, rasterize returns a
background-only image.
"""

from __future__ import annotations
import json
from typing import Optional

from PIL import Image, ImageDraw

from engine.errors import SnapshotParseError
from models.enums import LogCategory
from models.snapshot import DrawingData, Stroke, is_blank
from utils.colors import parse_css_color
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.CODEC)

DEFAULT_BACKGROUND = "#ffffff"


def parse_snapshot(text: str) -> DrawingData:
    """Parse snapshot text; raises SnapshotParseError on malformed input"""
    if is_blank(text):
        return DrawingData()
    try:
        return DrawingData.from_dict(json.loads(text))
    except (json.JSONDecodeError, ValueError, TypeError, KeyError, AttributeError) as e:
        raise SnapshotParseError(f"Invalid snapshot: {e}") from e


def serialize_snapshot(data: DrawingData) -> str:
    return json.dumps(data.to_dict(), separators=(",", ":"))


def recolor_snapshot(text: str, color: str) -> str:
    """
    Replace every stroke color with `color`, leaving geometry untouched.

    Returns the original text unmodified if it cannot be parsed.
    """
    if is_blank(text):
        return text
    try:
        data = parse_snapshot(text)
    except SnapshotParseError as e:
        log.warn("Recolor failed, using original snapshot", error=str(e))
        return text
    return serialize_snapshot(data.recolored(color))


class SnapshotCodec:
    """
    Rasterizes snapshots onto a fixed-size RGB canvas.

    Stroke geometry is drawn in the snapshot's own coordinate space and
    scaled to the canvas when the snapshot carries width/height.
    """

    def __init__(self, width: int = 1000, height: int = 562, background_color: str = DEFAULT_BACKGROUND):
        self.width = width
        self.height = height
        self.background_color = background_color

    def blank_image(self, background: Optional[str] = None) -> Image.Image:
        fill = parse_css_color(background or self.background_color, fallback=(255, 255, 255))
        return Image.new("RGB", (self.width, self.height), fill)

    def rasterize(self, text: str) -> Image.Image:
        """Render one snapshot; malformed snapshots render as the background"""
        try:
            data = parse_snapshot(text)
        except SnapshotParseError as e:
            log.warn("Rasterize failed, rendering blank frame", error=str(e))
            return self.blank_image()

        image = self.blank_image(data.background_color)
        draw = ImageDraw.Draw(image)
        sx, sy = self._scale(data)

        try:
            for stroke in data.strokes:
                self._draw_stroke(draw, stroke, sx, sy)
        except (OverflowError, ValueError) as e:
            # Geometry too large to map onto the canvas
            log.warn("Rasterize failed, rendering blank frame", error=str(e))
            return self.blank_image()

        return image

    def _scale(self, data: DrawingData) -> tuple:
        sx = self.width / data.width if data.width else 1.0
        sy = self.height / data.height if data.height else 1.0
        return sx, sy

    def _draw_stroke(self, draw: ImageDraw.ImageDraw, stroke: Stroke, sx: float, sy: float) -> None:
        if not stroke.points:
            return

        color = parse_css_color(stroke.color)
        width = max(1, int(round(stroke.width * min(sx, sy))))
        r = width / 2
        points = [(p.x * sx, p.y * sy) for p in stroke.points]

        # Round caps/joins: a disc at every vertex
        for x, y in points:
            draw.ellipse((x - r, y - r, x + r, y + r), fill=color)

        if len(points) >= 2:
            draw.line(points, fill=color, width=width)
