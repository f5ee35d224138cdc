"""
Snapshot models - typed view of the drawing surface's save data.

A snapshot is the JSON text produced by the drawing surface on pointer-up:

    {"lines": [{"points": [{"x": 10, "y": 20}, ...],
                "brushColor": "#444",
                "brushRadius": 2}],
     "width": 1000, "height": 562}

Keys the engine does not understand are kept in `extra` so that
parse → to_dict reproduces the original structure.
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

# Empty string = blank frame
BLANK_SNAPSHOT = ""


def is_blank(snapshot: Optional[str]) -> bool:
    """Blank frames are empty strings (or missing entries)"""
    return not snapshot


@dataclass
class Point:
    x: float
    y: float
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Point':
        extra = {k: v for k, v in data.items() if k not in ("x", "y")}
        return cls(x=_number(data["x"], "x"), y=_number(data["y"], "y"), extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, **self.extra}

    def as_tuple(self) -> tuple:
        return (self.x, self.y)


@dataclass
class Stroke:
    """
    One pointer gesture: ordered points drawn with a single color and radius.

    The rendered line width is twice the brush radius.
    """

    points: List[Point]
    color: str
    radius: float
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> float:
        return self.radius * 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Stroke':
        if not isinstance(data, dict):
            raise TypeError(f"Stroke must be an object, got {type(data).__name__}")
        points = data.get("points", [])
        if not isinstance(points, list):
            raise TypeError("Stroke points must be a list")
        extra = {k: v for k, v in data.items() if k not in ("points", "brushColor", "brushRadius")}
        return cls(
            points=[Point.from_dict(p) for p in points],
            color=str(data.get("brushColor", "#000000")),
            radius=_number(data.get("brushRadius", 1), "brushRadius"),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "points": [p.to_dict() for p in self.points],
            "brushColor": self.color,
            "brushRadius": self.radius,
            **self.extra,
        }


@dataclass
class DrawingData:
    """Background color plus an ordered list of strokes"""

    strokes: List[Stroke] = field(default_factory=list)
    width: Optional[float] = None
    height: Optional[float] = None
    background_color: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _KNOWN_KEYS = ("lines", "width", "height", "backgroundColor")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DrawingData':
        if not isinstance(data, dict):
            raise TypeError(f"Save data must be an object, got {type(data).__name__}")
        lines = data.get("lines", [])
        if not isinstance(lines, list):
            raise TypeError("'lines' must be a list")
        return cls(
            strokes=[Stroke.from_dict(line) for line in lines],
            width=_dimension(data.get("width"), "width"),
            height=_dimension(data.get("height"), "height"),
            background_color=data.get("backgroundColor"),
            extra={k: v for k, v in data.items() if k not in cls._KNOWN_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"lines": [s.to_dict() for s in self.strokes]}
        if self.width is not None:
            result["width"] = self.width
        if self.height is not None:
            result["height"] = self.height
        if self.background_color is not None:
            result["backgroundColor"] = self.background_color
        result.update(self.extra)
        return result

    def recolored(self, color: str) -> 'DrawingData':
        """Copy with every stroke's color replaced; geometry untouched"""
        return replace(
            self,
            strokes=[replace(stroke, color=color) for stroke in self.strokes],
        )


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{name}' must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"'{name}' must be finite, got {value!r}")
    return value


def _dimension(value: Any, name: str) -> Optional[float]:
    """Optional positive size of the drawing surface"""
    if value is None:
        return None
    value = _number(value, name)
    if value <= 0:
        raise ValueError(f"'{name}' must be positive, got {value!r}")
    return value
