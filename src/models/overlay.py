"""
Overlay layer model - one translucent, non-interactive reference layer.

Overlays are render-only: they are computed from the frame store on demand
and never written back into it.
"""

from dataclasses import dataclass
from typing import Any, Dict

from models.enums import OverlayKind


@dataclass(frozen=True)
class OverlayLayer:
    """
    Reference layer drawn above/below the active drawing surface.

    index: frame the layer was taken from
    snapshot: snapshot to render (recolored for KEYFRAME layers)
    opacity: 0..1
    kind: NEARBY onion skin or KEYFRAME highlight
    """
    index: int
    snapshot: str
    opacity: float
    kind: OverlayKind

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "snapshot": self.snapshot,
            "opacity": self.opacity,
            "kind": self.kind.name,
        }
