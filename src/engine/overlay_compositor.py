"""
OverlayCompositor - reference layers for the active drawing surface.

Two passes, emitted in this order:
  1. NEARBY: previous frames (farthest first) as onion skin, opacity 1/(i+2)
  2. KEYFRAME: every other non-blank keyframe, recolored, fixed opacity

Nothing is emitted while playing. Output is render-only.
"""

from typing import AbstractSet, List, Sequence

from engine.snapshot_codec import recolor_snapshot
from models.domain import AnimationState
from models.enums import OverlayKind
from models.overlay import OverlayLayer
from models.snapshot import is_blank


KEYFRAME_HIGHLIGHT_COLOR = "#facc15"
KEYFRAME_OPACITY = 0.5


def nearby_opacity(offset: int) -> float:
    """0.25 at offset 2, 0.33 at offset 1"""
    return round(1 / (offset + 2), 2)


class OverlayCompositor:

    def __init__(
        self,
        nearby_depth: int = 2,
        keyframe_color: str = KEYFRAME_HIGHLIGHT_COLOR,
        keyframe_opacity: float = KEYFRAME_OPACITY,
    ):
        self.nearby_depth = nearby_depth
        self.keyframe_color = keyframe_color
        self.keyframe_opacity = keyframe_opacity

    def compose(
        self,
        active_frame: int,
        frames: Sequence[str],
        keyframes: AbstractSet[int],
        is_playing: bool,
    ) -> List[OverlayLayer]:
        if is_playing:
            return []

        layers: List[OverlayLayer] = []

        for offset in range(self.nearby_depth, 0, -1):
            index = active_frame - offset
            if index < 0:
                continue
            snapshot = frames[index]
            if is_blank(snapshot) or index in keyframes:
                continue
            layers.append(OverlayLayer(
                index=index,
                snapshot=snapshot,
                opacity=nearby_opacity(offset),
                kind=OverlayKind.NEARBY,
            ))

        for index in sorted(keyframes):
            if index == active_frame or index >= len(frames) or index < 0:
                continue
            snapshot = frames[index]
            if is_blank(snapshot):
                continue
            layers.append(OverlayLayer(
                index=index,
                snapshot=recolor_snapshot(snapshot, self.keyframe_color),
                opacity=self.keyframe_opacity,
                kind=OverlayKind.KEYFRAME,
            ))

        return layers

    def compose_state(self, state: AnimationState) -> List[OverlayLayer]:
        return self.compose(state.active_frame, state.frames, state.keyframes, state.is_playing)


def compute_overlays(
    frames: Sequence[str],
    active_frame: int,
    keyframes: AbstractSet[int],
    is_playing: bool,
) -> List[OverlayLayer]:
    """Overlay list with the default depth, highlight color and opacity"""
    return _default_compositor.compose(active_frame, frames, keyframes, is_playing)


_default_compositor = OverlayCompositor()
