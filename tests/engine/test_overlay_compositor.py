"""
Tests for OverlayCompositor: onion-skin and keyframe layers for the active frame.
"""

import json

import pytest

from engine.overlay_compositor import (
    KEYFRAME_HIGHLIGHT_COLOR,
    OverlayCompositor,
    compute_overlays,
    nearby_opacity,
)
from models.actions import SetActiveFrame, SetFrameData
from models.enums import OverlayKind


@pytest.fixture
def frames(make_snapshot):
    frames = [""] * 12
    frames[3] = make_snapshot(x=3)
    frames[5] = make_snapshot(x=5)
    return frames


def test_nearby_opacity_grows_as_distance_shrinks():
    assert nearby_opacity(2) == 0.25
    assert nearby_opacity(1) == 0.33
    assert nearby_opacity(1) > nearby_opacity(2)


def test_previous_frame_then_keyframe(frames):
    layers = compute_overlays(frames, active_frame=4, keyframes={5}, is_playing=False)

    assert [(layer.index, layer.kind) for layer in layers] == [
        (3, OverlayKind.NEARBY),
        (5, OverlayKind.KEYFRAME),
    ]
    assert layers[0].opacity == 0.33
    assert layers[0].snapshot == frames[3]
    assert layers[1].opacity == 0.5


def test_keyframe_layer_is_recolored(frames):
    layers = compute_overlays(frames, active_frame=4, keyframes={5}, is_playing=False)
    keyframe = json.loads(layers[1].snapshot)
    original = json.loads(frames[5])

    assert keyframe["lines"][0]["brushColor"] == KEYFRAME_HIGHLIGHT_COLOR
    assert keyframe["lines"][0]["points"] == original["lines"][0]["points"]
    # Store content is untouched
    assert json.loads(frames[5])["lines"][0]["brushColor"] == "#444"


def test_nothing_while_playing(frames):
    assert compute_overlays(frames, active_frame=4, keyframes={5}, is_playing=True) == []


def test_farther_frame_first(make_snapshot):
    frames = [make_snapshot(x=0), make_snapshot(x=1), ""]
    layers = compute_overlays(frames, active_frame=2, keyframes=set(), is_playing=False)

    assert [layer.index for layer in layers] == [0, 1]
    assert [layer.opacity for layer in layers] == [0.25, 0.33]


def test_keyframes_are_excluded_from_onion_skin(make_snapshot):
    frames = [make_snapshot(x=0), make_snapshot(x=1), ""]
    layers = compute_overlays(frames, active_frame=2, keyframes={1}, is_playing=False)

    assert [(layer.index, layer.kind) for layer in layers] == [
        (0, OverlayKind.NEARBY),
        (1, OverlayKind.KEYFRAME),
    ]


def test_active_keyframe_is_not_overlaid(frames):
    layers = compute_overlays(frames, active_frame=5, keyframes={5}, is_playing=False)
    assert all(layer.index != 5 for layer in layers)


def test_blank_and_missing_keyframes_skipped(frames):
    layers = compute_overlays(frames, active_frame=0, keyframes={7, 20}, is_playing=False)
    assert layers == []


def test_first_frame_has_no_onion_skin(frames):
    assert compute_overlays(frames, active_frame=0, keyframes=set(), is_playing=False) == []


def test_unparseable_keyframe_kept_as_is():
    frames = ["not json", ""]
    layers = compute_overlays(frames, active_frame=1, keyframes={0}, is_playing=False)

    assert len(layers) == 1
    assert layers[0].snapshot == "not json"


def test_custom_depth_and_highlight(make_snapshot):
    frames = [make_snapshot(x=i) for i in range(4)] + [""]
    compositor = OverlayCompositor(nearby_depth=3, keyframe_color="#ff0000", keyframe_opacity=0.8)

    layers = compositor.compose(4, frames, {0}, is_playing=False)

    assert [layer.index for layer in layers] == [1, 2, 3, 0]
    assert layers[0].opacity == 0.2
    assert layers[-1].opacity == 0.8
    assert json.loads(layers[-1].snapshot)["lines"][0]["brushColor"] == "#ff0000"


def test_compose_state(engine, make_snapshot):
    engine.dispatch(SetFrameData(0, make_snapshot()))
    state = engine.dispatch(SetActiveFrame(1))

    layers = OverlayCompositor().compose_state(state)
    assert [layer.to_dict()["kind"] for layer in layers] == ["NEARBY"]
