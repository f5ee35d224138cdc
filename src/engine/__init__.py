"""Animation engine - frame store, undo, overlays, playback and export"""

from engine.animation_engine import AnimationEngine
from engine.export_pipeline import ExportPipeline, ExportResult, GifEncoder
from engine.frame_store import FrameStore
from engine.overlay_compositor import OverlayCompositor, compute_overlays
from engine.playback_scheduler import PlaybackScheduler
from engine.snapshot_codec import SnapshotCodec, parse_snapshot, recolor_snapshot, serialize_snapshot
from engine.undo_ledger import UndoLedger

__all__ = [
    "AnimationEngine",
    "ExportPipeline",
    "ExportResult",
    "GifEncoder",
    "FrameStore",
    "OverlayCompositor",
    "compute_overlays",
    "PlaybackScheduler",
    "SnapshotCodec",
    "parse_snapshot",
    "recolor_snapshot",
    "serialize_snapshot",
    "UndoLedger",
]
