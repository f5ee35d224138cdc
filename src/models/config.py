"""
Configuration models

Typed, immutable views of config.yaml. Built by ConfigManager; every field has
a default so a partial YAML file still yields a complete EditorConfig.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class CanvasConfig:
    """Raster size used for export (16:9)"""
    width: int = 1000
    height: int = 562
    background_color: str = "#ffffff"


@dataclass(frozen=True)
class FramesConfig:
    default_count: int = 12
    min_count: int = 1
    max_count: int = 120


@dataclass(frozen=True)
class PlaybackConfig:
    default_fps: float = 12
    fps_options: Tuple[float, ...] = (3, 12, 24)
    tick_hz: float = 60        # host redraw rate of the playback loop


@dataclass(frozen=True)
class UndoConfig:
    max_states: int = 3


@dataclass(frozen=True)
class OverlayConfig:
    nearby_depth: int = 2                # previous frames shown as onion skin
    keyframe_color: str = "#facc15"
    keyframe_opacity: float = 0.5


@dataclass(frozen=True)
class ExportConfig:
    filename: str = "animation.gif"
    loop: int = 0              # 0 = loop forever
    colors: int = 256
    output_dir: str = "exports"


@dataclass(frozen=True)
class ApiConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ])


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    use_colors: bool = True


@dataclass(frozen=True)
class EditorConfig:
    """Complete editor configuration"""
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    frames: FramesConfig = field(default_factory=FramesConfig)
    playback: PlaybackConfig = field(default_factory=PlaybackConfig)
    undo: UndoConfig = field(default_factory=UndoConfig)
    overlay: OverlayConfig = field(default_factory=OverlayConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
