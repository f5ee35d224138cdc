"""
Config Manager

Loads config.yaml (with include: support) and builds a typed EditorConfig.
"""

import yaml
from dataclasses import fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from utils.logger import get_logger, LogLevel, LogCategory
from utils.colors import is_valid_css_color
from models.config import (
    ApiConfig,
    CanvasConfig,
    EditorConfig,
    ExportConfig,
    FramesConfig,
    LoggingConfig,
    OverlayConfig,
    PlaybackConfig,
    UndoConfig,
)

log = get_logger().for_category(LogCategory.CONFIG)


def _positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def _non_negative(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0


def _opacity(value: Any) -> bool:
    return _non_negative(value) and value <= 1


def _color(value: Any) -> bool:
    return isinstance(value, str) and is_valid_css_color(value)


# section -> field -> validator. Fields not listed are accepted as-is.
_VALIDATORS: Dict[str, Dict[str, Callable[[Any], bool]]] = {
    "canvas": {"width": _positive, "height": _positive, "background_color": _color},
    "frames": {"default_count": _positive, "min_count": _positive, "max_count": _positive},
    "playback": {"default_fps": _positive, "tick_hz": _positive},
    "undo": {"max_states": _positive},
    "overlay": {"nearby_depth": _non_negative, "keyframe_color": _color, "keyframe_opacity": _opacity},
    "export": {"loop": _non_negative, "colors": _positive},
    "api": {"port": _positive},
}

_SECTIONS = {
    "canvas": CanvasConfig,
    "frames": FramesConfig,
    "playback": PlaybackConfig,
    "undo": UndoConfig,
    "overlay": OverlayConfig,
    "export": ExportConfig,
    "api": ApiConfig,
    "logging": LoggingConfig,
}


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and merges any files listed under `include:`.
    Falls back to factory_defaults.yaml when the main file cannot be loaded.
    Invalid values are replaced by defaults with a warning.

    Example:
        config = ConfigManager()
        config.load()

        config.editor.playback.default_fps   # 12
        config.editor.frames.max_count       # 120
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Args:
            config_path: Path to main config.yaml (relative to src/, or absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.editor: EditorConfig = EditorConfig()

    def load(self) -> Dict[str, Any]:
        """
        Load YAML configuration

        Process:
        1. Load main config.yaml
        2. If it has an 'include:' list, load and merge those files
        3. Otherwise treat it as a monolithic config
        4. Fall back to factory_defaults.yaml on failure
        5. Build EditorConfig

        Returns:
            Merged config data dict
        """
        src_dir = Path(__file__).parent.parent
        try:
            full_path = src_dir / self.config_path
            main_config = self._read_yaml(full_path)

            if 'include' in main_config:
                log.info("Using include-based configuration")
                includes = main_config.pop('include') or []
                self.data = self._load_with_includes(includes, full_path.parent)
                # Keys in the main file override included ones
                self.data.update(main_config)
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except (OSError, yaml.YAMLError, ValueError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            try:
                self.data = self._read_yaml(src_dir / self.factory_defaults_path)
            except (OSError, yaml.YAMLError) as defaults_ex:
                log.error("Factory defaults unavailable, using built-in values", error=str(defaults_ex))
                self.data = {}

        self.editor = self.build_editor_config(self.data)
        return self.data

    def _read_yaml(self, path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{path.name}: top level must be a mapping")
        return data

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge YAML files from an include list (later files win)

        Args:
            include_list: Filenames relative to config_dir (e.g. ["editor.yaml", "api.yaml"])
            config_dir: Directory containing config files
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                file_data = self._read_yaml(filepath)
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise
            merged.update(file_data)
            log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))

        log.info("Config merge complete", total_keys=len(merged), keys=str(list(merged.keys())[:10]))
        return merged

    # ===== Typed config =====

    @classmethod
    def build_editor_config(cls, data: Dict[str, Any]) -> EditorConfig:
        """Build EditorConfig from raw data; unknown keys ignored, invalid values defaulted"""
        sections = {
            name: cls._build_section(name, section_cls, data.get(name))
            for name, section_cls in _SECTIONS.items()
        }
        editor = EditorConfig(**sections)

        frames = editor.frames
        if frames.min_count > frames.max_count:
            log.warn("frames.min_count > frames.max_count, using defaults")
            editor = EditorConfig(**{**sections, "frames": FramesConfig()})

        return editor

    @staticmethod
    def _build_section(name: str, section_cls: type, raw: Optional[Dict[str, Any]]):
        if raw is None:
            return section_cls()
        if not isinstance(raw, dict):
            log.warn(f"Section '{name}' must be a mapping, using defaults")
            return section_cls()

        known = {f.name for f in fields(section_cls)}
        validators = _VALIDATORS.get(name, {})
        values: Dict[str, Any] = {}

        for key, value in raw.items():
            if key not in known:
                log.debug(f"Ignoring unknown key {name}.{key}")
                continue
            check = validators.get(key)
            if check is not None and not check(value):
                log.warn(f"Invalid value for {name}.{key}, using default", value=value)
                continue
            values[key] = value

        if name == "playback" and "fps_options" in values:
            options = values["fps_options"]
            if isinstance(options, list) and options and all(_positive(o) for o in options):
                values["fps_options"] = tuple(options)
            else:
                log.warn("Invalid value for playback.fps_options, using default", value=options)
                del values["fps_options"]

        return section_cls(**values)

    @property
    def log_level(self) -> LogLevel:
        level = self.editor.logging.level.upper()
        if level == "WARNING":
            level = "WARN"
        try:
            return LogLevel[level]
        except KeyError:
            log.warn("Unknown logging.level, using INFO", value=self.editor.logging.level)
            return LogLevel.INFO
