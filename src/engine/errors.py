"""
Engine exceptions

Contract violations (navigation, frame count) and export failures are raised
to the caller. Snapshot parse failures are raised by the codec parser and
caught on render paths, where they degrade to the original/blank content.
"""

from typing import Optional


class AnimationEngineError(Exception):
    """Base class for all engine errors"""


class FrameIndexError(AnimationEngineError, IndexError):
    """Frame index outside [0, len(frames))"""

    def __init__(self, index: int, frame_count: int):
        self.index = index
        self.frame_count = frame_count
        super().__init__(f"Frame index {index} out of range (0..{frame_count - 1})")


class FrameCountError(AnimationEngineError, ValueError):
    """Requested frame count is not a positive integer"""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Frame count must be >= 1, got {count}")


class PlaybackActiveError(AnimationEngineError):
    """Operation disabled while playback is running"""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation} while playing")


class SnapshotParseError(AnimationEngineError, ValueError):
    """Snapshot text is not valid drawing save data"""


class ExportError(AnimationEngineError):
    """Base class for export pipeline failures"""


class NothingToExportError(ExportError):
    """Every frame is blank"""

    def __init__(self):
        super().__init__("No frames to export")


class AlreadyExportingError(ExportError):
    """An export is already in flight"""

    def __init__(self):
        super().__init__("Export already in progress")


class RasterizationError(ExportError):
    """A frame could not be rendered to pixels"""

    def __init__(self, position: int, cause: Optional[BaseException] = None):
        self.position = position
        super().__init__(f"Failed to rasterize export frame {position}: {cause}")


class EncoderError(ExportError):
    """The animated-image encoder failed"""


class InvalidFpsError(AnimationEngineError, ValueError):
    """Playback rate must be positive"""

    def __init__(self, fps: float):
        self.fps = fps
        super().__init__(f"FPS must be > 0, got {fps}")
