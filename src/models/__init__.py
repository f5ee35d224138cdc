"""
Models package - Data models for the FlipFrame animation engine
"""

from .enums import PlaybackStatus, OverlayKind, ActionType, LogLevel, LogCategory
from .snapshot import BLANK_SNAPSHOT, DrawingData, Stroke, Point, is_blank
from .overlay import OverlayLayer

__all__ = [
    'PlaybackStatus',
    'OverlayKind',
    'ActionType',
    'LogLevel',
    'LogCategory',
    'BLANK_SNAPSHOT',
    'DrawingData',
    'Stroke',
    'Point',
    'is_blank',
    'OverlayLayer',
]
