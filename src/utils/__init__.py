"""
Utility functions for FlipFrame
"""

from .colors import (
    parse_css_color,
    is_valid_css_color,
)

__all__ = [
    'parse_css_color',
    'is_valid_css_color',
]
