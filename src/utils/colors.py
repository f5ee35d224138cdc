"""
Color conversion utilities

Pure functions for turning drawing-surface color strings into RGB tuples.
Stroke and background colors arrive as CSS strings ("#444", "#ffffff",
"rgb(0, 0, 0)", "rgba(255, 0, 0, 0.5)", "black").
"""

from typing import Optional, Tuple

from PIL import ImageColor

RGB = Tuple[int, int, int]


def parse_css_color(value: Optional[str], fallback: RGB = (0, 0, 0)) -> RGB:
    """
    Convert a CSS color string to RGB (0-255)

    Alpha is dropped; GIF frames are opaque.

    Args:
        value: CSS color string (hex, rgb(), rgba(), hsl(), named)
        fallback: Returned when value is empty or unparseable

    Returns:
        (r, g, b) tuple with values 0-255

    Example:
        parse_css_color("#444")              # (68, 68, 68)
        parse_css_color("rgba(255,0,0,0.5)") # (255, 0, 0)
        parse_css_color("nope", (1, 2, 3))   # (1, 2, 3)
    """
    if not value:
        return fallback
    try:
        color = ImageColor.getrgb(value.strip())
    except (ValueError, AttributeError):
        return fallback
    return (color[0], color[1], color[2])


def is_valid_css_color(value: Optional[str]) -> bool:
    """True if value can be parsed as a CSS color"""
    if not value:
        return False
    try:
        ImageColor.getrgb(value.strip())
    except (ValueError, AttributeError):
        return False
    return True
