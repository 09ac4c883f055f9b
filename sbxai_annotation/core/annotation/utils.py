"""
Pure utility functions for annotation logic.

These functions have no side effects and can be tested in isolation.
"""

from typing import List, Tuple

import numpy as np

from .state import Point

SCALE_MIN = 0.1
SCALE_MAX = 3.0


def screen_to_image(x: float, y: float, scale: float) -> Point:
    """
    Convert canvas-relative screen coordinates to image pixels.

    Args:
        x: Horizontal offset from the canvas' left edge
        y: Vertical offset from the canvas' top edge
        scale: Current zoom factor

    Returns:
        Point in unscaled image coordinates
    """
    return Point(x=x / scale, y=y / scale)


def clamp_scale(scale: float, lo: float = SCALE_MIN, hi: float = SCALE_MAX) -> float:
    """
    Clamp a zoom factor into ``[lo, hi]``.

    The result is rounded to 10 decimals so repeated ``+0.1`` steps land on
    the values a user would expect (1.2, not 1.2000000000000002).
    """
    return round(min(hi, max(lo, scale)), 10)


def hex_to_bgr(color: str) -> Tuple[int, int, int]:
    """
    Parse ``#RRGGBB`` (or ``#RGB``) into an OpenCV BGR tuple.

    Raises:
        ValueError: If the string is not a hex colour
    """
    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return (b, g, r)


def canvas_size(width: int, height: int, scale: float) -> Tuple[int, int]:
    """Pixel size (width, height) of the canvas for an image at ``scale``."""
    return max(1, int(round(width * scale))), max(1, int(round(height * scale)))


def grid_lines(extent: int, step: float) -> List[int]:
    """Positions of grid lines from 0 up to (excluding) ``extent``."""
    if step <= 0:
        return []
    return [int(round(v)) for v in np.arange(0, extent, step)]

