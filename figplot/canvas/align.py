from __future__ import annotations

from dataclasses import dataclass
import math

from figplot.canvas.types import Alignment


@dataclass(frozen=True)
class TextExtents:
    """Ink box of a string relative to its baseline origin, in y-down device units."""

    x_bearing: float
    y_bearing: float
    width: float
    height: float


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def align_text(
    x: float,
    y: float,
    rotation: float,
    extents: TextExtents,
    alignment: Alignment,
) -> tuple[float, float]:
    """Return the baseline origin (y-down device space) that puts `alignment` of the
    rotated ink box at (x, y).

    `rotation` is in radians and turns clockwise on screen, so 1.5 * pi reads bottom to top.
    """
    cos = math.cos(rotation)
    sin = math.sin(rotation)
    xb = extents.x_bearing
    yb = extents.y_bearing
    w = extents.width
    h = extents.height

    # horizontal centers shared by the center/top/bottom anchors
    cx = x - (xb + w / 2.0) * cos + (yb + h / 2.0) * sin
    # vertical centers shared by the center/left/right anchors
    cy = y - (yb + h / 2.0) * cos - (xb + w / 2.0) * sin

    if alignment is Alignment.CENTER:
        return (cx, cy)
    if alignment is Alignment.RIGHT:
        return (x - xb * cos - w * _clamp(cos, 0.0, 1.0) + yb * _clamp(sin, 0.0, 1.0), cy)
    if alignment is Alignment.LEFT:
        return (x - xb * cos - w * _clamp(cos, -1.0, 0.0) + yb * sin + h * _clamp(sin, 0.0, 1.0), cy)
    if alignment is Alignment.TOP:
        return (
            cx,
            y - yb * cos - xb * sin - w * _clamp(sin, -1.0, 0.0) - h * _clamp(cos, -1.0, 0.0),
        )
    if alignment is Alignment.BOTTOM:
        return (
            cx,
            y - yb * cos - h * _clamp(cos, 0.0, 1.0) - xb * sin - w * _clamp(sin, 0.0, 1.0),
        )

    left_x = x - xb * cos - w * _clamp(cos, -1.0, 0.0) + yb * sin + h * _clamp(sin, 0.0, 1.0)
    right_x = x - xb * cos - w * _clamp(cos, 0.0, 1.0) + yb * sin + h * _clamp(sin, -1.0, 0.0)
    top_y = y - yb * cos - h * _clamp(cos, -1.0, 0.0)
    bottom_y = y - yb * cos - h * _clamp(cos, 0.0, 1.0)
    if alignment is Alignment.TOP_RIGHT:
        return (right_x, top_y - xb * sin - w * _clamp(sin, -1.0, 0.0))
    if alignment is Alignment.TOP_LEFT:
        return (left_x, top_y + xb * sin - w * _clamp(sin, -1.0, 0.0))
    if alignment is Alignment.BOTTOM_RIGHT:
        return (right_x, bottom_y + xb * sin - w * _clamp(sin, 0.0, 1.0))
    return (left_x, bottom_y + xb * sin - w * _clamp(sin, 0.0, 1.0))
