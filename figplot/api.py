from __future__ import annotations

from figplot.canvas.types import Color
from figplot.figure import REFERENCE_DPI, FigSize, Figure, FigureFormat


DEFAULT_ASPECT_RATIO = 6.75 / 5.0


def figure(
    width: float | None = None,
    height: float | None = None,
    *,
    dpi: int = REFERENCE_DPI,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    face_color: Color = Color.WHITE,
) -> Figure:
    """Create a figure sized in inches; a missing dimension follows `aspect_ratio`."""
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None:
        if height is None:
            size = FigSize()
        elif height <= 0:
            raise ValueError("height must be > 0")
        else:
            size = FigSize(width=height * aspect_ratio, height=height)
    elif height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        size = FigSize(width=width, height=width / aspect_ratio)
    else:
        size = FigSize(width=width, height=height)
    return Figure(format=FigureFormat(size=size, dpi=dpi, face_color=face_color))
