from __future__ import annotations

from PIL import Image, ImageDraw

from figplot.canvas.types import Circle, Shape, Square


def _box(x: float, y: float, shape: Shape) -> tuple[float, float, float, float]:
    if isinstance(shape, Circle):
        return (x - shape.r, y - shape.r, x + shape.r, y + shape.r)
    if isinstance(shape, Square):
        half = shape.l / 2.0
        return (x - half, y - half, x + half, y + half)
    return (x - shape.w / 2.0, y - shape.h / 2.0, x + shape.w / 2.0, y + shape.h / 2.0)


def shape_masks(
    size: tuple[int, int],
    x: float,
    y: float,
    shape: Shape,
    line_width: int,
) -> tuple[Image.Image, Image.Image]:
    """Return (fill, outline) coverage masks for a shape centered at device (x, y)."""
    fill = Image.new("L", size, 0)
    outline = Image.new("L", size, 0)
    box = _box(x, y, shape)
    if box[2] < box[0] or box[3] < box[1]:
        return fill, outline

    fill_draw = ImageDraw.Draw(fill)
    outline_draw = ImageDraw.Draw(outline)
    if isinstance(shape, Circle):
        fill_draw.ellipse(box, fill=255)
        if line_width > 0:
            outline_draw.ellipse(box, outline=255, width=line_width)
    else:
        fill_draw.rectangle(box, fill=255)
        if line_width > 0:
            outline_draw.rectangle(box, outline=255, width=line_width)
    return fill, outline
