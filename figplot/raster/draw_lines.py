from __future__ import annotations

import math
from typing import Iterator, Sequence

from PIL import Image, ImageDraw


DevicePoint = tuple[float, float]


def dash_segments(points: Sequence[DevicePoint], dashes: Sequence[float]) -> Iterator[list[DevicePoint]]:
    """Split a polyline into the runs a dash pattern leaves inked.

    The pattern alternates on/off lengths and continues across vertices.
    """
    if len(points) < 2:
        return
    pattern = [float(d) for d in dashes if d > 0]
    if not pattern:
        yield list(points)
        return

    index = 0
    remaining = pattern[0]
    inked = True
    current: list[DevicePoint] = [points[0]]
    for (ax, ay), (bx, by) in zip(points[:-1], points[1:]):
        seg_len = math.hypot(bx - ax, by - ay)
        pos = 0.0
        while seg_len - pos > remaining:
            pos += remaining
            t = pos / seg_len
            cut = (ax + (bx - ax) * t, ay + (by - ay) * t)
            if inked:
                current.append(cut)
                yield current
                current = []
            else:
                current = [cut]
            inked = not inked
            index = (index + 1) % len(pattern)
            remaining = pattern[index]
        remaining -= seg_len - pos
        if inked:
            current.append((bx, by))
    if inked and len(current) > 1:
        yield current


def polyline_mask(
    size: tuple[int, int],
    points: Sequence[DevicePoint],
    width: int,
    *,
    dashes: Sequence[float] = (),
    round_joins: bool = False,
) -> Image.Image:
    mask = Image.new("L", size, 0)
    if width <= 0:
        return mask
    draw = ImageDraw.Draw(mask)
    joint = "curve" if round_joins else None
    for run in dash_segments(points, dashes):
        draw.line(run, fill=255, width=width, joint=joint)
    return mask
