from __future__ import annotations

import numpy as np

from figplot.canvas.types import Area, Color


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def clip_bounds(dst: np.ndarray, clip_area: Area | None) -> tuple[int, int, int, int]:
    """Device-space (x0, y0, x1, y1) window of `dst` a y-up clip area allows drawing in."""
    height, width = dst.shape[:2]
    if clip_area is None:
        return (0, 0, width, height)
    x0 = max(0, clip_area.xmin)
    x1 = min(width, clip_area.xmax)
    y0 = max(0, height - clip_area.ymax)
    y1 = min(height, height - clip_area.ymin)
    return (x0, y0, max(x0, x1), max(y0, y1))


def blend_mask(
    dst: np.ndarray,
    x: int,
    y: int,
    mask: np.ndarray,
    color: Color,
    *,
    clip_area: Area | None = None,
) -> None:
    """Composite `color` over `dst` with per-pixel coverage `mask` placed at device (x, y)."""
    h, w = mask.shape
    if h <= 0 or w <= 0 or color.transparent:
        return

    cx0, cy0, cx1, cy1 = clip_bounds(dst, clip_area)
    x0 = max(cx0, x)
    y0 = max(cy0, y)
    x1 = min(cx1, x + w)
    y1 = min(cy1, y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    rgba = color.to_rgba8()
    src_alpha = (rgba[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0

    src_rgb = np.asarray(rgba[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(np.rint(out_alpha * 255.0), 0, 255).astype(np.uint8)
