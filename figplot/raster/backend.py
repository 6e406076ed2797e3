from __future__ import annotations

import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw

from figplot.canvas.align import align_text
from figplot.canvas.base import Canvas
from figplot.canvas.types import (
    CanvasDescriptor,
    CurveDescriptor,
    FileFormat,
    FillDescriptor,
    LineDescriptor,
    Point,
    ShapeDescriptor,
    Size,
    TextDescriptor,
)
from figplot.errors import BackendError
from figplot.raster.canvas import blend_mask, new_canvas
from figplot.raster.draw_lines import polyline_mask
from figplot.raster.draw_markers import shape_masks
from figplot.raster.draw_text import render_text_mask, text_extents


LOGGER = logging.getLogger(__name__)


class RasterCanvas(Canvas):
    """Bitmap canvas backed by an RGBA numpy buffer, with primitives rasterized by Pillow."""

    def __init__(self, desc: CanvasDescriptor) -> None:
        if desc.size.width <= 0 or desc.size.height <= 0:
            raise ValueError(f"canvas size must be positive, got {desc.size}")
        self._size = desc.size
        self.buffer = new_canvas(desc.size.width, desc.size.height, desc.face_color.to_rgba8())

    @classmethod
    def create(cls, desc: CanvasDescriptor) -> "RasterCanvas":
        return cls(desc)

    def size(self) -> Size:
        return self._size

    def _device(self, point: Point) -> tuple[float, float]:
        return (point.x, self._size.height - point.y)

    def _mask_size(self) -> tuple[int, int]:
        return (self._size.width, self._size.height)

    def draw_shape(self, desc: ShapeDescriptor) -> None:
        x, y = self._device(desc.point)
        fill, outline = shape_masks(self._mask_size(), x, y, desc.shape, desc.line_width)
        blend_mask(self.buffer, 0, 0, np.asarray(fill), desc.fill_color, clip_area=desc.clip_area)
        if desc.line_width > 0:
            blend_mask(self.buffer, 0, 0, np.asarray(outline), desc.line_color, clip_area=desc.clip_area)

    def draw_line(self, desc: LineDescriptor) -> None:
        points = [self._device(desc.p1), self._device(desc.p2)]
        mask = polyline_mask(self._mask_size(), points, desc.line_width, dashes=desc.dashes)
        blend_mask(self.buffer, 0, 0, np.asarray(mask), desc.line_color, clip_area=desc.clip_area)

    def draw_curve(self, desc: CurveDescriptor) -> None:
        points = [self._device(p) for p in desc.points]
        if len(points) < 2:
            return
        mask = polyline_mask(self._mask_size(), points, desc.line_width, dashes=desc.dashes, round_joins=True)
        blend_mask(self.buffer, 0, 0, np.asarray(mask), desc.line_color, clip_area=desc.clip_area)

    def fill_region(self, desc: FillDescriptor) -> None:
        points = [self._device(p) for p in desc.points]
        if len(points) < 3:
            return
        mask = Image.new("L", self._mask_size(), 0)
        ImageDraw.Draw(mask).polygon(points, fill=255)
        blend_mask(self.buffer, 0, 0, np.asarray(mask), desc.fill_color, clip_area=desc.clip_area)

    def draw_text(self, desc: TextDescriptor) -> None:
        if not desc.text:
            return
        extents = text_extents(desc.text, desc.font)
        x, y = self._device(desc.position)
        ox, oy = align_text(x, y, desc.rotation, extents, desc.alignment)
        mask, reach = render_text_mask(desc.text, desc.font, desc.rotation)
        blend_mask(
            self.buffer,
            int(round(ox)) - reach,
            int(round(oy)) - reach,
            mask,
            desc.color,
            clip_area=desc.clip_area,
        )

    def text_size(self, desc: TextDescriptor) -> Size:
        extents = text_extents(desc.text, desc.font)
        return Size(width=int(math.ceil(extents.width)), height=int(math.ceil(extents.height)))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.buffer)

    def save_file(self, path: str | Path, file_format: FileFormat, dpi: int) -> None:
        if file_format is FileFormat.SVG:
            raise BackendError("raster canvas cannot write svg output")
        image = self.to_image()
        if file_format is FileFormat.JPEG:
            image = image.convert("RGB")
        LOGGER.debug("saving %s image of size %s to %s", file_format.value, self._size, path)
        try:
            image.save(path, format=file_format.value.upper(), dpi=(dpi, dpi))
        except (OSError, ValueError) as exc:
            raise BackendError(f"failed to write {path}: {exc}") from exc
