from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Sequence
import xml.etree.ElementTree as ET

from figplot.canvas.align import align_text
from figplot.canvas.base import Canvas
from figplot.canvas.types import (
    Area,
    CanvasDescriptor,
    Circle,
    Color,
    CurveDescriptor,
    FileFormat,
    FillDescriptor,
    FontSlant,
    FontWeight,
    LineDescriptor,
    Point,
    ShapeDescriptor,
    Size,
    Square,
    TextDescriptor,
)
from figplot.errors import BackendError
from figplot.raster.draw_text import text_extents


LOGGER = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
FONT_FAMILIES = {
    "Arial": "Arial, Helvetica, sans-serif",
    "Georgia": "Georgia, 'Times New Roman', serif",
}


def _num(value: float) -> str:
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _paint(element: ET.Element, prefix: str, color: Color) -> None:
    if color.transparent:
        element.set(prefix, "none")
        return
    element.set(prefix, color.to_hex())
    if color.a < 1.0:
        element.set(f"{prefix}-opacity", _num(color.a))


class SvgCanvas(Canvas):
    """Vector canvas building an SVG document with ElementTree; text is measured with Pillow."""

    def __init__(self, desc: CanvasDescriptor) -> None:
        if desc.size.width <= 0 or desc.size.height <= 0:
            raise ValueError(f"canvas size must be positive, got {desc.size}")
        self._size = desc.size
        self.root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "version": "1.1",
                "width": str(desc.size.width),
                "height": str(desc.size.height),
                "viewBox": f"0 0 {desc.size.width} {desc.size.height}",
            },
        )
        self._defs = ET.SubElement(self.root, "defs")
        self._clip_ids: dict[Area, str] = {}
        if not desc.face_color.transparent:
            background = ET.SubElement(
                self.root,
                "rect",
                {"x": "0", "y": "0", "width": str(desc.size.width), "height": str(desc.size.height)},
            )
            _paint(background, "fill", desc.face_color)

    @classmethod
    def create(cls, desc: CanvasDescriptor) -> "SvgCanvas":
        return cls(desc)

    def size(self) -> Size:
        return self._size

    def _xy(self, point: Point) -> tuple[str, str]:
        return (_num(point.x), _num(self._size.height - point.y))

    def _clip(self, element: ET.Element, clip_area: Area | None) -> None:
        if clip_area is None:
            return
        clip_id = self._clip_ids.get(clip_area)
        if clip_id is None:
            clip_id = f"clip{len(self._clip_ids)}"
            self._clip_ids[clip_area] = clip_id
            clip_path = ET.SubElement(self._defs, "clipPath", {"id": clip_id})
            ET.SubElement(
                clip_path,
                "rect",
                {
                    "x": str(clip_area.xmin),
                    "y": str(self._size.height - clip_area.ymax),
                    "width": str(clip_area.xsize()),
                    "height": str(clip_area.ysize()),
                },
            )
        element.set("clip-path", f"url(#{clip_id})")

    def _stroke(self, element: ET.Element, width: int, color: Color, dashes: Sequence[float]) -> None:
        _paint(element, "stroke", color)
        element.set("stroke-width", str(width))
        if dashes:
            element.set("stroke-dasharray", ",".join(_num(d) for d in dashes))

    def draw_shape(self, desc: ShapeDescriptor) -> None:
        cx, cy = self._xy(desc.point)
        shape = desc.shape
        if isinstance(shape, Circle):
            element = ET.SubElement(self.root, "circle", {"cx": cx, "cy": cy, "r": str(shape.r)})
        else:
            w, h = (shape.l, shape.l) if isinstance(shape, Square) else (shape.w, shape.h)
            x = desc.point.x - w / 2.0
            y = self._size.height - desc.point.y - h / 2.0
            element = ET.SubElement(
                self.root,
                "rect",
                {"x": _num(x), "y": _num(y), "width": str(w), "height": str(h)},
            )
        _paint(element, "fill", desc.fill_color)
        if desc.line_width > 0:
            self._stroke(element, desc.line_width, desc.line_color, desc.dashes)
        self._clip(element, desc.clip_area)

    def draw_line(self, desc: LineDescriptor) -> None:
        x1, y1 = self._xy(desc.p1)
        x2, y2 = self._xy(desc.p2)
        element = ET.SubElement(self.root, "line", {"x1": x1, "y1": y1, "x2": x2, "y2": y2})
        self._stroke(element, desc.line_width, desc.line_color, desc.dashes)
        self._clip(element, desc.clip_area)

    def draw_curve(self, desc: CurveDescriptor) -> None:
        if len(desc.points) < 2:
            return
        points = " ".join(",".join(self._xy(p)) for p in desc.points)
        element = ET.SubElement(
            self.root,
            "polyline",
            {"points": points, "fill": "none", "stroke-linejoin": "round"},
        )
        self._stroke(element, desc.line_width, desc.line_color, desc.dashes)
        self._clip(element, desc.clip_area)

    def fill_region(self, desc: FillDescriptor) -> None:
        if len(desc.points) < 3:
            return
        points = " ".join(",".join(self._xy(p)) for p in desc.points)
        element = ET.SubElement(self.root, "polygon", {"points": points})
        _paint(element, "fill", desc.fill_color)
        self._clip(element, desc.clip_area)

    def draw_text(self, desc: TextDescriptor) -> None:
        if not desc.text:
            return
        extents = text_extents(desc.text, desc.font)
        x, y = align_text(
            desc.position.x,
            self._size.height - desc.position.y,
            desc.rotation,
            extents,
            desc.alignment,
        )
        attrs = {
            "x": _num(x),
            "y": _num(y),
            "font-family": FONT_FAMILIES.get(desc.font.name.value, desc.font.name.value),
            "font-size": _num(desc.font.size),
        }
        if desc.font.weight is FontWeight.BOLD:
            attrs["font-weight"] = "bold"
        if desc.font.slant is not FontSlant.NORMAL:
            attrs["font-style"] = desc.font.slant.value
        if desc.rotation != 0.0:
            attrs["transform"] = f"rotate({_num(math.degrees(desc.rotation))} {_num(x)} {_num(y)})"
        element = ET.SubElement(self.root, "text", attrs)
        element.text = desc.text
        _paint(element, "fill", desc.color)
        self._clip(element, desc.clip_area)

    def text_size(self, desc: TextDescriptor) -> Size:
        extents = text_extents(desc.text, desc.font)
        return Size(width=int(math.ceil(extents.width)), height=int(math.ceil(extents.height)))

    def to_string(self) -> str:
        return ET.tostring(self.root, encoding="unicode")

    def save_file(self, path: str | Path, file_format: FileFormat, dpi: int) -> None:
        if file_format is not FileFormat.SVG:
            raise BackendError(f"svg canvas cannot write {file_format.value} output")
        LOGGER.debug("saving svg document of size %s to %s", self._size, path)
        try:
            ET.ElementTree(self.root).write(path, encoding="utf-8", xml_declaration=True)
        except OSError as exc:
            raise BackendError(f"failed to write {path}: {exc}") from exc
