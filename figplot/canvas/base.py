from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from figplot.canvas.types import (
    CanvasDescriptor,
    CurveDescriptor,
    FileFormat,
    FillDescriptor,
    ImageFormat,
    LineDescriptor,
    ShapeDescriptor,
    Size,
    TextDescriptor,
)


class Canvas(ABC):
    """Drawing surface the layout engine emits primitives to.

    Every coordinate handed to a canvas has y growing upward from the bottom edge;
    implementations flip to their native top-left origin.
    """

    @classmethod
    @abstractmethod
    def create(cls, desc: CanvasDescriptor) -> "Canvas":
        raise NotImplementedError

    @abstractmethod
    def draw_shape(self, desc: ShapeDescriptor) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_line(self, desc: LineDescriptor) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_curve(self, desc: CurveDescriptor) -> None:
        raise NotImplementedError

    @abstractmethod
    def fill_region(self, desc: FillDescriptor) -> None:
        raise NotImplementedError

    @abstractmethod
    def draw_text(self, desc: TextDescriptor) -> None:
        raise NotImplementedError

    @abstractmethod
    def text_size(self, desc: TextDescriptor) -> Size:
        raise NotImplementedError

    @abstractmethod
    def save_file(self, path: str | Path, file_format: FileFormat, dpi: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def size(self) -> Size:
        raise NotImplementedError


def create_canvas(desc: CanvasDescriptor) -> Canvas:
    """Build the bundled backend matching `desc.image_format`."""
    if desc.image_format is ImageFormat.SVG:
        from figplot.svg.backend import SvgCanvas

        return SvgCanvas.create(desc)
    from figplot.raster.backend import RasterCanvas

    return RasterCanvas.create(desc)
