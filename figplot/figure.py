from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path

import numpy as np

from figplot.canvas.base import Canvas, create_canvas
from figplot.canvas.types import Area, CanvasDescriptor, Color, FileFormat, ImageFormat, Size
from figplot.errors import BackendError, InvalidIndexError, InvalidSubplotAreaError
from figplot.layout import FractionalArea, GridLayout, Layout, grid_cell
from figplot.render import SubplotLayout, draw_subplot
from figplot.subplot import Subplot


LOGGER = logging.getLogger(__name__)

REFERENCE_DPI = 100


@dataclass(frozen=True)
class FigSize:
    """Figure size in inches."""

    width: float = 6.75
    height: float = 5.0


@dataclass(frozen=True)
class FigureFormat:
    size: FigSize = field(default_factory=FigSize)
    dpi: int = REFERENCE_DPI
    face_color: Color = Color.WHITE

    def __post_init__(self) -> None:
        if self.size.width <= 0 or self.size.height <= 0:
            raise ValueError(f"figure size must be > 0, got {self.size}")
        if self.dpi <= 0:
            raise ValueError(f"dpi must be > 0, got {self.dpi}")


@dataclass
class Figure:
    """A canvas-independent figure: subplots placed on fractional areas of the page."""

    format: FigureFormat = field(default_factory=FigureFormat)
    _subplots: list[Subplot] = field(default_factory=list)
    _areas: list[FractionalArea] = field(default_factory=list)

    @property
    def scaling(self) -> float:
        return self.format.dpi / REFERENCE_DPI

    @property
    def dpi(self) -> int:
        return self.format.dpi

    def size(self) -> Size:
        return Size(
            width=int(math.floor(self.format.size.width * self.format.dpi)),
            height=int(math.floor(self.format.size.height * self.format.dpi)),
        )

    @property
    def subplots(self) -> list[Subplot]:
        return list(self._subplots)

    def subplot_areas(self, size: Size | None = None) -> list[Area]:
        size = size if size is not None else self.size()
        return [frac.to_area(size) for frac in self._areas]

    def set_layout(self, layout: Layout) -> None:
        """Add every subplot of `layout`; all areas are checked before any is added."""
        placed = layout.subplots()
        for _, area in placed:
            if not area.valid():
                raise InvalidSubplotAreaError(area)
        for subplot, area in placed:
            self._subplots.append(subplot)
            self._areas.append(area)

    def add_subplot(self, position: tuple[int, int, int], subplot: Subplot | None = None) -> Subplot:
        """Place a subplot in cell `index` (1-based, row-major) of an `nrows` x `ncols` grid."""
        nrows, ncols, index = position
        if nrows <= 0 or ncols <= 0:
            raise ValueError(f"grid must have at least one row and column, got {nrows}x{ncols}")
        if not 1 <= index <= nrows * ncols:
            raise InvalidIndexError(index, nrows, ncols)
        subplot = subplot if subplot is not None else Subplot()
        row, col = divmod(index - 1, ncols)
        self._subplots.append(subplot)
        self._areas.append(grid_cell(row, col, nrows, ncols))
        return subplot

    def add_grid(self, nrows: int, ncols: int) -> list[Subplot]:
        """Fill an `nrows` x `ncols` grid with new subplots, returned row-major."""
        layout = GridLayout(nrows, ncols)
        created = []
        for row in range(nrows):
            for col in range(ncols):
                subplot = Subplot()
                layout.insert((row, col), subplot)
                created.append(subplot)
        self.set_layout(layout)
        return created

    def draw_to_backend(self, canvas: Canvas) -> list[SubplotLayout]:
        """Draw every subplot onto an existing canvas, sized by the canvas."""
        try:
            size = canvas.size()
        except Exception as exc:
            raise BackendError(f"canvas failed to report its size: {exc}") from exc
        LOGGER.debug("drawing %d subplots onto %s canvas of size %s", len(self._subplots), type(canvas).__name__, size)
        return [
            draw_subplot(canvas, subplot, area, self.scaling)
            for subplot, area in zip(self._subplots, self.subplot_areas(size))
        ]

    def to_canvas(self, image_format: ImageFormat = ImageFormat.BITMAP) -> Canvas:
        canvas = create_canvas(
            CanvasDescriptor(size=self.size(), face_color=self.format.face_color, image_format=image_format)
        )
        self.draw_to_backend(canvas)
        return canvas

    def to_rgba(self) -> np.ndarray:
        """Rasterize the figure into an (height, width, 4) uint8 array."""
        return self.to_canvas(ImageFormat.BITMAP).buffer

    def draw_file(self, path: str | Path, format: FileFormat | None = None) -> None:
        """Render and save the figure; the format defaults to the one named by the suffix."""
        path = Path(path)
        file_format = format if format is not None else FileFormat.from_suffix(path.suffix)
        canvas = self.to_canvas(ImageFormat.for_file(file_format))
        canvas.save_file(path, file_format, self.format.dpi)
        LOGGER.debug("wrote %s", path)
