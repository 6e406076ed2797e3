from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import math
from typing import Mapping, Sequence

from figplot.axes import AxisSlot
from figplot.canvas.base import Canvas
from figplot.canvas.types import Area, Font, Size, TextDescriptor
from figplot.errors import InvalidColumnError, InvalidRowError
from figplot.resolve import ResolvedAxis
from figplot.subplot import Subplot, SubplotFormat


LOGGER = logging.getLogger(__name__)

# tick labels on y-axes are given room for this many characters
Y_TICK_LABEL_CHARS = 5


@dataclass(frozen=True)
class FractionalArea:
    """Rectangle in figure-relative coordinates, each bound in [0, 1], y growing upward."""

    xmin: float = 0.0
    xmax: float = 1.0
    ymin: float = 0.0
    ymax: float = 1.0

    def valid(self) -> bool:
        bounds = (self.xmin, self.xmax, self.ymin, self.ymax)
        return all(0.0 <= v <= 1.0 for v in bounds) and self.xmin < self.xmax and self.ymin < self.ymax

    def to_area(self, size: Size) -> Area:
        return Area(
            xmin=int(math.ceil(self.xmin * size.width)),
            xmax=int(math.floor(self.xmax * size.width)),
            ymin=int(math.ceil(self.ymin * size.height)),
            ymax=int(math.floor(self.ymax * size.height)),
        )


class Layout(ABC):
    """Arrangement of subplots on a figure."""

    @abstractmethod
    def subplots(self) -> list[tuple[Subplot, FractionalArea]]:
        raise NotImplementedError


class SingleLayout(Layout):
    def __init__(self, subplot: Subplot) -> None:
        self.subplot = subplot

    def subplots(self) -> list[tuple[Subplot, FractionalArea]]:
        return [(self.subplot, FractionalArea())]


def grid_cell(row: int, col: int, nrows: int, ncols: int) -> FractionalArea:
    """Area of a grid cell; row 0 is the top row."""
    xextent = 1.0 / ncols
    yextent = 1.0 / nrows
    xmin = xextent * col
    ymin = yextent * (nrows - 1 - row)
    return FractionalArea(xmin=xmin, xmax=xmin + xextent, ymin=ymin, ymax=ymin + yextent)


class GridLayout(Layout):
    """Equally sized cells; only cells that were filled are drawn."""

    def __init__(self, nrows: int, ncols: int) -> None:
        if nrows <= 0 or ncols <= 0:
            raise ValueError(f"grid must have at least one row and column, got {nrows}x{ncols}")
        self.nrows = nrows
        self.ncols = ncols
        self._cells: dict[tuple[int, int], Subplot] = {}

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Subplot | None]]) -> "GridLayout":
        nrows = len(rows)
        ncols = max((len(row) for row in rows), default=0)
        layout = cls(nrows, ncols)
        for r, row in enumerate(rows):
            for c, subplot in enumerate(row):
                if subplot is not None:
                    layout.insert((r, c), subplot)
        return layout

    def insert(self, position: tuple[int, int], subplot: Subplot) -> None:
        row, col = position
        if not 0 <= row < self.nrows:
            raise InvalidRowError(row, self.nrows)
        if not 0 <= col < self.ncols:
            raise InvalidColumnError(col, self.ncols)
        self._cells[(row, col)] = subplot

    def subplots(self) -> list[tuple[Subplot, FractionalArea]]:
        return [
            (self._cells[key], grid_cell(key[0], key[1], self.nrows, self.ncols))
            for key in sorted(self._cells)
        ]


@dataclass
class AxisBuffers:
    """Pixel widths reserved on one side of a subplot, outermost last."""

    tick: int = 0
    tick_label: int = 0
    modifier: int = 0
    label: int = 0
    subplot: int = 0

    def content(self) -> int:
        return self.tick + self.tick_label + self.modifier + self.label


@dataclass(frozen=True)
class SubplotRegions:
    """Nested rectangles of one subplot, from its outer area in to the plot area."""

    area: Area
    label_boundary: Area
    modifier_boundary: Area
    tick_label_boundary: Area
    plot_area: Area
    title_boundary: int
    letter: Size
    buffer_offset: int
    buffers: Mapping[AxisSlot, AxisBuffers] = field(default_factory=dict)


def letter_size(canvas: Canvas, fmt: SubplotFormat, scaling: float) -> Size:
    """Size of a "0" at the subplot's font size, scaled for the figure dpi."""
    size = canvas.text_size(TextDescriptor(text="0", font=Font(name=fmt.font_name, size=fmt.font_size)))
    return Size(width=int(size.width * scaling), height=int(size.height * scaling))


def _shrink(area: Area, buffers: Mapping[AxisSlot, int]) -> Area:
    return Area(
        xmin=area.xmin + buffers[AxisSlot.Y],
        xmax=area.xmax - buffers[AxisSlot.SECONDARY_Y],
        ymin=area.ymin + buffers[AxisSlot.X],
        ymax=area.ymax - buffers[AxisSlot.SECONDARY_X],
    )


# the side whose modifier buffer holds each axis' "x10ⁿ + offset" text
_MODIFIER_SIDE = {
    AxisSlot.X: AxisSlot.X,
    AxisSlot.Y: AxisSlot.SECONDARY_X,
    AxisSlot.SECONDARY_Y: AxisSlot.SECONDARY_X,
}


def allocate_space(
    area: Area,
    axes: Mapping[AxisSlot, ResolvedAxis],
    letter: Size,
    outer_tick_lengths: tuple[int, int],
    title: str = "",
) -> SubplotRegions:
    """Carve a subplot area into label, modifier, tick-label, tick and plot regions.

    `outer_tick_lengths` is the (major, minor) length ticks reach outside the plot area.
    """
    buffer_offset = int(letter.height * 0.6)
    outer_major, outer_minor = outer_tick_lengths
    buffers = {slot: AxisBuffers() for slot in AxisSlot}

    for slot, axis in axes.items():
        buf = buffers[slot]
        if axis.major_ticks:
            buf.tick += outer_major
        elif axis.minor_ticks:
            buf.tick += outer_minor

        if axis.has_labels:
            text_size = letter.height if slot.is_x else Y_TICK_LABEL_CHARS * letter.width
            buf.tick_label += text_size + buffer_offset

        if axis.has_modifier and slot in _MODIFIER_SIDE:
            buffers[_MODIFIER_SIDE[slot]].modifier += letter.height * 2 // 3 + buffer_offset

        if axis.label:
            buf.label += letter.height + buffer_offset

    for buf in buffers.values():
        buf.subplot = letter.width if buf.content() < 2 * letter.width else buffer_offset

    title_buffer = letter.height + buffer_offset if title else 0
    title_boundary = area.ymax - buffers[AxisSlot.SECONDARY_X].subplot - title_buffer

    label_boundary = Area(
        xmin=area.xmin + buffers[AxisSlot.Y].subplot + buffers[AxisSlot.Y].label,
        xmax=area.xmax - buffers[AxisSlot.SECONDARY_Y].subplot - buffers[AxisSlot.SECONDARY_Y].label,
        ymin=area.ymin + buffers[AxisSlot.X].subplot + buffers[AxisSlot.X].label,
        ymax=title_boundary - buffers[AxisSlot.SECONDARY_X].label,
    )
    modifier_boundary = _shrink(label_boundary, {slot: b.modifier for slot, b in buffers.items()})
    tick_label_boundary = _shrink(modifier_boundary, {slot: b.tick_label for slot, b in buffers.items()})
    plot_area = _shrink(tick_label_boundary, {slot: b.tick for slot, b in buffers.items()})

    if plot_area.xsize() <= 0 or plot_area.ysize() <= 0:
        LOGGER.warning("subplot area %s leaves no room for the plot area (%s)", area, plot_area)

    return SubplotRegions(
        area=area,
        label_boundary=label_boundary,
        modifier_boundary=modifier_boundary,
        tick_label_boundary=tick_label_boundary,
        plot_area=plot_area,
        title_boundary=title_boundary,
        letter=letter,
        buffer_offset=buffer_offset,
        buffers=buffers,
    )
