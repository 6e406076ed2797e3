from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

import numpy as np

from figplot.axes import AxisSlot
from figplot.canvas.types import Color


Bounds = tuple[float, float, float, float]


@dataclass(frozen=True, eq=False)
class XYData:
    x: np.ndarray
    y: np.ndarray

    def points(self) -> Iterator[tuple[float, float]]:
        return zip(self.x.tolist(), self.y.tolist())

    def bounds(self) -> Bounds:
        return (float(self.x.min()), float(self.x.max()), float(self.y.min()), float(self.y.max()))


@dataclass(frozen=True, eq=False)
class StepData:
    """Piecewise-constant data: `y[i]` holds between `edges[i]` and `edges[i + 1]`."""

    edges: np.ndarray
    y: np.ndarray

    def points(self) -> Iterator[tuple[float, float]]:
        for i, value in enumerate(self.y.tolist()):
            yield (float(self.edges[i]), value)
            yield (float(self.edges[i + 1]), value)

    def bounds(self) -> Bounds:
        return (
            float(self.edges.min()),
            float(self.edges.max()),
            float(self.y.min()),
            float(self.y.max()),
        )


@dataclass(frozen=True, eq=False)
class FillData:
    """Region between two curves sharing the same x-values."""

    x: np.ndarray
    top: np.ndarray
    bottom: np.ndarray

    def points(self) -> Iterator[tuple[float, float]]:
        return self.outline()

    def outline(self) -> Iterator[tuple[float, float]]:
        """Closed polygon: the top curve forward, then the bottom curve backward."""
        xs = self.x.tolist()
        yield from zip(xs, self.top.tolist())
        yield from zip(reversed(xs), reversed(self.bottom.tolist()))

    def bounds(self) -> Bounds:
        return (
            float(self.x.min()),
            float(self.x.max()),
            float(min(self.top.min(), self.bottom.min())),
            float(max(self.top.max(), self.bottom.max())),
        )


SeriesData = XYData | StepData


class LineStyle(Enum):
    SOLID = "solid"
    DASHED = "dashed"
    SHORT_DASHED = "short_dashed"

    def dashes(self, scaling: float) -> list[float]:
        if self is LineStyle.DASHED:
            return [10.0 * scaling] * 4
        if self is LineStyle.SHORT_DASHED:
            return [4.0 * scaling] * 4
        return []


class MarkerStyle(Enum):
    CIRCLE = "circle"
    SQUARE = "square"


@dataclass(frozen=True)
class LineFormat:
    style: LineStyle = LineStyle.SOLID
    width: int = 3
    color: Color | None = None


@dataclass(frozen=True)
class MarkerFormat:
    style: MarkerStyle = MarkerStyle.CIRCLE
    size: int = 3
    color: Color | None = None
    outline: bool = False
    outline_format: LineFormat = field(default_factory=lambda: LineFormat(width=2))


@dataclass(frozen=True, eq=False)
class PlotInfo:
    """A line and/or marker series. `label` is kept for legends and is not drawn."""

    data: SeriesData
    line: LineFormat | None = field(default_factory=LineFormat)
    marker: MarkerFormat | None = None
    xaxis: AxisSlot = AxisSlot.X
    yaxis: AxisSlot = AxisSlot.Y
    pixel_perfect: bool = False
    label: str = ""

    def uses(self, slot: AxisSlot) -> bool:
        return slot in (self.xaxis, self.yaxis)


@dataclass(frozen=True, eq=False)
class FillInfo:
    """A filled band between two curves. `label` is kept for legends and is not drawn."""

    data: FillData
    color: Color | None = None
    xaxis: AxisSlot = AxisSlot.X
    yaxis: AxisSlot = AxisSlot.Y
    label: str = ""

    def uses(self, slot: AxisSlot) -> bool:
        return slot in (self.xaxis, self.yaxis)


PlotOp = PlotInfo | FillInfo
