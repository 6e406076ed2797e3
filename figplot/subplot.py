from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from figplot.adapters import normalize_series
from figplot.axes import AxisConfig, AxisSelector, AxisSlot, Grid, Limits
from figplot.canvas.types import Color, FontName
from figplot.errors import PlotDataError
from figplot.series import (
    FillData,
    FillInfo,
    LineFormat,
    MarkerFormat,
    PlotInfo,
    PlotOp,
    SeriesData,
    StepData,
    XYData,
)


class TickDirection(Enum):
    """Which side of the axis lines tick marks extend to."""

    INNER = "inner"
    OUTER = "outer"
    BOTH = "both"


DEFAULT_COLOR_CYCLE = (
    Color(0.271, 0.522, 0.533),  # blue
    Color(0.839, 0.365, 0.055),  # orange
    Color(0.596, 0.592, 0.102),  # green
    Color(0.694, 0.384, 0.525),  # purple
    Color(0.800, 0.141, 0.114),  # red
)


@dataclass(frozen=True)
class SubplotFormat:
    default_marker_color: Color = Color.BLACK
    default_fill_color: Color = Color(1.0, 0.0, 0.0, 0.5)
    plot_color: Color = Color.TRANSPARENT
    line_width: int = 2
    line_color: Color = Color.BLACK
    grid_color: Color = Color(0.75, 0.75, 0.75)
    font_name: FontName = FontName.ARIAL
    font_size: float = 20.0
    text_color: Color = Color.BLACK
    tick_length: int = 8
    tick_direction: TickDirection = TickDirection.INNER
    override_minor_tick_length: int | None = None
    color_cycle: tuple[Color, ...] = DEFAULT_COLOR_CYCLE

    @classmethod
    def dark(cls) -> "SubplotFormat":
        line_color = Color(0.659, 0.600, 0.518)
        return cls(
            default_marker_color=line_color,
            plot_color=Color(0.157, 0.157, 0.157),
            line_color=line_color,
            grid_color=Color(0.250, 0.250, 0.250),
            text_color=line_color,
        )

    def tick_lengths(self, scaling: float) -> tuple[int, int, int, int]:
        """(inner major, outer major, inner minor, outer minor) tick lengths in pixels."""
        mult = int(round(scaling))
        major = self.tick_length * mult
        if self.override_minor_tick_length is not None:
            minor = self.override_minor_tick_length * mult
        else:
            minor = major // 2
        inner = self.tick_direction in (TickDirection.INNER, TickDirection.BOTH)
        outer = self.tick_direction in (TickDirection.OUTER, TickDirection.BOTH)
        return (
            major if inner else 0,
            major if outer else 0,
            minor if inner else 0,
            minor if outer else 0,
        )


_AXIS_FIELDS = frozenset(f.name for f in fields(AxisConfig))


class Subplot:
    """A plot area with four axes and an ordered list of data to draw on it."""

    def __init__(
        self,
        *,
        title: str = "",
        format: SubplotFormat | None = None,
        axes: dict[AxisSlot, AxisConfig] | None = None,
    ) -> None:
        self.title = title
        self.format = format if format is not None else SubplotFormat()
        self.plot_ops: list[PlotOp] = []
        self._axes = {slot: AxisConfig.default() for slot in AxisSlot}
        if axes:
            for slot, config in axes.items():
                self._axes[slot] = replace(config)
                self._axes[slot].set_limits(config.limit_policy)

    def axis(self, slot: AxisSlot) -> AxisConfig:
        return self._axes[slot]

    @property
    def xaxis(self) -> AxisConfig:
        return self._axes[AxisSlot.X]

    @property
    def yaxis(self) -> AxisConfig:
        return self._axes[AxisSlot.Y]

    @property
    def secondary_xaxis(self) -> AxisConfig:
        return self._axes[AxisSlot.SECONDARY_X]

    @property
    def secondary_yaxis(self) -> AxisConfig:
        return self._axes[AxisSlot.SECONDARY_Y]

    def configure_axis(self, selector: AxisSelector | AxisSlot, **changes: Any) -> None:
        """Set AxisConfig fields on one or several axes, e.g. `label="time"`."""
        unknown = set(changes) - _AXIS_FIELDS
        if unknown:
            raise TypeError(f"unknown axis settings: {', '.join(sorted(unknown))}")
        limits = changes.pop("limit_policy", None)
        slots = (selector,) if isinstance(selector, AxisSlot) else selector.slots
        for slot in slots:
            config = self._axes[slot]
            for name, value in changes.items():
                setattr(config, name, value)
            if limits is not None:
                config.set_limits(limits)

    def set_limits(self, selector: AxisSelector | AxisSlot, limits: Limits) -> None:
        self.configure_axis(selector, limit_policy=limits)

    def standard_grid(self) -> None:
        """Major grid lines on the primary axes."""
        self.configure_axis(AxisSelector.X, grid=Grid.MAJOR)
        self.configure_axis(AxisSelector.Y, grid=Grid.MAJOR)

    def plot(
        self,
        xs: Any,
        ys: Any,
        *,
        line: LineFormat | None = LineFormat(),
        marker: MarkerFormat | None = None,
        xaxis: AxisSlot = AxisSlot.X,
        yaxis: AxisSlot = AxisSlot.Y,
        label: str = "",
        data: Any = None,
    ) -> None:
        """Plot y against x as a line and/or markers.

        `xs`/`ys` may be sequences, numpy arrays, pandas Series or torch tensors, or column
        names of the DataFrame passed as `data`. Invalid data raises PlotDataError and
        leaves the subplot unchanged.
        """
        x, y = normalize_series(xs, ys, labels=("x", "y"), data=data)
        self._add_series(XYData(x=x, y=y), line, marker, xaxis, yaxis, label, pixel_perfect=False)

    def step(
        self,
        edges: Any,
        ys: Any,
        *,
        line: LineFormat | None = LineFormat(),
        marker: MarkerFormat | None = None,
        xaxis: AxisSlot = AxisSlot.X,
        yaxis: AxisSlot = AxisSlot.Y,
        label: str = "",
        data: Any = None,
    ) -> None:
        """Plot a step function; there must be one more edge than y-value."""
        (y,) = normalize_series(ys, labels=("y",), data=data)
        (edge_arr,) = normalize_series(edges, labels=("edges",), data=data)
        if edge_arr.size != y.size + 1:
            raise PlotDataError(f"step data needs len(edges) == len(y) + 1, got {edge_arr.size} and {y.size}")
        self._add_series(StepData(edges=edge_arr, y=y), line, marker, xaxis, yaxis, label, pixel_perfect=True)

    def fill_between(
        self,
        xs: Any,
        top: Any,
        bottom: Any,
        *,
        color: Color | None = None,
        xaxis: AxisSlot = AxisSlot.X,
        yaxis: AxisSlot = AxisSlot.Y,
        label: str = "",
        data: Any = None,
    ) -> None:
        """Fill the region between the `top` and `bottom` curves."""
        _check_roles(xaxis, yaxis)
        x, top_arr, bottom_arr = normalize_series(xs, top, bottom, labels=("x", "top", "bottom"), data=data)
        fill = FillData(x=x, top=top_arr, bottom=bottom_arr)
        self._include(fill.bounds(), xaxis, yaxis)
        self.plot_ops.append(FillInfo(data=fill, color=color, xaxis=xaxis, yaxis=yaxis, label=label))

    def _add_series(
        self,
        series: SeriesData,
        line: LineFormat | None,
        marker: MarkerFormat | None,
        xaxis: AxisSlot,
        yaxis: AxisSlot,
        label: str,
        *,
        pixel_perfect: bool,
    ) -> None:
        _check_roles(xaxis, yaxis)
        self._include(series.bounds(), xaxis, yaxis)
        self.plot_ops.append(
            PlotInfo(
                data=series,
                line=line,
                marker=marker,
                xaxis=xaxis,
                yaxis=yaxis,
                pixel_perfect=pixel_perfect,
                label=label,
            )
        )

    def _include(self, bounds: tuple[float, float, float, float], xaxis: AxisSlot, yaxis: AxisSlot) -> None:
        xmin, xmax, ymin, ymax = bounds
        self._axes[xaxis].include(xmin, xmax)
        self._axes[yaxis].include(ymin, ymax)


def _check_roles(xaxis: AxisSlot, yaxis: AxisSlot) -> None:
    if not xaxis.is_x:
        raise ValueError(f"x-values must be plotted on an x-axis, got {xaxis.display_name}")
    if yaxis.is_x:
        raise ValueError(f"y-values must be plotted on a y-axis, got {yaxis.display_name}")
