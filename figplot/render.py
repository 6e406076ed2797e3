from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from figplot.axes import AxisSlot
from figplot.canvas.base import Canvas
from figplot.canvas.types import (
    Alignment,
    Area,
    Circle,
    Color,
    CurveDescriptor,
    FillDescriptor,
    Font,
    LineDescriptor,
    Point,
    Rectangle,
    ShapeDescriptor,
    Square,
    TextDescriptor,
    scale_shape,
)
from figplot.errors import BackendError, PlotError
from figplot.layout import SubplotRegions, allocate_space, letter_size
from figplot.resolve import ResolvedAxis, resolve_axes
from figplot.series import FillInfo, MarkerStyle, PlotInfo
from figplot.subplot import Subplot
from figplot.ticks import modifier_text
from figplot.transform import map_points, tick_pixel


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubplotLayout:
    """Result of the layout pass for one subplot: resolved axes and pixel regions."""

    axes: dict[AxisSlot, ResolvedAxis]
    regions: SubplotRegions
    scaling: float
    line_width: int
    font: Font
    tick_lengths: tuple[int, int, int, int]

    @property
    def plot_area(self) -> Area:
        return self.regions.plot_area


def layout_subplot(canvas: Canvas, subplot: Subplot, area: Area, scaling: float) -> SubplotLayout:
    fmt = subplot.format
    mult = int(round(scaling))
    tick_lengths = fmt.tick_lengths(scaling)
    axes = resolve_axes(subplot)
    letter = letter_size(canvas, fmt, scaling)
    regions = allocate_space(
        area,
        axes,
        letter,
        outer_tick_lengths=(tick_lengths[1], tick_lengths[3]),
        title=subplot.title,
    )
    LOGGER.debug(
        "subplot layout: area=%s plot_area=%s letter=%s buffer_offset=%d",
        area,
        regions.plot_area,
        letter,
        regions.buffer_offset,
    )
    return SubplotLayout(
        axes=axes,
        regions=regions,
        scaling=scaling,
        line_width=fmt.line_width * mult,
        font=Font(name=fmt.font_name, size=fmt.font_size * scaling),
        tick_lengths=tick_lengths,
    )


def draw_subplot(canvas: Canvas, subplot: Subplot, area: Area, scaling: float) -> SubplotLayout:
    """Lay out a subplot and emit its primitives to `canvas`.

    Draw order: plot background, grid lines, plot ops in insertion order, then per axis the
    axis line, modifier text, axis label, ticks and tick labels, and finally the title.

    Any failure raised by the canvas is reported as `BackendError`; `PlotError`s pass through.
    """
    try:
        layout = layout_subplot(canvas, subplot, area, scaling)
        _draw_background(canvas, subplot, layout)
        _draw_grid(canvas, subplot, layout)
        _draw_plot_ops(canvas, subplot, layout)
        for axis in layout.axes.values():
            _draw_axis(canvas, subplot, layout, axis)
        _draw_title(canvas, subplot, layout)
    except PlotError:
        raise
    except Exception as exc:
        LOGGER.error("canvas %s failed while drawing subplot: %s", type(canvas).__name__, exc)
        raise BackendError(f"canvas failed while drawing subplot: {exc}") from exc
    return layout


def _draw_background(canvas: Canvas, subplot: Subplot, layout: SubplotLayout) -> None:
    plot = layout.plot_area
    canvas.draw_shape(
        ShapeDescriptor(
            point=plot.center(),
            shape=Rectangle(h=plot.ysize(), w=plot.xsize()),
            fill_color=subplot.format.plot_color,
            line_width=0,
            line_color=Color.TRANSPARENT,
        )
    )


def _draw_grid(canvas: Canvas, subplot: Subplot, layout: SubplotLayout) -> None:
    plot = layout.plot_area
    for slot, axis in layout.axes.items():
        for ticks, enabled in ((axis.major_ticks, axis.major_grid), (axis.minor_ticks, axis.minor_grid)):
            if not enabled:
                continue
            for tick in ticks:
                loc = tick_pixel(tick, axis.limits, plot, slot.is_x)
                if slot.is_x:
                    p1, p2 = Point(loc, plot.ymin), Point(loc, plot.ymax)
                else:
                    p1, p2 = Point(plot.xmin, loc), Point(plot.xmax, loc)
                canvas.draw_line(
                    LineDescriptor(
                        p1=p1,
                        p2=p2,
                        line_width=layout.line_width,
                        line_color=subplot.format.grid_color,
                    )
                )


def _series_color(subplot: Subplot, index: int) -> Color:
    colors = subplot.format.color_cycle
    if not colors:
        return subplot.format.default_marker_color
    return colors[index % len(colors)]


def _fill_color(subplot: Subplot, index: int) -> Color:
    colors = subplot.format.color_cycle
    if not colors:
        return subplot.format.default_fill_color
    return colors[index % len(colors)].with_alpha(0.5)


def _draw_plot_ops(canvas: Canvas, subplot: Subplot, layout: SubplotLayout) -> None:
    # the counters advance only when an op takes its color from the cycle
    series_index = 0
    fill_index = 0
    for op in subplot.plot_ops:
        if isinstance(op, FillInfo):
            color = op.color
            if color is None:
                color = _fill_color(subplot, fill_index)
                fill_index += 1
            _draw_fill(canvas, layout, op, color)
        else:
            needs_default = (op.line is not None and op.line.color is None) or (
                op.marker is not None and op.marker.color is None
            )
            color = None
            if needs_default:
                color = _series_color(subplot, series_index)
                series_index += 1
            _draw_series(canvas, layout, op, color)


def _draw_series(canvas: Canvas, layout: SubplotLayout, info: PlotInfo, default_color: Color | None) -> None:
    xlimits = layout.axes[info.xaxis].limits
    ylimits = layout.axes[info.yaxis].limits
    plot = layout.plot_area
    points = map_points(info.data.points(), xlimits, ylimits, plot, info.pixel_perfect)
    mult = int(round(layout.scaling))

    if info.line is not None:
        line = info.line
        canvas.draw_curve(
            CurveDescriptor(
                points=points,
                line_width=line.width * mult,
                line_color=line.color if line.color is not None else default_color,
                dashes=line.style.dashes(layout.scaling),
                clip_area=plot,
            )
        )

    if info.marker is not None:
        marker = info.marker
        if marker.style is MarkerStyle.CIRCLE:
            shape = scale_shape(Circle(r=marker.size), mult)
        else:
            shape = scale_shape(Square(l=marker.size), mult)
        fill_color = marker.color if marker.color is not None else default_color
        if marker.outline:
            outline = marker.outline_format
            outline_color = outline.color if outline.color is not None else fill_color
            outline_width = outline.width * mult
            outline_dashes = outline.style.dashes(layout.scaling)
        else:
            outline_color = Color.TRANSPARENT
            outline_width = 0
            outline_dashes = []
        for point in points:
            canvas.draw_shape(
                ShapeDescriptor(
                    point=point,
                    shape=shape,
                    fill_color=fill_color,
                    line_width=outline_width,
                    line_color=outline_color,
                    dashes=outline_dashes,
                    clip_area=plot,
                )
            )


def _draw_fill(canvas: Canvas, layout: SubplotLayout, info: FillInfo, color: Color) -> None:
    xlimits = layout.axes[info.xaxis].limits
    ylimits = layout.axes[info.yaxis].limits
    canvas.fill_region(
        FillDescriptor(
            points=map_points(info.data.outline(), xlimits, ylimits, layout.plot_area),
            fill_color=color,
            clip_area=layout.plot_area,
        )
    )


def _axis_line(slot: AxisSlot, plot: Area, offset: float) -> tuple[Point, Point]:
    if slot is AxisSlot.Y:
        return Point(plot.xmin, plot.ymin + offset), Point(plot.xmin, plot.ymax + offset)
    if slot is AxisSlot.SECONDARY_Y:
        return Point(plot.xmax, plot.ymin + offset), Point(plot.xmax, plot.ymax - offset)
    if slot is AxisSlot.X:
        return Point(plot.xmin - offset, plot.ymin), Point(plot.xmax + offset, plot.ymin)
    return Point(plot.xmin + offset, plot.ymax), Point(plot.xmax + offset, plot.ymax)


def _modifier_anchor(slot: AxisSlot, layout: SubplotLayout) -> tuple[Point, Alignment]:
    regions = layout.regions
    plot = regions.plot_area
    half_letter = regions.letter.width / 2.0
    if slot is AxisSlot.Y:
        return Point(plot.xmin - half_letter, regions.modifier_boundary.ymax), Alignment.BOTTOM_LEFT
    if slot is AxisSlot.SECONDARY_Y:
        return Point(plot.xmax - half_letter, regions.modifier_boundary.ymax), Alignment.BOTTOM_LEFT
    if slot is AxisSlot.SECONDARY_X:
        return (
            Point(regions.tick_label_boundary.xmax + regions.letter.width, regions.tick_label_boundary.ymax),
            Alignment.BOTTOM_LEFT,
        )
    return Point(plot.xmax, regions.modifier_boundary.ymin), Alignment.TOP_RIGHT


def _label_anchor(slot: AxisSlot, layout: SubplotLayout) -> tuple[Point, Alignment, float]:
    regions = layout.regions
    plot = regions.plot_area
    bound = regions.label_boundary
    gap = regions.buffer_offset
    center = plot.center()
    if slot is AxisSlot.Y:
        return Point(bound.xmin - gap, center.y), Alignment.RIGHT, 1.5 * math.pi
    if slot is AxisSlot.SECONDARY_Y:
        return Point(bound.xmax + gap, center.y), Alignment.LEFT, 0.5 * math.pi
    if slot is AxisSlot.X:
        return Point(center.x, bound.ymin - gap), Alignment.TOP, 0.0
    return Point(center.x, bound.ymax + gap), Alignment.BOTTOM, 0.0


def _tick_geometry(
    slot: AxisSlot,
    loc: float,
    layout: SubplotLayout,
    outer: int,
    inner: int,
) -> tuple[Point, Point, Point, Alignment]:
    """Tick line end points plus the tick label anchor for one tick."""
    regions = layout.regions
    plot = regions.plot_area
    bound = regions.tick_label_boundary
    gap = regions.buffer_offset
    if slot is AxisSlot.Y:
        return (
            Point(plot.xmin - outer, loc),
            Point(plot.xmin + inner, loc),
            Point(bound.xmin - gap, loc),
            Alignment.RIGHT,
        )
    if slot is AxisSlot.X:
        return (
            Point(loc, plot.ymin - outer),
            Point(loc, plot.ymin + inner),
            Point(loc, bound.ymin - gap),
            Alignment.TOP,
        )
    if slot is AxisSlot.SECONDARY_Y:
        return (
            Point(plot.xmax - inner, loc),
            Point(plot.xmax + outer, loc),
            Point(bound.xmax + gap, loc),
            Alignment.LEFT,
        )
    return (
        Point(loc, plot.ymax - inner),
        Point(loc, plot.ymax + outer),
        Point(loc, bound.ymax + gap),
        Alignment.BOTTOM,
    )


def _draw_axis(canvas: Canvas, subplot: Subplot, layout: SubplotLayout, axis: ResolvedAxis) -> None:
    fmt = subplot.format
    slot = axis.slot
    plot = layout.plot_area

    if axis.visible:
        p1, p2 = _axis_line(slot, plot, layout.line_width / 2.0)
        canvas.draw_line(LineDescriptor(p1=p1, p2=p2, line_width=layout.line_width, line_color=fmt.line_color))

    modifier = modifier_text(axis.exponent, axis.offset)
    if modifier:
        position, alignment = _modifier_anchor(slot, layout)
        canvas.draw_text(
            TextDescriptor(
                text=modifier,
                font=layout.font,
                position=position,
                color=fmt.text_color,
                alignment=alignment,
            )
        )

    if axis.label:
        position, alignment, rotation = _label_anchor(slot, layout)
        canvas.draw_text(
            TextDescriptor(
                text=axis.label,
                font=layout.font,
                position=position,
                color=fmt.text_color,
                rotation=rotation,
                alignment=alignment,
            )
        )

    inner_major, outer_major, inner_minor, outer_minor = layout.tick_lengths
    for ticks, labels, outer, inner in (
        (axis.major_ticks, axis.major_labels, outer_major, inner_major),
        (axis.minor_ticks, axis.minor_labels, outer_minor, inner_minor),
    ):
        for i, tick in enumerate(ticks):
            loc = tick_pixel(tick, axis.limits, plot, slot.is_x)
            p1, p2, text_position, alignment = _tick_geometry(slot, loc, layout, outer, inner)
            if outer + inner > 0:
                canvas.draw_line(
                    LineDescriptor(p1=p1, p2=p2, line_width=layout.line_width, line_color=fmt.line_color)
                )
            if labels and labels[i]:
                canvas.draw_text(
                    TextDescriptor(
                        text=labels[i],
                        font=layout.font,
                        position=text_position,
                        color=fmt.text_color,
                        alignment=alignment,
                    )
                )


def _draw_title(canvas: Canvas, subplot: Subplot, layout: SubplotLayout) -> None:
    if not subplot.title:
        return
    regions = layout.regions
    canvas.draw_text(
        TextDescriptor(
            text=subplot.title,
            font=layout.font,
            position=Point(regions.plot_area.center().x, regions.title_boundary + regions.buffer_offset),
            color=subplot.format.text_color,
            alignment=Alignment.BOTTOM,
        )
    )
