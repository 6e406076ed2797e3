from __future__ import annotations

from typing import Iterable

from figplot.canvas.types import Area, Point
from figplot.ticks import round_half_away


def to_fraction(value: float, limits: tuple[float, float]) -> float:
    lo, hi = limits
    return (value - lo) / (hi - lo)


def data_to_pixel(
    x: float,
    y: float,
    xlimits: tuple[float, float],
    ylimits: tuple[float, float],
    plot_area: Area,
    pixel_perfect: bool = False,
) -> Point:
    """Map a data point into the plot area; y grows upward."""
    point = plot_area.fractional_to_point(Point(to_fraction(x, xlimits), to_fraction(y, ylimits)))
    if pixel_perfect:
        return Point(round_half_away(point.x), round_half_away(point.y))
    return point


def map_points(
    points: Iterable[tuple[float, float]],
    xlimits: tuple[float, float],
    ylimits: tuple[float, float],
    plot_area: Area,
    pixel_perfect: bool = False,
) -> list[Point]:
    return [data_to_pixel(x, y, xlimits, ylimits, plot_area, pixel_perfect) for x, y in points]


def tick_pixel(tick: float, limits: tuple[float, float], plot_area: Area, is_x: bool) -> float:
    """Rounded pixel coordinate of a tick along its axis."""
    frac = to_fraction(tick, limits)
    point = plot_area.fractional_to_point(Point(frac, frac))
    return round_half_away(point.x if is_x else point.y)
