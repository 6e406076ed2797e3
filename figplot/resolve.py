from __future__ import annotations

from dataclasses import dataclass
import logging
import math

from figplot.axes import AxisConfig, AxisSlot, Grid
from figplot.errors import BadTickLabelsError, BadTickPlacementError
from figplot.subplot import Subplot
from figplot.ticks import generate_ticks, remove_overlap, solve_modifiers, ticks_to_labels


LOGGER = logging.getLogger(__name__)

DEFAULT_RANGE = (-1.0, 1.0)


@dataclass(frozen=True)
class ResolvedAxis:
    """Everything needed to draw one axis, computed for a single draw pass."""

    slot: AxisSlot
    label: str
    major_ticks: list[float]
    major_labels: list[str]
    minor_ticks: list[float]
    minor_labels: list[str]
    exponent: int
    offset: float
    major_grid: bool
    minor_grid: bool
    limits: tuple[float, float]
    visible: bool
    is_primary: bool

    @property
    def has_modifier(self) -> bool:
        return self.exponent != 0 or self.offset != 0.0

    @property
    def has_labels(self) -> bool:
        return bool(self.major_labels) or bool(self.minor_labels)


def axis_extent(subplot: Subplot, slot: AxisSlot) -> tuple[tuple[float, float], tuple[float, float]]:
    """(span, limits) for a slot, borrowed from the opposite slot when it has none."""
    for candidate in (subplot.axis(slot), subplot.axis(slot.opposite)):
        if candidate.span is not None and candidate.limits is not None:
            return candidate.span, candidate.limits
    return DEFAULT_RANGE, DEFAULT_RANGE


def is_primary_axis(subplot: Subplot, slot: AxisSlot) -> bool:
    return any(op.uses(slot) for op in subplot.plot_ops)


def _check_finite(slot: AxisSlot, ticks: list[float]) -> None:
    if any(math.isnan(t) for t in ticks):
        raise BadTickPlacementError(f"tick is NaN on {slot.display_name}")


def _formats(mode: str, is_primary: bool) -> bool:
    return mode == "on" or (mode == "auto" and is_primary)


def _labels(
    config_mode: str,
    manual: tuple[str, ...],
    ticks: list[float],
    modifiers: tuple[float, int, int],
    is_primary: bool,
    slot: AxisSlot,
    which: str,
) -> list[str]:
    if config_mode == "manual":
        if len(manual) != len(ticks):
            raise BadTickLabelsError(
                f"number of {which} tick labels ({len(manual)}) does not match number of ticks "
                f"({len(ticks)}) on {slot.display_name}"
            )
        return list(manual)
    if _formats(config_mode, is_primary):
        return ticks_to_labels(ticks, modifiers)
    return []


def resolve_axis(subplot: Subplot, slot: AxisSlot) -> ResolvedAxis:
    config: AxisConfig = subplot.axis(slot)
    span, limits = axis_extent(subplot, slot)
    is_primary = is_primary_axis(subplot, slot)

    major_ticks = generate_ticks(config.major_tick_marks, span, is_primary)
    minor_ticks = generate_ticks(config.minor_tick_marks, span, is_primary, major_count=len(major_ticks))
    minor_ticks = remove_overlap(minor_ticks, major_ticks)
    _check_finite(slot, major_ticks)
    _check_finite(slot, minor_ticks)

    major_labels_mode = config.major_tick_labels.mode
    minor_labels_mode = config.minor_tick_labels.mode
    if _formats(major_labels_mode, is_primary):
        modifiers = solve_modifiers(major_ticks)
    else:
        modifiers = (0.0, 0, 0)
    minor_modifiers = solve_modifiers(major_ticks) if _formats(minor_labels_mode, is_primary) else modifiers

    major_labels = _labels(
        major_labels_mode, config.major_tick_labels.values, major_ticks, modifiers, is_primary, slot, "major"
    )
    minor_labels = _labels(
        minor_labels_mode, config.minor_tick_labels.values, minor_ticks, minor_modifiers, is_primary, slot, "minor"
    )
    # formatted labels come out ascending, so their ticks must too
    if major_labels_mode != "manual":
        major_ticks = sorted(major_ticks)
    if minor_labels_mode != "manual":
        minor_ticks = sorted(minor_ticks)

    offset, exponent, _ = modifiers
    return ResolvedAxis(
        slot=slot,
        label=config.label,
        major_ticks=major_ticks,
        major_labels=major_labels,
        minor_ticks=minor_ticks,
        minor_labels=minor_labels,
        exponent=exponent,
        offset=offset,
        major_grid=config.grid in (Grid.MAJOR, Grid.FULL),
        minor_grid=config.grid is Grid.FULL,
        limits=limits,
        visible=config.visible,
        is_primary=is_primary,
    )


def resolve_axes(subplot: Subplot) -> dict[AxisSlot, ResolvedAxis]:
    resolved = {slot: resolve_axis(subplot, slot) for slot in AxisSlot}
    for axis in resolved.values():
        LOGGER.debug(
            "resolved %s: limits=%s majors=%d minors=%d exponent=%d offset=%s",
            axis.slot.display_name,
            axis.limits,
            len(axis.major_ticks),
            len(axis.minor_ticks),
            axis.exponent,
            axis.offset,
        )
    return resolved
