from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Sequence


class AxisSlot(Enum):
    """One of the four axes bordering a subplot's plot area."""

    X = "x"
    Y = "y"
    SECONDARY_X = "secondary_x"
    SECONDARY_Y = "secondary_y"

    @property
    def opposite(self) -> "AxisSlot":
        return _OPPOSITE[self]

    @property
    def is_x(self) -> bool:
        return self in (AxisSlot.X, AxisSlot.SECONDARY_X)

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_OPPOSITE = {
    AxisSlot.X: AxisSlot.SECONDARY_X,
    AxisSlot.SECONDARY_X: AxisSlot.X,
    AxisSlot.Y: AxisSlot.SECONDARY_Y,
    AxisSlot.SECONDARY_Y: AxisSlot.Y,
}
_DISPLAY_NAMES = {
    AxisSlot.X: "x-axis",
    AxisSlot.Y: "y-axis",
    AxisSlot.SECONDARY_X: "secondary x-axis",
    AxisSlot.SECONDARY_Y: "secondary y-axis",
}


class AxisSelector(Enum):
    """A single axis slot or a group of them, for bulk configuration."""

    X = "x"
    Y = "y"
    SECONDARY_X = "secondary_x"
    SECONDARY_Y = "secondary_y"
    BOTH_X = "both_x"
    BOTH_Y = "both_y"
    ALL = "all"

    @property
    def slots(self) -> tuple[AxisSlot, ...]:
        if self is AxisSelector.BOTH_X:
            return (AxisSlot.X, AxisSlot.SECONDARY_X)
        if self is AxisSelector.BOTH_Y:
            return (AxisSlot.Y, AxisSlot.SECONDARY_Y)
        if self is AxisSelector.ALL:
            return (AxisSlot.X, AxisSlot.Y, AxisSlot.SECONDARY_X, AxisSlot.SECONDARY_Y)
        return (AxisSlot(self.value),)


TickSpacingMode = Literal["on", "auto", "none", "count", "manual"]
TickLabelsMode = Literal["on", "auto", "none", "manual"]


@dataclass(frozen=True)
class TickSpacing:
    """How tick locations are chosen.

    `on` always places ticks, `auto` only when a plot uses the axis, `count` places `count`
    evenly spaced ticks and `manual` uses `values` verbatim.
    """

    mode: TickSpacingMode = "auto"
    count: int = 0
    values: tuple[float, ...] = ()

    @classmethod
    def on(cls) -> "TickSpacing":
        return cls(mode="on")

    @classmethod
    def auto(cls) -> "TickSpacing":
        return cls(mode="auto")

    @classmethod
    def none(cls) -> "TickSpacing":
        return cls(mode="none")

    @classmethod
    def of_count(cls, count: int) -> "TickSpacing":
        if count == 1 or count < 0:
            raise ValueError(f"tick count must be 0 or at least 2, got {count}")
        return cls(mode="count", count=count)

    @classmethod
    def manual(cls, values: Sequence[float]) -> "TickSpacing":
        return cls(mode="manual", values=tuple(float(v) for v in values))


@dataclass(frozen=True)
class TickLabels:
    """How tick labels are produced: formatted from the ticks, or a manual list."""

    mode: TickLabelsMode = "auto"
    values: tuple[str, ...] = ()

    @classmethod
    def on(cls) -> "TickLabels":
        return cls(mode="on")

    @classmethod
    def auto(cls) -> "TickLabels":
        return cls(mode="auto")

    @classmethod
    def none(cls) -> "TickLabels":
        return cls(mode="none")

    @classmethod
    def manual(cls, values: Sequence[str]) -> "TickLabels":
        return cls(mode="manual", values=tuple(str(v) for v in values))


class Grid(Enum):
    NONE = "none"
    MAJOR = "major"
    FULL = "full"


@dataclass(frozen=True)
class Limits:
    """Auto limits follow the plotted data; manual limits pin the axis range."""

    min: float | None = None
    max: float | None = None

    @classmethod
    def auto(cls) -> "Limits":
        return cls()

    @classmethod
    def manual(cls, min: float, max: float) -> "Limits":
        if not min < max:
            raise ValueError(f"manual limits must satisfy min < max, got ({min}, {max})")
        return cls(min=float(min), max=float(max))

    @property
    def is_auto(self) -> bool:
        return self.min is None or self.max is None


LIMIT_PADDING = 0.05


def padded_limits(span: tuple[float, float]) -> tuple[float, float]:
    """Limits 5% beyond `span` on each side, or one unit when the span has no extent."""
    lo, hi = span
    extent = hi - lo
    if extent == 0.0:
        return (lo - 1.0, hi + 1.0)
    return (lo - LIMIT_PADDING * extent, hi + LIMIT_PADDING * extent)


@dataclass
class AxisConfig:
    """Declarative configuration of one axis, plus the data span seen so far."""

    label: str = ""
    major_tick_marks: TickSpacing = field(default_factory=TickSpacing.on)
    major_tick_labels: TickLabels = field(default_factory=TickLabels.auto)
    minor_tick_marks: TickSpacing = field(default_factory=TickSpacing.on)
    minor_tick_labels: TickLabels = field(default_factory=TickLabels.none)
    grid: Grid = Grid.NONE
    limit_policy: Limits = field(default_factory=Limits.auto)
    limits: tuple[float, float] | None = None
    span: tuple[float, float] | None = None
    visible: bool = True

    @classmethod
    def default(cls) -> "AxisConfig":
        return cls()

    @classmethod
    def detailed(cls) -> "AxisConfig":
        """Ticks and labels on every tick set, with a full grid."""
        return cls(
            major_tick_marks=TickSpacing.on(),
            major_tick_labels=TickLabels.on(),
            minor_tick_marks=TickSpacing.on(),
            minor_tick_labels=TickLabels.none(),
            grid=Grid.FULL,
        )

    def set_limits(self, limits: Limits) -> None:
        self.limit_policy = limits
        if limits.is_auto:
            self.span = None
            self.limits = None
        else:
            self.span = (limits.min, limits.max)
            self.limits = (limits.min, limits.max)

    def include(self, lo: float, hi: float) -> None:
        """Widen the span to cover [lo, hi]; manual limits are left untouched."""
        if not self.limit_policy.is_auto:
            return
        if self.span is None:
            self.span = (lo, hi)
        else:
            self.span = (min(self.span[0], lo), max(self.span[1], hi))
        self.limits = padded_limits(self.span)
