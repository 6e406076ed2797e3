from __future__ import annotations

import math
from typing import TYPE_CHECKING, Sequence

from figplot.errors import BadTickPlacementError

if TYPE_CHECKING:
    from figplot.axes import TickSpacing


# sigdigit() of zero: lower than the position of any nonzero digit
SIGDIGIT_ZERO = -(2**31)

DEFAULT_TICK_COUNT = 5
MINOR_TICKS_PER_MAJOR = 5

SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
SUPERSCRIPT_MINUS = "⁻"

Modifiers = tuple[float, int, int]


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    return math.copysign(math.floor(abs(value) + 0.5), value)


def sigdigit(num: float) -> int:
    """Power-of-ten position of the most significant digit of `num`.

    `sigdigit(1234.0) == 3`, `sigdigit(0.05) == -2`, `sigdigit(0.0) == SIGDIGIT_ZERO`.
    """
    if not math.isfinite(num):
        raise BadTickPlacementError(f"tick is not finite: {num}")
    num = abs(num)
    if num == 0.0:
        return SIGDIGIT_ZERO

    ret = 0
    if num > 1.0:
        while num >= 10.0:
            num /= 10.0
            ret += 1
    else:
        while num < 1.0:
            num *= 10.0
            ret -= 1
    return ret


def decimals(num: float, ndigits: int) -> list[int]:
    """First `ndigits` digits after the decimal point of `abs(num)`, rounded at the last digit.

    Rounding keeps float noise such as 0.8999999999999999 from reading as 0.899.
    """
    if ndigits <= 0:
        return []
    scaled = int(round_half_away(abs(num) * 10.0**ndigits))
    return [int(digit) for digit in f"{scaled % 10**ndigits:0{ndigits}d}"]


def round_to(num: float, place: int) -> float:
    """Round `num` to `place` decimal places, halves away from zero."""
    scale = 10.0**place
    return round_half_away(num * scale) / scale


def _shift(ticks: Sequence[float], exponent: int) -> list[float]:
    if exponent == 0:
        return list(ticks)
    return [round_half_away(t * 10.0 ** (3 - exponent)) * 10.0**-3 for t in ticks]


def _check_ticks(ticks: Sequence[float]) -> None:
    for tick in ticks:
        if math.isnan(tick):
            raise BadTickPlacementError("tick is NaN")
        if math.isinf(tick):
            raise BadTickPlacementError(f"tick is infinite: {tick}")


def solve_modifiers(ticks: Sequence[float]) -> Modifiers:
    """Choose the (offset, exponent, precision) that keeps tick labels compact.

    An offset is pulled out when the tick spacing is more than three orders of magnitude
    finer than the largest tick; an exponent is used when the remaining magnitude falls
    outside [-2, 3]; precision counts decimals up to the last nonzero digit.
    """
    _check_ticks(ticks)
    if not ticks:
        return (0.0, 0, 0)
    ticks = sorted(ticks)

    last = ticks[-1]
    max_multiplier = sigdigit(last)

    difs = [b - a for a, b in zip(ticks[:-1], ticks[1:])]
    max_dif = max(difs, default=0.0)
    dif_multiplier = sigdigit(max_dif) if max_dif != 0.0 else max_multiplier

    offset = ticks[0] if dif_multiplier < max_multiplier - 3 else 0.0

    max_multiplier = sigdigit(round_to(last - offset, 3 - dif_multiplier))
    exponent = max_multiplier if not -2 <= max_multiplier <= 3 else 0

    if exponent != 0 or max_multiplier < 0:
        max_precision = 3
    else:
        max_precision = 3 - max_multiplier

    precision = 0
    for tick in _shift(ticks, exponent):
        digits = decimals(tick, max_precision)
        nonzero = [i + 1 for i, digit in enumerate(digits) if digit != 0]
        precision = max(precision, nonzero[-1] if nonzero else 0)

    return (offset, exponent, precision)


def ticks_to_labels(ticks: Sequence[float], modifiers: Modifiers) -> list[str]:
    """Format ticks, ascending, with the offset removed and the exponent applied."""
    _check_ticks(ticks)
    if not ticks:
        return []

    offset, exponent, precision = modifiers
    shifted = _shift([round_to(t - offset, 4 - exponent) for t in sorted(ticks)], exponent)

    labels = []
    for tick in shifted:
        label = f"{tick:.{precision}f}"
        if label.startswith("-") and not label.strip("-0."):
            label = label[1:]
        labels.append(label)
    return labels


def superscript(n: int) -> str:
    """Render an integer with unicode superscript digits."""
    digits = "".join(SUPERSCRIPT_DIGITS[int(d)] for d in str(abs(n)))
    return SUPERSCRIPT_MINUS + digits if n < 0 else digits


def _format_offset(offset: float) -> str:
    return str(int(offset)) if offset.is_integer() else repr(offset)


def modifier_text(exponent: int, offset: float) -> str:
    """Annotation drawn beside tick labels, e.g. `x10⁴ + 1000`."""
    if exponent != 0 and offset != 0.0:
        return f"x10{superscript(exponent)} + {_format_offset(offset)}"
    if exponent != 0:
        return f"x10{superscript(exponent)}"
    if offset != 0.0:
        return f"+ {_format_offset(offset)}"
    return ""


def _evenly_spaced(span: tuple[float, float], count: int) -> list[float]:
    if count <= 0:
        return []
    if count == 1:
        return [span[0]]
    lo, hi = span
    ticks = [lo + (hi - lo) * (i / (count - 1)) for i in range(count)]
    ticks[-1] = hi
    return ticks


def generate_ticks(
    spacing: "TickSpacing",
    span: tuple[float, float],
    is_primary: bool,
    major_count: int | None = None,
) -> list[float]:
    """Tick locations for one tick set of an axis.

    Pass `major_count`, the number of major ticks already placed, when generating minor
    ticks; it sizes the automatic minor set.
    """
    if spacing.mode == "manual":
        return [float(v) for v in spacing.values]
    if spacing.mode == "count":
        return _evenly_spaced(span, spacing.count)

    per_set = DEFAULT_TICK_COUNT if major_count is None else major_count * MINOR_TICKS_PER_MAJOR
    if spacing.mode == "on":
        return _evenly_spaced(span, per_set)
    if spacing.mode == "auto" and is_primary:
        return _evenly_spaced(span, per_set)
    return []


def remove_overlap(minor: Sequence[float], major: Sequence[float]) -> list[float]:
    """Drop minor ticks that coincide exactly with a major tick."""
    majors = set(major)
    return [tick for tick in minor if tick not in majors]
