from __future__ import annotations

import math
import unittest

from figplot.axes import TickSpacing
from figplot.errors import BadTickPlacementError
from figplot.ticks import (
    SIGDIGIT_ZERO,
    decimals,
    generate_ticks,
    modifier_text,
    remove_overlap,
    round_half_away,
    round_to,
    sigdigit,
    solve_modifiers,
    superscript,
    ticks_to_labels,
)


class SigdigitTests(unittest.TestCase):
    def test_positions_of_leading_digit(self) -> None:
        self.assertEqual(sigdigit(1234.0), 3)
        self.assertEqual(sigdigit(1.0), 0)
        self.assertEqual(sigdigit(9.99), 0)
        self.assertEqual(sigdigit(10.0), 1)
        self.assertEqual(sigdigit(0.05), -2)
        self.assertEqual(sigdigit(0.5), -1)

    def test_negative_values_use_magnitude(self) -> None:
        self.assertEqual(sigdigit(-1234.0), 3)
        self.assertEqual(sigdigit(-0.05), -2)

    def test_zero_is_sentinel(self) -> None:
        self.assertEqual(sigdigit(0.0), SIGDIGIT_ZERO)
        self.assertLess(SIGDIGIT_ZERO, -1000)

    def test_non_finite_raises(self) -> None:
        with self.assertRaises(BadTickPlacementError):
            sigdigit(math.inf)
        with self.assertRaises(BadTickPlacementError):
            sigdigit(math.nan)


class RoundingTests(unittest.TestCase):
    def test_halves_round_away_from_zero(self) -> None:
        self.assertEqual(round_half_away(2.5), 3.0)
        self.assertEqual(round_half_away(-2.5), -3.0)
        self.assertEqual(round_half_away(0.49), 0.0)

    def test_round_to_place(self) -> None:
        self.assertEqual(round_to(1.25, 1), 1.3)
        self.assertEqual(round_to(1234.0, -2), 1200.0)

    def test_decimals(self) -> None:
        self.assertEqual(decimals(0.5, 3), [5, 0, 0])
        self.assertEqual(decimals(12.25, 2), [2, 5])
        self.assertEqual(decimals(3.0, 2), [0, 0])

    def test_decimals_round_away_float_noise(self) -> None:
        self.assertEqual(decimals(0.8999999999999999, 3), [9, 0, 0])
        self.assertEqual(decimals(0.30000000000000004, 3), [3, 0, 0])
        self.assertEqual(decimals(-1.25, 2), [2, 5])
        self.assertEqual(decimals(1.5, 0), [])


class SolveModifiersTests(unittest.TestCase):
    def test_plain_ticks_need_no_modifiers(self) -> None:
        self.assertEqual(solve_modifiers([0.0, 0.5, 1.0, 1.5, 2.0]), (0.0, 0, 1))
        self.assertEqual(solve_modifiers([0.0, 2.5, 5.0, 7.5, 10.0]), (0.0, 0, 1))

    def test_integer_ticks_have_no_precision(self) -> None:
        self.assertEqual(solve_modifiers([0.0, 10.0, 20.0, 30.0]), (0.0, 0, 0))

    def test_large_values_use_exponent(self) -> None:
        offset, exponent, _ = solve_modifiers([0.0, 25000.0, 50000.0, 75000.0, 100000.0])
        self.assertEqual(offset, 0.0)
        self.assertEqual(exponent, 5)

    def test_small_values_use_negative_exponent(self) -> None:
        offset, exponent, _ = solve_modifiers([0.001, 0.002, 0.003])
        self.assertEqual(offset, 0.0)
        self.assertEqual(exponent, -3)

    def test_fine_spacing_on_large_values_uses_offset(self) -> None:
        self.assertEqual(solve_modifiers([1000.0, 1000.5, 1001.0]), (1000.0, 0, 1))

    def test_unsorted_ticks_are_sorted_first(self) -> None:
        self.assertEqual(solve_modifiers([2.0, 0.0, 1.0]), solve_modifiers([0.0, 1.0, 2.0]))

    def test_empty_ticks(self) -> None:
        self.assertEqual(solve_modifiers([]), (0.0, 0, 0))

    def test_nan_and_inf_ticks_raise(self) -> None:
        with self.assertRaises(BadTickPlacementError):
            solve_modifiers([0.0, math.nan])
        with self.assertRaises(BadTickPlacementError):
            solve_modifiers([0.0, -math.inf])


class TickLabelTests(unittest.TestCase):
    def test_labels_use_shared_precision(self) -> None:
        ticks = [0.0, 0.5, 1.0, 1.5, 2.0]
        labels = ticks_to_labels(ticks, solve_modifiers(ticks))
        self.assertEqual(labels, ["0.0", "0.5", "1.0", "1.5", "2.0"])

    def test_noisy_ticks_get_minimal_precision(self) -> None:
        ticks = generate_ticks(TickSpacing.on(), (0.0, 1.2), True)
        modifiers = solve_modifiers(ticks)
        self.assertEqual(modifiers, (0.0, 0, 1))
        self.assertEqual(ticks_to_labels(ticks, modifiers), ["0.0", "0.3", "0.6", "0.9", "1.2"])
        noisy = [0.0, 0.30000000000000004, 0.6, 0.8999999999999999, 1.2]
        self.assertEqual(solve_modifiers(noisy), (0.0, 0, 1))

    def test_labels_remove_offset(self) -> None:
        ticks = [1000.0, 1000.5, 1001.0]
        labels = ticks_to_labels(ticks, solve_modifiers(ticks))
        self.assertEqual(labels, ["0.0", "0.5", "1.0"])

    def test_labels_apply_exponent(self) -> None:
        ticks = [0.0, 50000.0, 100000.0]
        labels = ticks_to_labels(ticks, (0.0, 5, 1))
        self.assertEqual(labels, ["0.0", "0.5", "1.0"])

    def test_negative_zero_is_printed_as_zero(self) -> None:
        self.assertEqual(ticks_to_labels([-0.0, 1.0], (0.0, 0, 1)), ["0.0", "1.0"])
        self.assertEqual(ticks_to_labels([-0.00001], (0.0, 0, 2)), ["0.00"])

    def test_labels_come_out_ascending(self) -> None:
        self.assertEqual(ticks_to_labels([3.0, 1.0, 2.0], (0.0, 0, 0)), ["1", "2", "3"])

    def test_label_nan_raises(self) -> None:
        with self.assertRaises(BadTickPlacementError):
            ticks_to_labels([math.nan], (0.0, 0, 0))


class ModifierTextTests(unittest.TestCase):
    def test_superscript(self) -> None:
        self.assertEqual(superscript(4), "⁴")
        self.assertEqual(superscript(12), "¹²")
        self.assertEqual(superscript(-3), "⁻³")

    def test_modifier_text_variants(self) -> None:
        self.assertEqual(modifier_text(0, 0.0), "")
        self.assertEqual(modifier_text(4, 0.0), "x10⁴")
        self.assertEqual(modifier_text(-3, 0.0), "x10⁻³")
        self.assertEqual(modifier_text(0, 1000.0), "+ 1000")
        self.assertEqual(modifier_text(4, 1000.0), "x10⁴ + 1000")
        self.assertEqual(modifier_text(0, 0.25), "+ 0.25")


class GenerateTicksTests(unittest.TestCase):
    def test_on_places_five_major_ticks_across_span(self) -> None:
        self.assertEqual(generate_ticks(TickSpacing.on(), (0.0, 2.0), False), [0.0, 0.5, 1.0, 1.5, 2.0])

    def test_auto_only_places_ticks_on_primary_axes(self) -> None:
        self.assertEqual(len(generate_ticks(TickSpacing.auto(), (0.0, 1.0), True)), 5)
        self.assertEqual(generate_ticks(TickSpacing.auto(), (0.0, 1.0), False), [])

    def test_none_places_no_ticks(self) -> None:
        self.assertEqual(generate_ticks(TickSpacing.none(), (0.0, 1.0), True), [])

    def test_count_includes_both_endpoints(self) -> None:
        ticks = generate_ticks(TickSpacing.of_count(7), (0.1, 0.7), True)
        self.assertEqual(len(ticks), 7)
        self.assertEqual(ticks[0], 0.1)
        self.assertEqual(ticks[-1], 0.7)

    def test_count_of_one_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            TickSpacing.of_count(1)

    def test_manual_values_are_kept_verbatim(self) -> None:
        self.assertEqual(generate_ticks(TickSpacing.manual([3, 1, 2]), (0.0, 1.0), False), [3.0, 1.0, 2.0])

    def test_minor_count_follows_major_count(self) -> None:
        minor = generate_ticks(TickSpacing.on(), (0.0, 2.0), True, major_count=5)
        self.assertEqual(len(minor), 25)
        self.assertEqual(generate_ticks(TickSpacing.on(), (0.0, 2.0), True, major_count=0), [])

    def test_minor_ticks_never_coincide_with_majors(self) -> None:
        major = generate_ticks(TickSpacing.on(), (0.0, 2.0), True)
        minor = remove_overlap(generate_ticks(TickSpacing.on(), (0.0, 2.0), True, major_count=len(major)), major)
        self.assertEqual(len(minor), 20)
        self.assertTrue(set(minor).isdisjoint(major))


if __name__ == "__main__":
    unittest.main()
