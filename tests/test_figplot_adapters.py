from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np

from figplot import PlotDataError, Subplot
from figplot.adapters import coerce_1d, normalize_series

try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None


class NormalizeSeriesTests(unittest.TestCase):
    def test_lists_and_decimals_become_float_arrays(self) -> None:
        x, y = normalize_series([1, 2, 3], [Decimal("1.5"), 2, "3.25"], labels=("x", "y"))
        self.assertEqual(x.dtype, np.float64)
        self.assertEqual(y.tolist(), [1.5, 2.0, 3.25])

    def test_none_is_rejected_as_nan(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "NaN"):
            normalize_series([1, 2], [1, None], labels=("x", "y"))

    def test_infinite_values_are_rejected(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "infinite"):
            normalize_series(np.array([1.0, np.inf]), labels=("x",))

    def test_length_mismatch_names_both_series(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "x and top length mismatch"):
            normalize_series([1, 2], [1, 2, 3], labels=("x", "top"))

    def test_non_numeric_values_are_rejected(self) -> None:
        with self.assertRaisesRegex(PlotDataError, "non-numeric"):
            coerce_1d(["a", "b"], label="x")

    def test_nested_sequences_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_1d([[1, 2], [3, 4]], label="x")
        with self.assertRaises(PlotDataError):
            coerce_1d(np.zeros((2, 2)), label="x")

    def test_unsupported_types_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_1d("123", label="x")
        with self.assertRaises(PlotDataError):
            coerce_1d(5.0, label="x")

    def test_data_argument_requires_dataframe(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_series("a", labels=("x",), data={"a": [1, 2]})


@unittest.skipIf(pd is None, "pandas not installed")
class PandasInputTests(unittest.TestCase):
    def test_columns_by_name(self) -> None:
        frame = pd.DataFrame({"t": [0.0, 1.0, 2.0], "v": [3, 4, 5]})
        subplot = Subplot()
        subplot.plot("t", "v", data=frame)
        self.assertEqual(subplot.xaxis.span, (0.0, 2.0))
        self.assertEqual(subplot.yaxis.span, (3.0, 5.0))

    def test_missing_column(self) -> None:
        frame = pd.DataFrame({"t": [0.0, 1.0]})
        with self.assertRaisesRegex(PlotDataError, "column not found"):
            normalize_series("t", "missing", labels=("x", "y"), data=frame)

    def test_series_and_single_column_frame(self) -> None:
        frame = pd.DataFrame({"name": ["a", "b"], "value": [1.0, 2.0]})
        x, y = normalize_series(pd.Series([0, 1]), frame, labels=("x", "y"))
        self.assertEqual(x.tolist(), [0.0, 1.0])
        self.assertEqual(y.tolist(), [1.0, 2.0])

    def test_missing_values_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_series(pd.Series([1.0, None]), labels=("x",))


@unittest.skipIf(torch is None, "torch not installed")
class TorchInputTests(unittest.TestCase):
    def test_tensor_input(self) -> None:
        (x,) = normalize_series(torch.tensor([1.0, 2.0, 3.0]), labels=("x",))
        self.assertEqual(x.dtype, np.float64)
        self.assertEqual(x.tolist(), [1.0, 2.0, 3.0])

    def test_two_dimensional_tensor_is_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            coerce_1d(torch.zeros((2, 2)), label="x")


if __name__ == "__main__":
    unittest.main()
