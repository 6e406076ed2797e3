from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from figplot.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_series(*values: Any, labels: Sequence[str], data: Any = None) -> tuple[np.ndarray, ...]:
    """Coerce parallel 1-D inputs to float64 arrays and validate them together.

    Each value may be a list, numpy array, pandas Series, torch tensor, or a column name
    of the pandas DataFrame passed as `data`. Lengths must match, series must be non-empty,
    and every value must be finite.
    """
    arrays = tuple(
        coerce_1d(resolve_input(value, label=label, data=data), label=label)
        for value, label in zip(values, labels)
    )
    return check_series(arrays, labels)


def check_series(arrays: Sequence[np.ndarray], labels: Sequence[str]) -> tuple[np.ndarray, ...]:
    first, first_label = arrays[0], labels[0]
    if first.size == 0:
        raise PlotDataError("empty series")
    for arr, label in zip(arrays[1:], labels[1:]):
        if arr.shape != first.shape:
            raise PlotDataError(f"{first_label} and {label} length mismatch: {first.size} != {arr.size}")
    for arr, label in zip(arrays, labels):
        if np.isnan(arr).any():
            raise PlotDataError(f"{label} contains NaN")
        if not np.isfinite(arr).all():
            raise PlotDataError(f"{label} contains infinite values")
    return tuple(arrays)


def resolve_input(value: Any, *, label: str, data: Any) -> Any:
    if data is not None:
        if pd is None:
            raise PlotDataError("pandas is required when using `data=`")
        if not isinstance(data, pd.DataFrame):
            raise PlotDataError("`data` must be a pandas DataFrame")
        if isinstance(value, str):
            if value not in data.columns:
                raise PlotDataError(f"column not found: {value}")
            return data[value]
        return value

    if pd is not None and isinstance(value, pd.DataFrame):
        numeric_cols = [c for c in value.columns if _is_numeric_dtype(value[c])]
        if len(numeric_cols) != 1:
            raise PlotDataError(f"DataFrame input for {label} must contain exactly one numeric column")
        return value[numeric_cols[0]]

    return value


def _is_numeric_dtype(series: Any) -> bool:
    if pd is None:
        return False
    return bool(pd.api.types.is_numeric_dtype(series))


def coerce_1d(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
