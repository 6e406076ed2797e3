from __future__ import annotations


class PlotError(Exception):
    """Base class for every error raised by figplot."""


class PlotDataError(PlotError):
    """Input data is in an invalid state (NaN values, mismatched lengths, empty series)."""


class BadTickPlacementError(PlotError):
    """One or more tick locations are unusable."""


class BadTickLabelsError(PlotError):
    """Tick labels cannot be drawn, e.g. their count differs from the tick count."""


class InvalidSubplotAreaError(PlotError):
    def __init__(self, area: object) -> None:
        super().__init__(f"subplot area is not inside the unit square or is inverted: {area!r}")
        self.area = area


class InvalidIndexError(PlotError):
    def __init__(self, index: int, nrows: int, ncols: int) -> None:
        super().__init__(f"index `{index}` is out of range for figure with {nrows} rows and {ncols} columns")
        self.index = index
        self.nrows = nrows
        self.ncols = ncols


class InvalidRowError(PlotError):
    def __init__(self, row: int, nrows: int) -> None:
        super().__init__(f"row `{row}` is out of range for layout with {nrows} rows")
        self.row = row
        self.nrows = nrows


class InvalidColumnError(PlotError):
    def __init__(self, col: int, ncols: int) -> None:
        super().__init__(f"column `{col}` is out of range for layout with {ncols} columns")
        self.col = col
        self.ncols = ncols


class BackendError(PlotError):
    """A canvas backend failed to create, draw or save."""
