from figplot.api import figure
from figplot.axes import AxisConfig, AxisSelector, AxisSlot, Grid, Limits, TickLabels, TickSpacing
from figplot.canvas import Alignment, Area, Color, FileFormat, FontName, ImageFormat, Size
from figplot.errors import (
    BackendError,
    BadTickLabelsError,
    BadTickPlacementError,
    InvalidColumnError,
    InvalidIndexError,
    InvalidRowError,
    InvalidSubplotAreaError,
    PlotDataError,
    PlotError,
)
from figplot.figure import FigSize, Figure, FigureFormat
from figplot.layout import FractionalArea, GridLayout, Layout, SingleLayout
from figplot.series import LineFormat, LineStyle, MarkerFormat, MarkerStyle
from figplot.subplot import Subplot, SubplotFormat, TickDirection

__all__ = [
    "Alignment",
    "Area",
    "AxisConfig",
    "AxisSelector",
    "AxisSlot",
    "BackendError",
    "BadTickLabelsError",
    "BadTickPlacementError",
    "Color",
    "FigSize",
    "Figure",
    "FigureFormat",
    "FileFormat",
    "FontName",
    "FractionalArea",
    "Grid",
    "GridLayout",
    "ImageFormat",
    "InvalidColumnError",
    "InvalidIndexError",
    "InvalidRowError",
    "InvalidSubplotAreaError",
    "Layout",
    "Limits",
    "LineFormat",
    "LineStyle",
    "MarkerFormat",
    "MarkerStyle",
    "PlotDataError",
    "PlotError",
    "SingleLayout",
    "Size",
    "Subplot",
    "SubplotFormat",
    "TickDirection",
    "TickLabels",
    "TickSpacing",
    "figure",
]
