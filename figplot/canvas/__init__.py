from .align import TextExtents, align_text
from .base import Canvas, create_canvas
from .types import (
    Alignment,
    Area,
    CanvasDescriptor,
    Circle,
    Color,
    CurveDescriptor,
    FileFormat,
    FillDescriptor,
    Font,
    FontName,
    FontSlant,
    FontWeight,
    ImageFormat,
    LineDescriptor,
    Point,
    Rectangle,
    Shape,
    ShapeDescriptor,
    Size,
    Square,
    TextDescriptor,
    scale_shape,
)

__all__ = [
    "Alignment",
    "Area",
    "Canvas",
    "CanvasDescriptor",
    "Circle",
    "Color",
    "CurveDescriptor",
    "FileFormat",
    "FillDescriptor",
    "Font",
    "FontName",
    "FontSlant",
    "FontWeight",
    "ImageFormat",
    "LineDescriptor",
    "Point",
    "Rectangle",
    "Shape",
    "ShapeDescriptor",
    "Size",
    "Square",
    "TextDescriptor",
    "TextExtents",
    "align_text",
    "create_canvas",
    "scale_shape",
]
