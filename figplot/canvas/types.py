from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Sequence


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Area:
    """Axis-aligned pixel rectangle, y growing upward."""

    xmin: int
    xmax: int
    ymin: int
    ymax: int

    def xsize(self) -> int:
        return self.xmax - self.xmin

    def ysize(self) -> int:
        return self.ymax - self.ymin

    def fractional_to_point(self, frac: Point) -> Point:
        return Point(
            x=self.xmin + frac.x * self.xsize(),
            y=self.ymin + frac.y * self.ysize(),
        )

    def center(self) -> Point:
        return Point(x=self.xmin + self.xsize() / 2.0, y=self.ymin + self.ysize() / 2.0)


@dataclass(frozen=True)
class Color:
    """RGBA color with float channels in [0, 1]."""

    r: float
    g: float
    b: float
    a: float = 1.0

    TRANSPARENT: ClassVar["Color"]
    BLACK: ClassVar["Color"]
    WHITE: ClassVar["Color"]
    RED: ClassVar["Color"]
    ORANGE: ClassVar["Color"]
    YELLOW: ClassVar["Color"]
    GREEN: ClassVar["Color"]
    BLUE: ClassVar["Color"]
    PURPLE: ClassVar["Color"]

    def with_alpha(self, a: float) -> "Color":
        return replace(self, a=a)

    def to_rgba8(self) -> tuple[int, int, int, int]:
        r, g, b, a = (int(round(max(0.0, min(1.0, c)) * 255)) for c in (self.r, self.g, self.b, self.a))
        return (r, g, b, a)

    def to_hex(self) -> str:
        r, g, b, _ = self.to_rgba8()
        return f"#{r:02x}{g:02x}{b:02x}"

    @property
    def transparent(self) -> bool:
        return self.a <= 0.0


Color.TRANSPARENT = Color(0.0, 0.0, 0.0, 0.0)
Color.BLACK = Color(0.0, 0.0, 0.0, 1.0)
Color.WHITE = Color(1.0, 1.0, 1.0, 1.0)
Color.RED = Color(1.0, 0.0, 0.0, 1.0)
Color.ORANGE = Color(1.0, 0.64, 0.0, 1.0)
Color.YELLOW = Color(1.0, 1.0, 0.0, 1.0)
Color.GREEN = Color(0.0, 1.0, 0.0, 1.0)
Color.BLUE = Color(0.0, 0.0, 1.0, 1.0)
Color.PURPLE = Color(0.62, 0.12, 0.94, 1.0)


@dataclass(frozen=True)
class Circle:
    r: int


@dataclass(frozen=True)
class Square:
    l: int


@dataclass(frozen=True)
class Rectangle:
    h: int
    w: int


Shape = Circle | Square | Rectangle


def scale_shape(shape: Shape, mult: int) -> Shape:
    if isinstance(shape, Circle):
        return Circle(r=shape.r * mult)
    if isinstance(shape, Square):
        return Square(l=shape.l * mult)
    return Rectangle(h=shape.h * mult, w=shape.w * mult)


class FontName(Enum):
    ARIAL = "Arial"
    GEORGIA = "Georgia"


class FontSlant(Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class FontWeight(Enum):
    NORMAL = "normal"
    BOLD = "bold"


@dataclass(frozen=True)
class Font:
    name: FontName = FontName.ARIAL
    size: float = 12.0
    slant: FontSlant = FontSlant.NORMAL
    weight: FontWeight = FontWeight.NORMAL


class Alignment(Enum):
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    TOP = "top"
    BOTTOM = "bottom"
    TOP_LEFT = "top_left"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_RIGHT = "bottom_right"


class FileFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"

    @classmethod
    def from_suffix(cls, suffix: str) -> "FileFormat":
        key = suffix.lower().lstrip(".")
        if key == "jpg":
            key = "jpeg"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unsupported file suffix: {suffix!r}") from None


class ImageFormat(Enum):
    BITMAP = "bitmap"
    SVG = "svg"

    @classmethod
    def for_file(cls, file_format: FileFormat) -> "ImageFormat":
        return cls.SVG if file_format is FileFormat.SVG else cls.BITMAP


@dataclass(frozen=True)
class CanvasDescriptor:
    size: Size = Size(width=100, height=100)
    face_color: Color = Color.WHITE
    image_format: ImageFormat = ImageFormat.BITMAP


@dataclass(frozen=True)
class ShapeDescriptor:
    point: Point
    shape: Shape
    fill_color: Color = Color.RED
    line_width: int = 2
    line_color: Color = Color.BLACK
    dashes: Sequence[float] = ()
    clip_area: Area | None = None


@dataclass(frozen=True)
class LineDescriptor:
    p1: Point
    p2: Point
    line_width: int = 2
    line_color: Color = Color.BLACK
    dashes: Sequence[float] = ()
    clip_area: Area | None = None


@dataclass(frozen=True)
class CurveDescriptor:
    points: Sequence[Point]
    line_width: int = 2
    line_color: Color = Color.BLACK
    dashes: Sequence[float] = ()
    clip_area: Area | None = None


@dataclass(frozen=True)
class FillDescriptor:
    points: Sequence[Point]
    fill_color: Color = Color.RED
    clip_area: Area | None = None


@dataclass(frozen=True)
class TextDescriptor:
    text: str
    font: Font = field(default_factory=Font)
    position: Point = Point(0.0, 0.0)
    color: Color = Color.BLACK
    rotation: float = 0.0
    alignment: Alignment = Alignment.CENTER
    clip_area: Area | None = None
