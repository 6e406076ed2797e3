from __future__ import annotations

from functools import lru_cache
import logging
import math
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from figplot.canvas.align import TextExtents
from figplot.canvas.types import Font, FontName, FontSlant, FontWeight


LOGGER = logging.getLogger(__name__)

FONT_FALLBACK_PATTERNS = {
    FontName.ARIAL: ("arial", "helvetica", "liberationsans", "dejavusans", "freesans"),
    FontName.GEORGIA: ("georgia", "times", "liberationserif", "dejavuserif", "freeserif"),
}
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path.home() / ".fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("C:/Windows/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

AnyFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


def text_extents(text: str, font: Font) -> TextExtents:
    """Ink extents of `text` relative to its left baseline origin, y growing down."""
    if not text:
        return TextExtents(0.0, 0.0, 0.0, 0.0)
    pil_font = load_font(font.name, font.slant, font.weight, font.size)
    left, top, right, bottom = pil_font.getbbox(text, anchor="ls")
    return TextExtents(
        x_bearing=float(left),
        y_bearing=float(top),
        width=float(right - left),
        height=float(bottom - top),
    )


def render_text_mask(text: str, font: Font, rotation: float) -> tuple[np.ndarray, int]:
    """Render `text` rotated clockwise by `rotation` radians about its baseline origin.

    Returns the coverage mask and the offset of the origin from the mask's top-left corner,
    which is the same along both axes.
    """
    pil_font = load_font(font.name, font.slant, font.weight, font.size)
    left, top, right, bottom = pil_font.getbbox(text, anchor="ls")
    reach = int(math.ceil(max(abs(left), abs(top), abs(right), abs(bottom)))) + 2
    side = 2 * reach
    image = Image.new("L", (side, side), 0)
    draw = ImageDraw.Draw(image)
    draw.text((reach, reach), text, fill=255, font=pil_font, anchor="ls")
    if rotation != 0.0:
        image = image.rotate(
            -math.degrees(rotation),
            resample=Image.Resampling.BICUBIC,
            center=(reach, reach),
        )
    return np.asarray(image, dtype=np.uint8), reach


@lru_cache(maxsize=64)
def load_font(name: FontName, slant: FontSlant, weight: FontWeight, size: float) -> AnyFont:
    size_px = max(1, int(round(size)))
    font_path = _resolve_font_path(name, slant, weight)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size_px)
        except OSError:
            LOGGER.warning("could not load font file %s, using default font", font_path)
    else:
        LOGGER.warning("no font file found for %s, using default font", name.value)
    return ImageFont.load_default(size=size_px)


@lru_cache(maxsize=1)
def _font_candidates() -> tuple[Path, ...]:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))
    return tuple(candidates)


def _style_score(stem: str, slant: FontSlant, weight: FontWeight) -> int:
    bold = "bold" in stem or stem.endswith("bd") or stem.endswith("bi")
    italic = "italic" in stem or "oblique" in stem or (stem.endswith("i") and not stem.endswith("ui"))
    score = 0
    if bold == (weight is FontWeight.BOLD):
        score += 2
    if italic == (slant is not FontSlant.NORMAL):
        score += 1
    return score


def _resolve_font_path(name: FontName, slant: FontSlant, weight: FontWeight) -> Path | None:
    candidates = _font_candidates()
    for pattern in FONT_FALLBACK_PATTERNS[name]:
        matches = [path for path in candidates if pattern in path.stem.lower().replace(" ", "").replace("-", "")]
        if matches:
            return max(matches, key=lambda path: _style_score(path.stem.lower(), slant, weight))
    return None
