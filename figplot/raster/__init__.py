from .backend import RasterCanvas
from .canvas import blend_mask, new_canvas
from .draw_lines import dash_segments, polyline_mask
from .draw_text import load_font, text_extents

__all__ = [
    "RasterCanvas",
    "blend_mask",
    "dash_segments",
    "load_font",
    "new_canvas",
    "polyline_mask",
    "text_extents",
]
