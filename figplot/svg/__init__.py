from .backend import SvgCanvas

__all__ = ["SvgCanvas"]
