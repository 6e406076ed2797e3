from .normalize import coerce_1d, normalize_series

__all__ = ["coerce_1d", "normalize_series"]
