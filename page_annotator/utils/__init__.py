"""Helper utilities."""

from .colors import BLACK, exclusive_color, normalize_color, to_rgb_array

__all__ = [
    "BLACK",
    "exclusive_color",
    "normalize_color",
    "to_rgb_array",
]
