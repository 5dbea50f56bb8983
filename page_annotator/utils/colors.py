"""
Color Utilities

Normalizes user-supplied colors to the RGB float tuples PyMuPDF expects,
decodes packed RGB values, and detects single-color images.
"""

import logging
from typing import Any, Optional, Sequence, Tuple

from PIL import Image

from ..exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]

BLACK: RGB = (0.0, 0.0, 0.0)


def to_rgb_array(pixel: int) -> Tuple[float, float, float, float]:
    """
    Decode a packed ARGB value.

    Args:
        pixel: Packed 0xAARRGGBB value

    Returns:
        (red, green, blue, alpha) with red/green/blue in 0.0-1.0 and
        alpha left in 0-255
    """
    alpha = float((pixel >> 24) & 0xFF)
    red = ((pixel >> 16) & 0xFF) / 255.0
    green = ((pixel >> 8) & 0xFF) / 255.0
    blue = (pixel & 0xFF) / 255.0
    return (red, green, blue, alpha)


def normalize_color(value: Any) -> RGB:
    """
    Convert a color to an RGB tuple in 0.0-1.0.

    Accepts:
        - (r, g, b) in 0.0-1.0
        - (r, g, b) in 0-255 (converted when any component exceeds 1)
        - "#rrggbb" hex strings
        - packed 0xRRGGBB ints

    Raises:
        InvalidArgumentError: If the value is not a recognizable color
    """
    if isinstance(value, str):
        return _hex_to_rgb(value)

    if isinstance(value, int) and not isinstance(value, bool):
        if not 0 <= value <= 0xFFFFFF:
            raise InvalidArgumentError(
                f"Packed RGB value out of range: {value!r}",
                details={"color": value}
            )
        red, green, blue, _ = to_rgb_array(value)
        return (red, green, blue)

    if isinstance(value, Sequence) and len(value) == 3:
        try:
            components = [float(c) for c in value]
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(
                f"Color components must be numbers: {value!r}",
                details={"color": value}
            ) from e

        # Convert from 0-255 to 0.0-1.0 if needed
        if any(c > 1 for c in components):
            components = [c / 255.0 for c in components]

        if any(c < 0 or c > 1 for c in components):
            raise InvalidArgumentError(
                f"Color components out of range: {value!r}",
                details={"color": value}
            )
        return (components[0], components[1], components[2])

    raise InvalidArgumentError(f"Unsupported color: {value!r}", details={"color": value})


def _hex_to_rgb(hex_color: str) -> RGB:
    """Convert "#rrggbb" to an RGB tuple."""
    digits = hex_color.strip().lstrip("#")
    if len(digits) != 6:
        raise InvalidArgumentError(
            f"Hex colors must have 6 digits: {hex_color!r}",
            details={"color": hex_color}
        )
    try:
        r, g, b = tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as e:
        raise InvalidArgumentError(
            f"Invalid hex color: {hex_color!r}",
            details={"color": hex_color}
        ) from e
    return (r / 255.0, g / 255.0, b / 255.0)


def exclusive_color(image: Optional[Image.Image]) -> Optional[Tuple[float, float, float, float]]:
    """
    Return the color of an image that consists of a single color.

    Args:
        image: Pillow image (any mode)

    Returns:
        (red, green, blue, alpha) as from to_rgb_array, or None if the image
        is missing, empty, or has at least two different colors
    """
    if image is None:
        return None

    width, height = image.size
    if width == 0 or height == 0:
        return None

    # getcolors returns None once the image has more than maxcolors colors
    colors = image.convert("RGBA").getcolors(maxcolors=1)
    if not colors:
        return None

    _, (r, g, b, a) = colors[0]
    packed = (a << 24) | (r << 16) | (g << 8) | b
    logger.debug(f"Image {width}x{height} has exclusive color #{packed:08x}")
    return to_rgb_array(packed)
