"""
Draw Style

The configuration value passed to every draw operation.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..config import Settings, get_settings
from ..exceptions import InvalidArgumentError
from ..utils.colors import BLACK, RGB, normalize_color

_FLAG = TypeAdapter(bool)


def _parse_flag(name: str, value: Any) -> bool:
    """Parse a boolean flag the way Settings parses env values ("false" -> False)."""
    try:
        return _FLAG.validate_python(value)
    except PydanticValidationError as e:
        raise InvalidArgumentError(
            f"{name} must be a boolean, got {value!r}",
            details={name: value}
        ) from e


@dataclass(frozen=True)
class DrawStyle:
    """Configuration for annotation appearance and coordinate handling."""

    # Stroke color for lines/rectangles, fill color for text (RGB, 0.0-1.0)
    color: RGB = BLACK

    # Line width in points
    thickness: float = 0.1

    # Font size for text labels
    font_size: float = 12.0

    # Caller coordinates measure y downward from the top of the page
    relative_to_top_left: bool = False

    # Rectangles are anchored at their top edge rather than their bottom edge
    origin_in_top_left: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "color", normalize_color(self.color))
        if self.thickness < 0:
            raise InvalidArgumentError(
                f"thickness must not be negative, got {self.thickness}",
                details={"thickness": self.thickness}
            )
        if self.font_size <= 0:
            raise InvalidArgumentError(
                f"font_size must be positive, got {self.font_size}",
                details={"font_size": self.font_size}
            )

    def with_options(self, **options: Any) -> "DrawStyle":
        """Return a copy with the given fields replaced."""
        if not options:
            return self
        unknown = set(options) - {f.name for f in fields(self)}
        if unknown:
            raise InvalidArgumentError(
                f"Unknown draw options: {', '.join(sorted(unknown))}",
                details={"options": sorted(unknown)}
            )
        return replace(self, **options)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "DrawStyle":
        """Create the default style from settings."""
        settings = settings or get_settings()
        return cls(
            color=settings.default_color,
            thickness=settings.default_line_thickness,
            font_size=settings.default_font_size,
        )

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DrawStyle":
        """
        Create style from configuration dictionary.

        Flag values accept booleans and the usual strings ("true", "false",
        "1", "0", "yes", "no"); anything else raises InvalidArgumentError.
        """
        style = cls()

        if "color" in config:
            style = replace(style, color=config["color"])

        if "thickness" in config:
            style = replace(style, thickness=float(config["thickness"]))

        if "font_size" in config:
            style = replace(style, font_size=float(config["font_size"]))

        for flag in ("relative_to_top_left", "origin_in_top_left"):
            if flag in config:
                style = replace(style, **{flag: _parse_flag(flag, config[flag])})

        return style
