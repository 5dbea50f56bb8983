"""
Configuration settings for page_annotator.

Reads PAGE_ANNOTATOR_* environment variables (and an optional .env file)
and provides typed settings for drawing defaults and PDF output.
"""

import logging
from functools import lru_cache
from typing import Dict, Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Colors used when visualizing analyzed elements (RGB, 0.0-1.0)
DEFAULT_FEATURE_COLORS = {
    "figure": (1.0, 0.0, 0.0),       # red
    "shape": (0.0, 0.6, 0.0),        # green
    "text_block": (0.0, 0.0, 1.0),   # blue
    "paragraph": (1.0, 0.5, 0.0),    # orange
}


class Settings(BaseSettings):
    """Drawing and output settings loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: str = Field(default="INFO", alias="PAGE_ANNOTATOR_LOG_LEVEL")

    # Draw defaults
    default_color: Tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0),
        alias="PAGE_ANNOTATOR_DEFAULT_COLOR",
        description="Stroke and text color (RGB, 0.0-1.0)"
    )
    default_line_thickness: float = Field(
        default=0.1,
        gt=0,
        alias="PAGE_ANNOTATOR_LINE_THICKNESS",
        description="Line width in points"
    )
    default_font_size: float = Field(
        default=12.0,
        gt=0,
        alias="PAGE_ANNOTATOR_FONT_SIZE",
        description="Font size for text labels"
    )
    default_font_name: str = Field(
        default="helv",
        alias="PAGE_ANNOTATOR_FONT_NAME",
        description="Base-14 font short name understood by PyMuPDF (helv = Helvetica)"
    )

    # Output
    save_garbage: int = Field(
        default=0,
        ge=0,
        le=4,
        alias="PAGE_ANNOTATOR_SAVE_GARBAGE",
        description="PyMuPDF garbage collection level when saving"
    )
    save_deflate: bool = Field(default=True, alias="PAGE_ANNOTATOR_SAVE_DEFLATE")

    feature_colors: Dict[str, Tuple[float, float, float]] = Field(
        default_factory=lambda: dict(DEFAULT_FEATURE_COLORS),
        alias="PAGE_ANNOTATOR_FEATURE_COLORS",
        description="Per-feature colors for element visualization"
    )

    def get_feature_color(self, feature: str) -> Tuple[float, float, float]:
        """Get the visualization color for an element feature."""
        return self.feature_colors.get(feature, self.default_color)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging with the package format and level."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
        ]
    )
