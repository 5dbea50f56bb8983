"""Geometry and document model types."""

from .geometry import HasBoundingBox, Line, Point, Rectangle
from .document import (
    ElementFeature,
    Figure,
    Page,
    Paragraph,
    PdfElement,
    Position,
    PositionedElement,
    Shape,
    TextBlock,
)

__all__ = [
    "HasBoundingBox",
    "Line",
    "Point",
    "Rectangle",
    "ElementFeature",
    "Figure",
    "Page",
    "Paragraph",
    "PdfElement",
    "Position",
    "PositionedElement",
    "Shape",
    "TextBlock",
]
