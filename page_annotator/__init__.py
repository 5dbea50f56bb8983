"""
Page Annotator - Visual debugging overlays for analyzed PDF pages

Draws lines, rectangles, bounding boxes and text labels onto the pages of a
parsed PDF so that the output of a layout analyzer (figures, shapes, text
blocks, paragraphs) can be inspected visually. Also defines the spatial
order (page number, then left edge) used to compare positioned elements.

Components:
    - models: Point/Line/Rectangle geometry and the Page/Position document model
    - drawer: CoordinateAdapter, PageCanvas, DrawStyle and the Annotator
    - ordering: absent-last (page, min_x) comparator
    - visualizer: draws element bounding boxes per feature type
    - utils.colors: color normalization and single-color image detection

Usage:
    from page_annotator import Annotator, Rectangle

    with Annotator.from_path("/path/to/paper.pdf") as annotator:
        annotator.draw_rectangle(Rectangle(10, 10, 50, 50), 1, color="#ff0000")
        annotator.write_to("/path/to/paper.debug.pdf")
"""

__version__ = "1.0.0"

from .config import Settings, configure_logging, get_settings
from .drawer import Annotator, CoordinateAdapter, DrawStyle, PageCanvas
from .exceptions import AnnotatorError, CanvasIOError, InvalidArgumentError
from .models import (
    ElementFeature,
    Figure,
    Line,
    Page,
    Paragraph,
    Point,
    Position,
    Rectangle,
    Shape,
    TextBlock,
)
from .ordering import MIN_X_ORDER, compare_by_min_x, min_x_sort_key, sort_by_min_x
from .visualizer import ElementVisualizer, validate_path_to_write, visualize_pdf

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
    "Annotator",
    "CoordinateAdapter",
    "DrawStyle",
    "PageCanvas",
    "AnnotatorError",
    "CanvasIOError",
    "InvalidArgumentError",
    "ElementFeature",
    "Figure",
    "Line",
    "Page",
    "Paragraph",
    "Point",
    "Position",
    "Rectangle",
    "Shape",
    "TextBlock",
    "MIN_X_ORDER",
    "compare_by_min_x",
    "min_x_sort_key",
    "sort_by_min_x",
    "ElementVisualizer",
    "validate_path_to_write",
    "visualize_pdf",
]
