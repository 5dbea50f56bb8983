"""
PDF Drawer

Overlays lines, rectangles, bounding boxes and text labels on PDF pages.

Components:
- CoordinateAdapter: Converts caller coordinates to page-native coordinates
- PageCanvas: Owns one canvas per page and writes the document out once
- DrawStyle: Color, thickness, font size and coordinate-mode flags
- Annotator: Public draw operations
"""

from .coordinate_adapter import CoordinateAdapter, PageGeometry
from .page_canvas import Canvas, PageCanvas, pdf_bounding_box
from .style import DrawStyle
from .annotator import Annotator

__all__ = [
    "CoordinateAdapter",
    "PageGeometry",
    "Canvas",
    "PageCanvas",
    "pdf_bounding_box",
    "DrawStyle",
    "Annotator",
]
