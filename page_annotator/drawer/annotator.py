"""
Annotator

Draws lines, rectangles, bounding boxes and text labels onto the pages of a
PDF for visual debugging of layout analysis results, then writes the
annotated document out.

Every draw operation:
1. Obtains the canvas of the target page
2. Adapts the geometry to page-native coordinates
3. Issues stroke/text commands to the canvas

Usage:
    with Annotator.from_path("paper.pdf") as annotator:
        annotator.draw_rectangle(Rectangle(10, 10, 50, 50), 1, color=(1, 0, 0))
        annotator.draw_text("Fig. 1", 1, Point(10, 55))
        with open("paper.debug.pdf", "wb") as out:
            annotator.write_to(out)
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

import fitz  # PyMuPDF

from ..config import Settings, get_settings
from ..exceptions import InvalidArgumentError
from ..models.geometry import HasBoundingBox, Line, Point, Rectangle
from .coordinate_adapter import CoordinateAdapter
from .page_canvas import OutputSink, PageCanvas
from .style import DrawStyle

logger = logging.getLogger(__name__)


class Annotator:
    """Draws geometric primitives onto the pages of a PDF document."""

    def __init__(
        self,
        document: fitz.Document,
        default_style: Optional[DrawStyle] = None,
        settings: Optional[Settings] = None
    ):
        """
        Take over a document and open a canvas on each page.

        Args:
            document: Open PyMuPDF document, closed by write_to() or close()
            default_style: Style used when a draw call passes none
            settings: Drawing/output settings (defaults to get_settings())

        Raises:
            InvalidArgumentError: If the document is missing or malformed
        """
        self.settings = settings or get_settings()
        self.adapter = CoordinateAdapter()
        self.canvases = PageCanvas(document, settings=self.settings)
        try:
            self.default_style = default_style or DrawStyle.from_settings(self.settings)
        except InvalidArgumentError:
            self.canvases.close()
            raise

    @classmethod
    def from_path(
        cls,
        pdf_path: Union[Path, str],
        default_style: Optional[DrawStyle] = None,
        settings: Optional[Settings] = None
    ) -> "Annotator":
        """Open a PDF file and create an annotator for it."""
        if pdf_path is None:
            raise InvalidArgumentError("No PDF file given.")
        logger.debug(f"Opening {pdf_path} for annotation")
        return cls(fitz.open(Path(pdf_path)), default_style=default_style, settings=settings)

    @classmethod
    def from_bytes(
        cls,
        pdf_bytes: bytes,
        default_style: Optional[DrawStyle] = None,
        settings: Optional[Settings] = None
    ) -> "Annotator":
        """Open a PDF held in memory and create an annotator for it."""
        if not pdf_bytes:
            raise InvalidArgumentError("No PDF data given.")
        return cls(
            fitz.open(stream=pdf_bytes, filetype="pdf"),
            default_style=default_style,
            settings=settings
        )

    @property
    def page_count(self) -> int:
        return self.canvases.page_count

    def _resolve_style(self, style: Optional[DrawStyle], options: dict) -> DrawStyle:
        return (style or self.default_style).with_options(**options)

    # ==========================================================================

    def draw_line(
        self,
        line: Line,
        page_number: int,
        style: Optional[DrawStyle] = None,
        **options: Any
    ) -> None:
        """
        Draw a line.

        Args:
            line: The line to draw
            page_number: 1-indexed page number
            style: Draw style (defaults to the annotator's default style)
            **options: DrawStyle fields overriding the style
        """
        style = self._resolve_style(style, options)
        canvas = self.canvases.obtain(page_number)
        page = self.canvases.page_geometry(page_number)

        adapted = self.adapter.adapt_line(line, page, style.relative_to_top_left)
        canvas.stroke_line(adapted.start, adapted.end, style.color, style.thickness)

    def draw_rectangle(
        self,
        rect: Optional[Rectangle],
        page_number: int,
        style: Optional[DrawStyle] = None,
        **options: Any
    ) -> None:
        """
        Draw the outline of a rectangle. A missing rectangle draws nothing.

        Args:
            rect: The rectangle to draw, or None
            page_number: 1-indexed page number
            style: Draw style (defaults to the annotator's default style)
            **options: DrawStyle fields overriding the style
        """
        if rect is None:
            return
        style = self._resolve_style(style, options)
        canvas = self.canvases.obtain(page_number)
        page = self.canvases.page_geometry(page_number)

        adapted = self.adapter.adapt_rectangle(
            rect, page, style.relative_to_top_left, style.origin_in_top_left
        )
        canvas.stroke_polygon(adapted.outline(), style.color, style.thickness)

    def draw_bounding_box(
        self,
        element: HasBoundingBox,
        page_number: int,
        style: Optional[DrawStyle] = None,
        **options: Any
    ) -> None:
        """Draw the bounding box of an element (nothing if it has none)."""
        self.draw_rectangle(element.bounding_box, page_number, style, **options)

    def draw_text(
        self,
        text: str,
        page_number: int,
        point: Optional[Point] = None,
        style: Optional[DrawStyle] = None,
        **options: Any
    ) -> None:
        """
        Draw a text label.

        Args:
            text: The text to show
            page_number: 1-indexed page number
            point: Baseline start of the text (defaults to the origin)
            style: Draw style (defaults to the annotator's default style)
            **options: DrawStyle fields overriding the style
        """
        style = self._resolve_style(style, options)
        canvas = self.canvases.obtain(page_number)
        page = self.canvases.page_geometry(page_number)

        adapted = self.adapter.adapt_point(point or Point(0, 0), page, style.relative_to_top_left)
        canvas.show_text(text, adapted, style.color, style.font_size)

    # ==========================================================================

    def write_to(self, output_sink: OutputSink) -> None:
        """
        Finalize all canvases and write the annotated PDF.

        Args:
            output_sink: Writable binary stream or a target file path

        Raises:
            CanvasIOError: If saving fails; the document is released anyway
        """
        self.canvases.finalize_all(output_sink)

    def close(self) -> None:
        """Release the document without writing it."""
        self.canvases.close()

    def __enter__(self) -> "Annotator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
