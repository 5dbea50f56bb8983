"""
Page Canvas

Owns one drawable surface per page of a PDF document. Surfaces are opened
together when the document is handed over and committed together when the
document is written out.

A Canvas wraps a PyMuPDF Shape. Callers pass page-native coordinates
(PDF space, origin bottom-left); the canvas maps them into PyMuPDF's
top-left page space with the page's transformation matrix before drawing.
"""

import logging
import os
from contextlib import ExitStack, contextmanager
from typing import BinaryIO, Dict, Iterator, Optional, Sequence, Union

import fitz  # PyMuPDF

from ..config import Settings, get_settings
from ..exceptions import CanvasIOError, InvalidArgumentError
from ..models.geometry import Point, Rectangle
from ..utils.colors import RGB
from .coordinate_adapter import PageGeometry

logger = logging.getLogger(__name__)

OutputSink = Union[BinaryIO, str, "os.PathLike[str]"]


def pdf_bounding_box(page: fitz.Page) -> Rectangle:
    """
    Get the visible area of a page in PDF coordinates.

    The crop box is used; PyMuPDF falls back to the media box when a page
    defines no crop box.
    """
    cropbox = page.cropbox
    if cropbox is None or cropbox.is_empty:
        cropbox = page.mediabox
    box = fitz.Rect(0, 0, cropbox.width, cropbox.height) * ~page.transformation_matrix
    return Rectangle(box.x0, box.y0, box.x1, box.y1)


class Canvas:
    """Drawable surface for a single page."""

    def __init__(self, page: fitz.Page, page_number: int, font_name: str = "helv"):
        """
        Open a canvas on a page.

        Args:
            page: PyMuPDF page object
            page_number: 1-indexed page number
            font_name: Font used for text
        """
        self.page_number = page_number
        self.font_name = font_name
        self._ctm = page.transformation_matrix
        self._shape = page.new_shape()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _to_page_space(self, point: Point) -> fitz.Point:
        return fitz.Point(point.x, point.y) * self._ctm

    @contextmanager
    def _writing(self, what: str) -> Iterator[None]:
        if self._closed:
            raise CanvasIOError(
                f"Canvas of page {self.page_number} is already closed",
                details={"page_number": self.page_number, "operation": what}
            )
        try:
            yield
        except Exception as e:
            raise CanvasIOError(
                f"Failed to {what} on page {self.page_number}: {e}",
                details={"page_number": self.page_number, "operation": what}
            ) from e

    def stroke_line(self, start: Point, end: Point, color: RGB, width: float) -> None:
        """Stroke a straight line."""
        with self._writing("draw line"):
            self._shape.draw_line(self._to_page_space(start), self._to_page_space(end))
            self._shape.finish(color=color, width=width, closePath=False)

    def stroke_polygon(self, points: Sequence[Point], color: RGB, width: float) -> None:
        """Stroke a path through the given points, in order."""
        with self._writing("draw path"):
            self._shape.draw_polyline([self._to_page_space(p) for p in points])
            self._shape.finish(color=color, width=width, closePath=False)

    def show_text(self, text: str, origin: Point, color: RGB, font_size: float) -> None:
        """Show text with its baseline starting at origin."""
        with self._writing("show text"):
            self._shape.insert_text(
                self._to_page_space(origin),
                text,
                fontname=self.font_name,
                fontsize=font_size,
                color=color
            )

    def close(self) -> None:
        """Commit everything drawn so far to the page's content stream."""
        if self._closed:
            return
        self._closed = True
        try:
            self._shape.commit(overlay=True)
        except Exception as e:
            raise CanvasIOError(
                f"Failed to close canvas of page {self.page_number}: {e}",
                details={"page_number": self.page_number}
            ) from e

    def discard(self) -> None:
        """Drop pending drawings without writing them."""
        self._closed = True


class PageCanvas:
    """
    Canvas collection for one PDF document.

    The document and all canvases are acquired in the constructor and
    released together by finalize_all() or close(), whichever comes first.
    A document that fails validation is closed before the error propagates.
    """

    def __init__(self, document: fitz.Document, settings: Optional[Settings] = None):
        """
        Open one canvas per page.

        Args:
            document: Open PyMuPDF document; ownership passes to this object
            settings: Drawing/output settings (defaults to get_settings())

        Raises:
            InvalidArgumentError: If the document is missing, not a PDF, or has
                no page tree
        """
        if document is None:
            raise InvalidArgumentError("No PDF document given.")

        self._settings = settings or get_settings()
        self._document = document
        self._canvases: Dict[int, Canvas] = {}
        self._geometries: Dict[int, PageGeometry] = {}
        self._released = False

        with ExitStack() as stack:
            stack.callback(self._close_document)

            self._validate_document(document)

            for index in range(document.page_count):
                page_number = index + 1
                page = document[index]
                canvas = Canvas(page, page_number, font_name=self._settings.default_font_name)
                stack.callback(canvas.discard)
                self._canvases[page_number] = canvas
                self._geometries[page_number] = PageGeometry(page_number, pdf_bounding_box(page))

            self._resources = stack.pop_all()

        logger.debug(f"Opened {len(self._canvases)} page canvases")

    @staticmethod
    def _validate_document(document: fitz.Document) -> None:
        if document.is_closed:
            raise InvalidArgumentError("The given PDF document is closed.")

        if not document.is_pdf:
            raise InvalidArgumentError("No document catalog given.")

        catalog = document.pdf_catalog()
        if not catalog:
            raise InvalidArgumentError("No document catalog given.")

        pages_type, _ = document.xref_get_key(catalog, "Pages")
        if pages_type == "null":
            raise InvalidArgumentError("No pages given.")

    @property
    def page_count(self) -> int:
        return len(self._canvases)

    @property
    def released(self) -> bool:
        return self._released

    def _ensure_open(self) -> None:
        if self._released:
            raise CanvasIOError("The PDF document was already released.")

    def _check_page_number(self, page_number: int) -> None:
        if page_number not in self._canvases:
            raise InvalidArgumentError(
                f"The given page number is invalid: {page_number} (1..{self.page_count})",
                details={"page_number": page_number, "page_count": self.page_count}
            )

    def obtain(self, page_number: int) -> Canvas:
        """
        Get the canvas of a page.

        Raises:
            InvalidArgumentError: If page_number is outside 1..page_count
            CanvasIOError: If the document was already released
        """
        self._ensure_open()
        self._check_page_number(page_number)
        return self._canvases[page_number]

    def page_geometry(self, page_number: int) -> PageGeometry:
        """Get the number and PDF-space bounding box of a page."""
        self._ensure_open()
        self._check_page_number(page_number)
        return self._geometries[page_number]

    def finalize_all(self, output_sink: OutputSink) -> None:
        """
        Close every canvas, save the document, and release it.

        Canvas close failures are logged and skipped so the remaining pages
        still get written. A save failure raises. The document is released
        in every case.

        Args:
            output_sink: Writable binary stream or a target file path

        Raises:
            InvalidArgumentError: If no output sink is given
            CanvasIOError: If saving the document fails
        """
        if output_sink is None:
            raise InvalidArgumentError("No output sink given.")
        self._ensure_open()
        save_failed = False
        try:
            for page_number in sorted(self._canvases):
                try:
                    self._canvases[page_number].close()
                except CanvasIOError as e:
                    logger.warning(f"Skipping canvas of page {page_number}: {e}")

            self._save(output_sink)
        except Exception:
            save_failed = True
            raise
        finally:
            try:
                self._release()
            except CanvasIOError as e:
                if not save_failed:
                    raise
                # Keep the save error as the one the caller sees
                logger.error(f"Releasing the PDF after a failed save also failed: {e}")

    def _save(self, output_sink: OutputSink) -> None:
        options = {
            "garbage": self._settings.save_garbage,
            "deflate": self._settings.save_deflate,
        }
        try:
            if isinstance(output_sink, (str, os.PathLike)):
                self._document.save(os.fspath(output_sink), **options)
                logger.info(f"Saved annotated PDF to {os.fspath(output_sink)}")
            else:
                data = self._document.tobytes(**options)
                output_sink.write(data)
                logger.info(f"Wrote annotated PDF ({len(data)} bytes)")
        except Exception as e:
            logger.error(f"Saving the annotated PDF failed: {e}")
            raise CanvasIOError(f"Error on visualization: {e}") from e

    def close(self) -> None:
        """Release canvases and document without saving. Safe to call twice."""
        if not self._released:
            self._release()

    def _release(self) -> None:
        self._released = True
        self._resources.close()

    def _close_document(self) -> None:
        if self._document.is_closed:
            return
        try:
            self._document.close()
        except Exception as e:
            raise CanvasIOError(f"Error on closing the pdf: {e}") from e

    def __enter__(self) -> "PageCanvas":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
