"""
Unit tests for PageCanvas and Canvas.

Tests:
- Document validation and release on construction failure
- Canvas lookup by page number
- Finalization: best-effort canvas close, single save, guaranteed release

Run with: python -m pytest page_annotator/tests/test_page_canvas.py -v
"""

import io
import logging
from unittest.mock import MagicMock

import fitz  # PyMuPDF
import pytest

from page_annotator.config import Settings
from page_annotator.drawer.page_canvas import Canvas, PageCanvas, pdf_bounding_box
from page_annotator.exceptions import CanvasIOError, InvalidArgumentError
from page_annotator.models.geometry import Point


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def document():
    """In-memory PDF: page 1 is 600 x 800, page 2 is A4."""
    doc = fitz.open()
    doc.new_page(width=600, height=800)
    doc.new_page(width=595, height=842)
    yield doc
    if not doc.is_closed:
        doc.close()


@pytest.fixture
def canvases(document, settings):
    page_canvas = PageCanvas(document, settings=settings)
    yield page_canvas
    page_canvas.close()


def mock_document(is_pdf=True, catalog=1, pages_key=("xref", "2 0 R")):
    doc = MagicMock()
    doc.is_closed = False
    doc.is_pdf = is_pdf
    doc.pdf_catalog.return_value = catalog
    doc.xref_get_key.return_value = pages_key
    doc.page_count = 0
    doc.tobytes.return_value = b"%PDF-1.7\n"
    return doc


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Tests for document validation."""

    def test_missing_document(self, settings):
        with pytest.raises(InvalidArgumentError):
            PageCanvas(None, settings=settings)

    def test_closed_document(self, settings):
        doc = fitz.open()
        doc.new_page()
        doc.close()
        with pytest.raises(InvalidArgumentError):
            PageCanvas(doc, settings=settings)

    def test_not_a_pdf_is_released(self, settings):
        doc = mock_document(is_pdf=False)
        with pytest.raises(InvalidArgumentError, match="catalog"):
            PageCanvas(doc, settings=settings)
        doc.close.assert_called_once()

    def test_missing_catalog_is_released(self, settings):
        doc = mock_document(catalog=0)
        with pytest.raises(InvalidArgumentError, match="catalog"):
            PageCanvas(doc, settings=settings)
        doc.close.assert_called_once()

    def test_missing_page_tree_is_released(self, settings):
        doc = mock_document(pages_key=("null", "null"))
        with pytest.raises(InvalidArgumentError, match="pages"):
            PageCanvas(doc, settings=settings)
        doc.close.assert_called_once()

    def test_page_count(self, canvases):
        assert canvases.page_count == 2

    def test_page_bounding_boxes(self, canvases):
        first = canvases.page_geometry(1).bounding_box
        second = canvases.page_geometry(2).bounding_box

        assert first.to_tuple() == pytest.approx((0, 0, 600, 800))
        assert second.to_tuple() == pytest.approx((0, 0, 595, 842))

    def test_crop_box_is_used(self, document):
        page = document[0]
        page.set_cropbox(fitz.Rect(0, 0, 300, 400))
        box = pdf_bounding_box(page)
        assert box.width == pytest.approx(300)
        assert box.height == pytest.approx(400)


# =============================================================================
# Canvas lookup
# =============================================================================


class TestObtain:
    """Tests for PageCanvas.obtain."""

    def test_every_page_has_its_own_canvas(self, canvases):
        first = canvases.obtain(1)
        second = canvases.obtain(2)

        assert isinstance(first, Canvas)
        assert first is not second
        assert first.page_number == 1
        assert second.page_number == 2

    def test_same_canvas_on_repeated_calls(self, canvases):
        assert canvases.obtain(1) is canvases.obtain(1)

    @pytest.mark.parametrize("page_number", [0, 3, -1])
    def test_out_of_range(self, canvases, page_number):
        with pytest.raises(InvalidArgumentError):
            canvases.obtain(page_number)

    def test_out_of_range_details(self, canvases):
        with pytest.raises(InvalidArgumentError) as exc_info:
            canvases.obtain(3)
        assert exc_info.value.details == {"page_number": 3, "page_count": 2}

    def test_obtain_after_release(self, canvases):
        canvases.close()
        with pytest.raises(CanvasIOError):
            canvases.obtain(1)

    def test_page_geometry_after_release(self, canvases):
        canvases.finalize_all(io.BytesIO())
        with pytest.raises(CanvasIOError):
            canvases.page_geometry(1)


# =============================================================================
# Canvas writes
# =============================================================================


class TestCanvasWrites:
    """Tests for Canvas primitives."""

    def test_write_failure_raises_canvas_io_error(self, canvases):
        canvas = canvases.obtain(1)
        canvas._shape = MagicMock()
        canvas._shape.draw_line.side_effect = RuntimeError("content stream broken")

        with pytest.raises(CanvasIOError, match="content stream broken"):
            canvas.stroke_line(Point(0, 0), Point(1, 1), (0, 0, 0), 0.1)

    def test_write_after_close(self, canvases):
        canvas = canvases.obtain(1)
        canvas.close()
        assert canvas.closed
        with pytest.raises(CanvasIOError):
            canvas.show_text("late", Point(10, 10), (0, 0, 0), 12)

    def test_close_is_idempotent(self, canvases):
        canvas = canvases.obtain(2)
        canvas.close()
        canvas.close()
        assert canvas.closed


# =============================================================================
# Finalization
# =============================================================================


class TestFinalizeAll:
    """Tests for PageCanvas.finalize_all."""

    def test_writes_pdf_and_releases_document(self, canvases, document):
        sink = io.BytesIO()
        canvases.finalize_all(sink)

        assert canvases.released
        assert document.is_closed
        with fitz.open(stream=sink.getvalue(), filetype="pdf") as written:
            assert written.page_count == 2

    def test_writes_to_path(self, canvases, tmp_path):
        target = tmp_path / "out.pdf"
        canvases.finalize_all(target)

        assert target.exists()
        with fitz.open(target) as written:
            assert written.page_count == 2

    def test_close_failure_is_skipped(self, canvases, caplog):
        first = canvases.obtain(1)
        second = canvases.obtain(2)
        first.close = MagicMock(side_effect=CanvasIOError("cannot close"))
        second.close = MagicMock(wraps=second.close)
        sink = io.BytesIO()

        with caplog.at_level(logging.WARNING):
            canvases.finalize_all(sink)

        first.close.assert_called_once()
        second.close.assert_called_once()
        assert sink.getvalue().startswith(b"%PDF")
        assert "cannot close" in caplog.text

    def test_canvases_closed_in_page_order(self, canvases):
        calls = []
        for page_number in (1, 2):
            canvas = canvases.obtain(page_number)
            canvas.close = MagicMock(side_effect=lambda n=page_number: calls.append(n))

        canvases.finalize_all(io.BytesIO())
        assert calls == [1, 2]

    def test_save_failure_raises_and_releases(self, canvases, document):
        sink = MagicMock(spec=["write"])
        sink.write.side_effect = OSError("disk full")

        with pytest.raises(CanvasIOError, match="disk full"):
            canvases.finalize_all(sink)

        sink.write.assert_called_once()
        assert canvases.released
        assert document.is_closed

    def test_save_error_wins_over_close_error(self, settings, caplog):
        doc = mock_document()
        doc.close.side_effect = RuntimeError("handle lost")
        page_canvas = PageCanvas(doc, settings=settings)
        sink = MagicMock(spec=["write"])
        sink.write.side_effect = OSError("disk full")

        with caplog.at_level(logging.ERROR):
            with pytest.raises(CanvasIOError, match="disk full"):
                page_canvas.finalize_all(sink)

        doc.close.assert_called_once()
        assert page_canvas.released
        assert "handle lost" in caplog.text

    def test_close_error_raised_after_successful_save(self, settings):
        doc = mock_document()
        doc.close.side_effect = RuntimeError("handle lost")
        page_canvas = PageCanvas(doc, settings=settings)

        with pytest.raises(CanvasIOError, match="handle lost"):
            page_canvas.finalize_all(io.BytesIO())

    def test_finalize_only_once(self, canvases):
        canvases.finalize_all(io.BytesIO())
        with pytest.raises(CanvasIOError):
            canvases.finalize_all(io.BytesIO())

    def test_missing_sink(self, canvases):
        with pytest.raises(InvalidArgumentError):
            canvases.finalize_all(None)
        assert not canvases.released

    def test_context_manager_releases_without_saving(self, document, settings):
        with PageCanvas(document, settings=settings) as page_canvas:
            page_canvas.obtain(1)
        assert page_canvas.released
        assert document.is_closed
