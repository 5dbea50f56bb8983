"""
Tests for element visualization.

Tests:
- Target path validation
- Bounding boxes drawn per feature with per-feature styles
- visualize_pdf end to end

Run with: python -m pytest page_annotator/tests/test_visualizer.py -v
"""

from unittest.mock import MagicMock

import fitz  # PyMuPDF
import pytest

from page_annotator.config import Settings
from page_annotator.drawer.style import DrawStyle
from page_annotator.exceptions import InvalidArgumentError
from page_annotator.models.document import (
    ElementFeature,
    Figure,
    Page,
    Paragraph,
    Position,
    Shape,
    TextBlock,
)
from page_annotator.models.geometry import Rectangle
from page_annotator.visualizer import ElementVisualizer, validate_path_to_write, visualize_pdf


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def source_pdf(tmp_path):
    path = tmp_path / "source.pdf"
    doc = fitz.open()
    doc.new_page(width=600, height=800)
    doc.new_page(width=600, height=800)
    doc.save(path)
    doc.close()
    return path


@pytest.fixture
def pages():
    first = Page(page_number=1, bounding_box=Rectangle(0, 0, 600, 800))
    second = Page(page_number=2, bounding_box=Rectangle(0, 0, 600, 800))

    first.add_figure(Figure(position=Position(first, Rectangle(50, 500, 250, 700))))
    first.add_text_block(TextBlock(position=Position(first, Rectangle(50, 100, 550, 200)), text="Intro"))
    first.add_shape(Shape(position=None))
    second.add_paragraph(Paragraph(position=Position(second, Rectangle(60, 60, 540, 400)), text="Body"))
    return [first, second]


@pytest.fixture
def annotator():
    ann = MagicMock()
    ann.default_style = DrawStyle(thickness=0.5)
    return ann


# =============================================================================
# Path validation
# =============================================================================


class TestValidatePathToWrite:
    """Tests for validate_path_to_write."""

    def test_valid_path(self, tmp_path):
        assert validate_path_to_write(str(tmp_path / "out.pdf")) == tmp_path / "out.pdf"

    @pytest.mark.parametrize("path", [None, ""])
    def test_missing_path(self, path):
        with pytest.raises(InvalidArgumentError):
            validate_path_to_write(path)

    def test_directory(self, tmp_path):
        with pytest.raises(InvalidArgumentError, match="directory"):
            validate_path_to_write(tmp_path)

    def test_missing_parent(self, tmp_path):
        with pytest.raises(InvalidArgumentError, match="parent"):
            validate_path_to_write(tmp_path / "missing" / "out.pdf")


# =============================================================================
# ElementVisualizer
# =============================================================================


class TestElementVisualizer:
    """Tests for ElementVisualizer with a mocked annotator."""

    def test_draws_every_positioned_element(self, annotator, pages, settings):
        visualizer = ElementVisualizer(annotator, settings=settings)

        assert visualizer.visualize(pages) == 3
        assert annotator.draw_bounding_box.call_count == 3

    def test_feature_styles(self, annotator, pages, settings):
        visualizer = ElementVisualizer(annotator, settings=settings)
        visualizer.visualize_page(pages[0], [ElementFeature.FIGURE])

        element, page_number, style = annotator.draw_bounding_box.call_args[0]
        assert element is pages[0].figures[0]
        assert page_number == 1
        assert style.color == settings.get_feature_color("figure")
        assert style.thickness == 0.5

    def test_feature_filter(self, annotator, pages, settings):
        visualizer = ElementVisualizer(annotator, settings=settings)
        assert visualizer.visualize(pages, [ElementFeature.PARAGRAPH]) == 1

    def test_custom_colors_and_thickness(self, annotator, pages, settings):
        visualizer = ElementVisualizer(
            annotator,
            colors={ElementFeature.TEXT_BLOCK: (0, 0, 0)},
            thickness=3,
            settings=settings
        )
        visualizer.visualize_page(pages[0], [ElementFeature.TEXT_BLOCK])

        style = annotator.draw_bounding_box.call_args[0][2]
        assert style.color == (0.0, 0.0, 0.0)
        assert style.thickness == 3


# =============================================================================
# visualize_pdf
# =============================================================================


class TestVisualizePdf:
    """End-to-end tests for visualize_pdf."""

    def test_writes_annotated_copy(self, source_pdf, pages, tmp_path, settings):
        target = tmp_path / "visualized.pdf"

        drawn = visualize_pdf(source_pdf, pages, target, settings=settings)

        assert drawn == 3
        with fitz.open(target) as written:
            assert len(written[0].get_drawings()) == 2
            assert len(written[1].get_drawings()) == 1

    def test_invalid_target_leaves_nothing_behind(self, source_pdf, pages, tmp_path, settings):
        with pytest.raises(InvalidArgumentError):
            visualize_pdf(source_pdf, pages, tmp_path / "nope" / "out.pdf", settings=settings)
        assert not (tmp_path / "nope").exists()
