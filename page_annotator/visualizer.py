"""
Element Visualizer

Draws the bounding boxes of analyzed page elements (figures, shapes, text
blocks, paragraphs) onto the source PDF, one color per element feature,
and writes the result to a target file.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence, Tuple, Union

from .config import Settings, get_settings
from .drawer.annotator import Annotator
from .drawer.style import DrawStyle
from .exceptions import InvalidArgumentError
from .models.document import ElementFeature, Page

logger = logging.getLogger(__name__)


def validate_path_to_write(path: Optional[Union[Path, str]]) -> Path:
    """
    Check that a visualization can be written to path.

    Raises:
        InvalidArgumentError: If no path is given, the path is a directory,
            or its parent directory does not exist
    """
    if path is None or str(path) == "":
        raise InvalidArgumentError("No target path given.")

    target = Path(path).expanduser()
    if target.is_dir():
        raise InvalidArgumentError(
            f"The target path is a directory: {target}",
            details={"path": str(target)}
        )

    parent = target.parent
    if not parent.is_dir():
        raise InvalidArgumentError(
            f"The parent directory of the target path does not exist: {parent}",
            details={"path": str(target)}
        )

    return target


class ElementVisualizer:
    """Draws element bounding boxes with an Annotator."""

    def __init__(
        self,
        annotator: Annotator,
        colors: Optional[Dict[ElementFeature, Tuple[float, float, float]]] = None,
        thickness: Optional[float] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize the visualizer.

        Args:
            annotator: Annotator for the source PDF
            colors: Color per feature (defaults to settings.feature_colors)
            thickness: Line width (defaults to the annotator's default style)
            settings: Settings used for default colors
        """
        self.annotator = annotator
        settings = settings or get_settings()
        self.colors = colors or {
            feature: settings.get_feature_color(feature.value) for feature in ElementFeature
        }
        base = annotator.default_style
        self._styles: Dict[ElementFeature, DrawStyle] = {
            feature: base.with_options(
                color=self.colors.get(feature, base.color),
                thickness=base.thickness if thickness is None else thickness,
            )
            for feature in ElementFeature
        }

    def visualize_page(self, page: Page, features: Sequence[ElementFeature]) -> int:
        """
        Draw the bounding boxes of the given features on one page.

        Returns:
            Number of boxes drawn
        """
        drawn = 0
        for feature in features:
            style = self._styles[feature]
            for element in page.elements(feature):
                if element.bounding_box is None:
                    continue
                self.annotator.draw_bounding_box(element, page.page_number, style)
                drawn += 1

        logger.debug(f"Page {page.page_number}: drew {drawn} bounding boxes")
        return drawn

    def visualize(self, pages: Iterable[Page], features: Optional[Sequence[ElementFeature]] = None) -> int:
        """Draw every page; all features when none are given."""
        features = list(features) if features else list(ElementFeature)
        return sum(self.visualize_page(page, features) for page in pages)


def visualize_pdf(
    source: Union[Path, str],
    pages: Iterable[Page],
    target: Union[Path, str],
    features: Optional[Sequence[ElementFeature]] = None,
    settings: Optional[Settings] = None
) -> int:
    """
    Write a copy of source with element bounding boxes drawn on it.

    Args:
        source: Path of the analyzed PDF
        pages: Analyzed pages of that PDF
        target: Path of the PDF to write
        features: Features to draw (all when omitted)
        settings: Settings (defaults to get_settings())

    Returns:
        Number of boxes drawn
    """
    target_path = validate_path_to_write(target)
    settings = settings or get_settings()

    with Annotator.from_path(source, settings=settings) as annotator:
        visualizer = ElementVisualizer(annotator, settings=settings)
        drawn = visualizer.visualize(pages, features)
        annotator.write_to(target_path)

    logger.info(f"Visualized {drawn} elements of {source} in {target_path}")
    return drawn
