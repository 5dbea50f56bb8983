"""
Coordinate Adapter

Converts caller geometry into page-native coordinates (origin bottom-left,
y upward) using the bounding box of the target page.

Two flags control the conversion:
- relative_to_top_left: caller y values are measured downward from the top
  of the page and are flipped against the page's max_y.
- origin_in_top_left: for rectangles only. When false, the top edge is
  re-derived from the (possibly flipped) bottom edge plus the original
  height.

Rectangle bounds are flipped independently and never re-ordered, so some
flag combinations return rectangles with min_y > max_y. Callers that need
ordered bounds use Rectangle.normalized().
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from ..exceptions import InvalidArgumentError
from ..models.geometry import Line, Point, Rectangle


class HasPageBox(Protocol):
    """A page-like object with a bounding box."""

    @property
    def bounding_box(self) -> Optional[Rectangle]:
        ...


@dataclass(frozen=True)
class PageGeometry:
    """Number and bounding box of a page in the source document."""

    page_number: int  # 1-indexed
    bounding_box: Rectangle


def _page_max_y(page: HasPageBox) -> float:
    box = page.bounding_box
    if box is None:
        raise InvalidArgumentError(
            "Page has no bounding box to adapt coordinates against.",
            details={"page": repr(page)}
        )
    return box.max_y


class CoordinateAdapter:
    """Pure transforms between caller-relative and page-native coordinates."""

    @staticmethod
    def adapt_point(point: Point, page: HasPageBox, relative_to_top_left: bool = False) -> Point:
        """
        Adapt a point to page-native coordinates.

        Args:
            point: The point to adapt
            page: Page containing the point
            relative_to_top_left: Whether the point's y is measured from the top

        Returns:
            A new Point; equal to the input when no flag applies
        """
        if relative_to_top_left:
            return Point(point.x, _page_max_y(page) - point.y)
        return Point(point.x, point.y)

    @staticmethod
    def adapt_line(line: Line, page: HasPageBox, relative_to_top_left: bool = False) -> Line:
        """Adapt both endpoints of a line independently."""
        return Line(
            CoordinateAdapter.adapt_point(line.start, page, relative_to_top_left),
            CoordinateAdapter.adapt_point(line.end, page, relative_to_top_left),
        )

    @staticmethod
    def adapt_rectangle(
        rect: Rectangle,
        page: HasPageBox,
        relative_to_top_left: bool = False,
        origin_in_top_left: bool = False
    ) -> Rectangle:
        """
        Adapt a rectangle to page-native coordinates.

        Args:
            rect: The rectangle to adapt
            page: Page containing the rectangle
            relative_to_top_left: Flip min_y and max_y against the page's max_y
            origin_in_top_left: When false, set max_y = min_y + original height
                after any flip

        Returns:
            A new Rectangle; bounds are not re-ordered
        """
        adapted = Rectangle(rect.min_x, rect.min_y, rect.max_x, rect.max_y)

        if relative_to_top_left:
            page_max_y = _page_max_y(page)
            adapted = adapted.with_y(
                min_y=page_max_y - rect.min_y,
                max_y=page_max_y - rect.max_y,
            )

        if not origin_in_top_left:
            adapted = adapted.with_y(max_y=adapted.min_y + rect.height)

        return adapted
