"""
Geometry Value Types

Immutable points, lines and rectangles in PDF points (1/72 inch).

Coordinates are page-native unless stated otherwise:
- Origin (0, 0) at bottom-left
- x increases rightward
- y increases upward
"""

import math
from dataclasses import dataclass, replace
from typing import Iterator, Optional, Protocol, Tuple


def _require_finite(**values: float) -> None:
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")


@dataclass(frozen=True)
class Point:
    """A point (x, y)."""

    x: float
    y: float

    def __post_init__(self) -> None:
        _require_finite(x=self.x, y=self.y)

    def with_y(self, y: float) -> "Point":
        return replace(self, y=y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Line:
    """A straight line from a start point to an end point."""

    start: Point
    end: Point

    @classmethod
    def from_coords(cls, start_x: float, start_y: float, end_x: float, end_y: float) -> "Line":
        return cls(Point(start_x, start_y), Point(end_x, end_y))

    @property
    def length(self) -> float:
        return math.hypot(self.end.x - self.start.x, self.end.y - self.start.y)


@dataclass(frozen=True)
class Rectangle:
    """
    Axis-aligned rectangle (min_x, min_y, max_x, max_y).

    Only finiteness is enforced. Rectangles derived by coordinate
    adaptation may have min_y > max_y; use is_normalized / normalized()
    where ordered bounds are required.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        _require_finite(
            min_x=self.min_x, min_y=self.min_y, max_x=self.max_x, max_y=self.max_y
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_normalized(self) -> bool:
        """True if min_x <= max_x and min_y <= max_y."""
        return self.min_x <= self.max_x and self.min_y <= self.max_y

    def normalized(self) -> "Rectangle":
        """Return a copy with ordered bounds."""
        return Rectangle(
            min(self.min_x, self.max_x),
            min(self.min_y, self.max_y),
            max(self.min_x, self.max_x),
            max(self.min_y, self.max_y),
        )

    def with_y(self, min_y: Optional[float] = None, max_y: Optional[float] = None) -> "Rectangle":
        return replace(
            self,
            min_y=self.min_y if min_y is None else min_y,
            max_y=self.max_y if max_y is None else max_y,
        )

    def outline(self) -> Tuple[Point, Point, Point, Point, Point]:
        """
        Closed outline starting and ending at (min_x, min_y).

        Order: (min_x, min_y) -> (max_x, min_y) -> (max_x, max_y)
        -> (min_x, max_y) -> (min_x, min_y).
        """
        return (
            Point(self.min_x, self.min_y),
            Point(self.max_x, self.min_y),
            Point(self.max_x, self.max_y),
            Point(self.min_x, self.max_y),
            Point(self.min_x, self.min_y),
        )

    @classmethod
    def from_tuple(cls, bounds: Tuple[float, float, float, float]) -> "Rectangle":
        min_x, min_y, max_x, max_y = bounds
        return cls(min_x, min_y, max_x, max_y)

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


class HasBoundingBox(Protocol):
    """Anything with an optional bounding box."""

    @property
    def bounding_box(self) -> Optional[Rectangle]:
        ...
