"""
Position Ordering

Orders positioned elements by page number, then by the left edge of their
bounding rectangle. Missing values sort after present ones at every level:

1. Missing element
2. Missing position
3. Missing page, then ascending page number
4. Missing rectangle, then ascending min_x

Two elements that are both missing a value at some level compare equal
there and no later level is consulted. This is the horizontal part of
reading order; vertical refinement happens elsewhere.
"""

from functools import cmp_to_key
from typing import Any, Iterable, List, Optional, Tuple

from .models.document import PositionedElement

# Sort key: a missing value ends the key with ABSENT, which outranks PRESENT.
PRESENT = 0
ABSENT = 1


def _absent_last(value: Optional[Any]) -> Tuple[int, ...]:
    return (ABSENT,) if value is None else (PRESENT,)


def min_x_sort_key(element: Optional[PositionedElement]) -> Tuple[Any, ...]:
    """Build the sort key of an element."""
    key: Tuple[Any, ...] = _absent_last(element)
    if element is None:
        return key

    position = element.position
    key += _absent_last(position)
    if position is None:
        return key

    key += _absent_last(position.page)
    if position.page is None:
        return key
    key += (position.page.page_number,)

    rectangle = position.rectangle
    key += _absent_last(rectangle)
    if rectangle is None:
        return key
    return key + (rectangle.min_x,)


def compare_by_min_x(
    element1: Optional[PositionedElement],
    element2: Optional[PositionedElement]
) -> int:
    """
    Compare two elements.

    Returns:
        Negative if element1 comes first, positive if element2 comes first,
        0 if they are equal in this order
    """
    key1 = min_x_sort_key(element1)
    key2 = min_x_sort_key(element2)
    return (key1 > key2) - (key1 < key2)


MIN_X_ORDER = cmp_to_key(compare_by_min_x)


def sort_by_min_x(elements: Iterable[Optional[PositionedElement]]) -> List[Optional[PositionedElement]]:
    """Return the elements in stable (page, min_x) order."""
    return sorted(elements, key=min_x_sort_key)
