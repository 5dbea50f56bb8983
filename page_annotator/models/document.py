"""
Document Model

Pages and the positioned elements a layout analyzer attaches to them
(figures, shapes, text blocks, paragraphs). Pages are numbered from 1.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Protocol

from .geometry import Rectangle


class ElementFeature(Enum):
    """Kinds of structural elements found on a page."""

    FIGURE = "figure"
    SHAPE = "shape"
    TEXT_BLOCK = "text_block"
    PARAGRAPH = "paragraph"


@dataclass(eq=False)
class Page:
    """
    A page of a parsed document.

    Identity-compared: elements point back to their page through their
    position, so value equality over the element lists would recurse.
    """

    page_number: int  # 1-indexed
    bounding_box: Optional[Rectangle] = None
    figures: List["Figure"] = field(default_factory=list, repr=False)
    shapes: List["Shape"] = field(default_factory=list, repr=False)
    text_blocks: List["TextBlock"] = field(default_factory=list, repr=False)
    paragraphs: List["Paragraph"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.page_number < 1:
            raise ValueError(f"Page numbers start at 1, got {self.page_number}")
        if self.bounding_box is not None and not self.bounding_box.is_normalized:
            raise ValueError(f"Page bounding box is not normalized: {self.bounding_box}")

    def add_figure(self, figure: "Figure") -> None:
        self.figures.append(figure)

    def add_shape(self, shape: "Shape") -> None:
        self.shapes.append(shape)

    def add_text_block(self, block: "TextBlock") -> None:
        self.text_blocks.append(block)

    def add_paragraph(self, paragraph: "Paragraph") -> None:
        self.paragraphs.append(paragraph)

    def elements(self, feature: ElementFeature) -> List["PdfElement"]:
        """Get the elements of one feature type, in analyzer order."""
        if feature == ElementFeature.FIGURE:
            return list(self.figures)
        if feature == ElementFeature.SHAPE:
            return list(self.shapes)
        if feature == ElementFeature.TEXT_BLOCK:
            return list(self.text_blocks)
        return list(self.paragraphs)

    def iter_elements(self) -> Iterator["PdfElement"]:
        for feature in ElementFeature:
            yield from self.elements(feature)


@dataclass(frozen=True)
class Position:
    """Where an element sits: a page and a rectangle, either may be unknown."""

    page: Optional[Page] = None
    rectangle: Optional[Rectangle] = None

    @property
    def page_number(self) -> Optional[int]:
        return self.page.page_number if self.page is not None else None


class PositionedElement(Protocol):
    """Any element exposing an optional position."""

    @property
    def position(self) -> Optional[Position]:
        ...


@dataclass
class PdfElement(ABC):
    """Base for analyzed elements. Equal when feature and position match."""

    position: Optional[Position] = None

    @property
    @abstractmethod
    def feature(self) -> ElementFeature:
        ...

    @property
    def bounding_box(self) -> Optional[Rectangle]:
        if self.position is None:
            return None
        return self.position.rectangle

    @property
    def page_number(self) -> Optional[int]:
        if self.position is None:
            return None
        return self.position.page_number


@dataclass
class Figure(PdfElement):
    """A figure (embedded image or figure region)."""

    @property
    def feature(self) -> ElementFeature:
        return ElementFeature.FIGURE


@dataclass
class Shape(PdfElement):
    """A vector shape (rule, box, path)."""

    @property
    def feature(self) -> ElementFeature:
        return ElementFeature.SHAPE


@dataclass
class TextBlock(PdfElement):
    """A block of text lines grouped by the layout analyzer."""

    text: str = ""

    @property
    def feature(self) -> ElementFeature:
        return ElementFeature.TEXT_BLOCK


@dataclass
class Paragraph(PdfElement):
    """A paragraph, possibly spanning several text blocks."""

    text: str = ""

    @property
    def feature(self) -> ElementFeature:
        return ElementFeature.PARAGRAPH
