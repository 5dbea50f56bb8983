"""
Annotator Exceptions

Errors raised by the drawing layer. Every error carries an optional
``details`` dict with structured context for logs and callers.
"""

from typing import Any, Dict, Optional


class AnnotatorError(Exception):
    """Base error for the page annotator."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class InvalidArgumentError(AnnotatorError, ValueError):
    """Invalid input: missing document, bad page number, bad color, bad path."""


class CanvasIOError(AnnotatorError, OSError):
    """Writing to a canvas, closing it, or saving the document failed."""
