"""Exceptions raised while parsing, rendering and writing Mandelbrot images."""

from __future__ import annotations


class MandelbrotError(Exception):
    """Base class for every failure surfaced to the command line."""


class SeparatorNotFound(MandelbrotError, ValueError):
    def __init__(self, separator: str, text: str) -> None:
        super().__init__(f"separator '{separator}' not found in argument '{text}'")
        self.separator = separator
        self.text = text


class ParseFailure(MandelbrotError, ValueError):
    def __init__(self, text: str) -> None:
        super().__init__(f"failed to parse pair '{text}'")
        self.text = text


class ComplexParseFailure(MandelbrotError, ValueError):
    def __init__(self, text: str) -> None:
        super().__init__(f"failed to parse complex number '{text}'")
        self.text = text


class DegenerateWindow(MandelbrotError, ValueError):
    def __init__(self, upper_left: complex, lower_right: complex) -> None:
        super().__init__(
            f"degenerate window: upper left {upper_left} must lie above and to the left of lower right {lower_right}"
        )
        self.upper_left = upper_left
        self.lower_right = lower_right


class InvalidBounds(MandelbrotError, ValueError):
    def __init__(self, width: int, height: int) -> None:
        super().__init__(f"invalid bounds '{width}x{height}': width and height must be positive")
        self.width = width
        self.height = height


class ImageWriteFailure(MandelbrotError):
    """Encoding or I/O failure while persisting a rendered buffer."""
