"""Pixel and complex-plane geometry for Mandelbrot renders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .errors import DegenerateWindow, InvalidBounds


@dataclass(frozen=True)
class Pixel:
    """A single pixel of the output image, ``(0, 0)`` being the top-left sample."""

    x: int
    y: int


@dataclass(frozen=True)
class Bounds:
    """Image size in pixels."""

    width: int
    height: int

    @property
    def pixels(self) -> int:
        return self.width * self.height

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    def validate(self) -> "Bounds":
        if self.width <= 0 or self.height <= 0:
            raise InvalidBounds(self.width, self.height)
        return self


@dataclass(frozen=True)
class Window:
    """A rectangle of the complex plane, imaginary axis pointing up."""

    upper_left: complex
    lower_right: complex

    @property
    def width(self) -> float:
        return self.lower_right.real - self.upper_left.real

    @property
    def height(self) -> float:
        return self.upper_left.imag - self.lower_right.imag

    def validate(self) -> "Window":
        if not (self.upper_left.real < self.lower_right.real and self.upper_left.imag > self.lower_right.imag):
            raise DegenerateWindow(self.upper_left, self.lower_right)
        return self


def pixel_to_point(pixel: Pixel, bounds: Bounds, window: Window) -> complex:
    """Map ``pixel`` onto the complex plane.

    Columns advance to the right along the real axis and rows advance
    downward, so the imaginary part shrinks as ``pixel.y`` grows.
    """

    real = np.float64(window.upper_left.real) + np.float64(pixel.x) * np.float64(window.width) / np.float64(bounds.width)
    imag = np.float64(window.upper_left.imag) - np.float64(pixel.y) * np.float64(window.height) / np.float64(bounds.height)
    return complex(float(real), float(imag))


def sample_grid(bounds: Bounds, window: Window, rows: Sequence[int] | range) -> tuple[np.ndarray, np.ndarray]:
    """Return the real and imaginary sample planes for ``rows``.

    Both arrays have shape ``(len(rows), bounds.width)`` and hold the same
    values :func:`pixel_to_point` produces pixel by pixel.
    """

    cols = np.arange(bounds.width, dtype=np.float64)
    ys = np.asarray(rows, dtype=np.float64)

    x = np.float64(window.upper_left.real) + cols * np.float64(window.width) / np.float64(bounds.width)
    y = np.float64(window.upper_left.imag) - ys * np.float64(window.height) / np.float64(bounds.height)

    real, imag = np.meshgrid(x, y)
    return real, imag
