"""Public API for Mandelbrot rendering utilities."""

from .errors import (
    ComplexParseFailure,
    DegenerateWindow,
    ImageWriteFailure,
    InvalidBounds,
    MandelbrotError,
    ParseFailure,
    SeparatorNotFound,
)
from .geometry import Bounds, Pixel, Window, pixel_to_point, sample_grid
from .parsing import parse_bounds, parse_complex, parse_int, parse_pair, parse_unsigned, parse_window
from .renderer import CUTOFF, escape_counts, escape_time, render, render_rows, split_rows
from .writer import write_image

__all__ = [
    "Bounds",
    "CUTOFF",
    "ComplexParseFailure",
    "DegenerateWindow",
    "ImageWriteFailure",
    "InvalidBounds",
    "MandelbrotError",
    "ParseFailure",
    "Pixel",
    "SeparatorNotFound",
    "Window",
    "escape_counts",
    "escape_time",
    "parse_bounds",
    "parse_complex",
    "parse_int",
    "parse_pair",
    "parse_unsigned",
    "parse_window",
    "pixel_to_point",
    "render",
    "render_rows",
    "sample_grid",
    "split_rows",
    "write_image",
]
