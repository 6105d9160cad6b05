"""Parsing of command-line arguments into bounds and windows."""

from __future__ import annotations

import math
import re
from typing import Callable, TypeVar

from .errors import ComplexParseFailure, InvalidBounds, ParseFailure, SeparatorNotFound
from .geometry import Bounds, Window

T = TypeVar("T")

SEPARATOR = "x"
UINT32_MAX = 2 ** 32 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")


def parse_int(text: str) -> int:
    """Parse a decimal integer with an optional sign and nothing else around it."""

    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer {text!r}")
    return int(text)


def parse_unsigned(text: str) -> int:
    """Parse an unsigned 32-bit integer, accepting only digits and an optional leading plus."""

    if not _UNSIGNED.fullmatch(text):
        raise ValueError(f"invalid unsigned integer {text!r}")
    value = int(text)
    if value > UINT32_MAX:
        raise ValueError(f"{text!r} does not fit in 32 bits")
    return value


def parse_pair(text: str, convert: Callable[[str], T] = parse_int, separator: str = SEPARATOR) -> tuple[T, T]:
    """Parse ``"<a><separator><b>"`` into ``(convert(a), convert(b))``.

    The string is split at the first separator; an empty side counts as a
    parse failure.
    """

    left, found, right = text.partition(separator)
    if not found:
        raise SeparatorNotFound(separator, text)
    if not left or not right:
        raise ParseFailure(text)
    try:
        return convert(left), convert(right)
    except (ValueError, TypeError) as exc:
        raise ParseFailure(text) from exc


def parse_bounds(text: str) -> Bounds:
    width, height = parse_pair(text, parse_unsigned)
    if width == 0 or height == 0:
        raise InvalidBounds(width, height)
    return Bounds(width, height)


def parse_complex(text: str) -> complex:
    """Parse ``a+bi`` style text. Both ``i`` and ``j`` are accepted as the imaginary unit."""

    candidate = text.strip()
    if candidate[-1:] in ("i", "I"):
        candidate = candidate[:-1] + "j"
    if not candidate or "(" in candidate or ")" in candidate:
        raise ComplexParseFailure(text)
    try:
        value = complex(candidate)
    except ValueError as exc:
        raise ComplexParseFailure(text) from exc
    if not (math.isfinite(value.real) and math.isfinite(value.imag)):
        raise ComplexParseFailure(text)
    return value


def parse_window(upper_left: str, lower_right: str) -> Window:
    window = Window(parse_complex(upper_left), parse_complex(lower_right))
    return window.validate()
