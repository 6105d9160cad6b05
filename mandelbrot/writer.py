"""Persistence of rendered buffers as grayscale images."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional, Union

import numpy as np
import PIL.Image

from .errors import ImageWriteFailure
from .geometry import Bounds

DEFAULT_FORMAT = "png"


def _pil_format_name(ext: str) -> str:
    upper = ext.upper().lstrip(".")
    if upper == "JPG":
        return "JPEG"
    if upper == "TIF":
        return "TIFF"
    return upper


def resolve_format(path: Path, image_format: Optional[str] = None) -> str:
    """Pick the Pillow format for ``path``, preferring an explicit ``image_format``."""

    ext = image_format or path.suffix or DEFAULT_FORMAT
    return _pil_format_name(ext)


def to_image(buffer: np.ndarray, bounds: Bounds) -> PIL.Image.Image:
    """Wrap a row-major ``uint8`` buffer in a single-channel 8-bit image."""

    data = np.ascontiguousarray(buffer, dtype=np.uint8)
    if data.size != bounds.pixels:
        raise ImageWriteFailure(
            f"buffer holds {data.size} bytes but a {bounds.width}x{bounds.height} image needs {bounds.pixels}"
        )
    return PIL.Image.frombytes("L", (bounds.width, bounds.height), data.tobytes())


def write_image(
    path: Union[str, Path],
    buffer: np.ndarray,
    bounds: Bounds,
    image_format: Optional[str] = None,
) -> Path:
    """Write ``buffer`` to ``path`` and return the resolved output path."""

    output_path = Path(path).expanduser()
    image = to_image(buffer, bounds)
    pil_format = resolve_format(output_path, image_format)
    PIL.Image.init()
    if pil_format not in PIL.Image.SAVE:
        raise ImageWriteFailure(f"could not write image '{output_path}': unknown format {pil_format!r}")

    created = [parent for parent in output_path.parents if not parent.exists()]
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(str(output_path), format=pil_format)
    except (OSError, ValueError, KeyError) as exc:
        if created:
            shutil.rmtree(created[-1], ignore_errors=True)
        raise ImageWriteFailure(f"could not write image '{output_path}': {exc}") from exc
    return output_path
