"""Rendering primitives for grayscale Mandelbrot images."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import numpy as np
import tensorflow as tf

from .geometry import Bounds, Window, sample_grid

CUTOFF = 255
ESCAPE_RADIUS_SQUARED = 4.0
DEVICE = "/CPU:0"

_PLANE = tf.TensorSpec(shape=[None, None], dtype=tf.float64)


def escape_time(c: complex, cutoff: int = CUTOFF) -> Optional[int]:
    """Return the iteration at which ``z := z*z + c`` leaves the radius-2 disk.

    Iterations are counted from zero. ``None`` means the orbit stayed bounded
    for ``cutoff`` iterations and ``c`` is presumed to be in the set.
    """

    z = 0j
    for i in range(cutoff):
        z = z * z + c
        if z.real * z.real + z.imag * z.imag >= ESCAPE_RADIUS_SQUARED:
            return i
    return None


@tf.function
def _escape_step(
    i: tf.Tensor,
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    counts: tf.Tensor,
    active: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Perform a single iteration for the points that have not escaped yet."""

    zr_new = zr * zr - zi * zi + cr
    zi_new = tf.constant(2.0, dtype=zr.dtype) * zr * zi + ci
    zr = tf.where(active, zr_new, zr)
    zi = tf.where(active, zi_new, zi)
    horizon = tf.constant(ESCAPE_RADIUS_SQUARED, dtype=zr.dtype)
    escaped = tf.logical_and(active, zr * zr + zi * zi >= horizon)
    counts = tf.where(escaped, tf.fill(tf.shape(counts), i), counts)
    active = tf.logical_and(active, tf.logical_not(escaped))
    return zr, zi, counts, active


@tf.function(input_signature=[_PLANE, _PLANE, tf.TensorSpec(shape=[], dtype=tf.int32)])
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, cutoff: tf.Tensor) -> tf.Tensor:
    """Iterate every sample up to ``cutoff`` times using a TensorFlow while loop."""

    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    counts = tf.fill(tf.shape(cr), tf.constant(-1, dtype=tf.int32))
    active = tf.ones_like(counts, tf.bool)

    def cond(i, zr, zi, counts, active):
        return tf.logical_and(tf.less(i, cutoff), tf.reduce_any(active))

    def body(i, zr, zi, counts, active):
        zr, zi, counts, active = _escape_step(i, zr, zi, cr, ci, counts, active)
        return i + 1, zr, zi, counts, active

    _, _, _, counts, _ = tf.while_loop(cond, body, (i, zr, zi, counts, active))
    return counts


def escape_counts(real: np.ndarray, imag: np.ndarray, cutoff: int = CUTOFF) -> np.ndarray:
    """Vectorized :func:`escape_time` over a 2-D plane of samples.

    Points that never escape are reported as ``-1``.
    """

    with tf.device(DEVICE):
        cr = tf.convert_to_tensor(np.asarray(real, dtype=np.float64))
        ci = tf.convert_to_tensor(np.asarray(imag, dtype=np.float64))
        counts = _escape_run(cr, ci, tf.constant(cutoff, dtype=tf.int32))
    return counts.numpy()


def intensities(counts: np.ndarray) -> np.ndarray:
    """Map escape counts to gray levels: interior points are black, fast escapes bright."""

    counts = np.asarray(counts)
    return np.where(counts < 0, 0, CUTOFF - counts).astype(np.uint8)


def split_rows(height: int, bands: int) -> list[range]:
    """Partition ``range(height)`` into at most ``bands`` contiguous, disjoint ranges."""

    bands = max(1, min(bands, height))
    base, extra = divmod(height, bands)
    result = []
    start = 0
    for band in range(bands):
        stop = start + base + (1 if band < extra else 0)
        result.append(range(start, stop))
        start = stop
    return result


def render_rows(out: np.ndarray, rows: range, bounds: Bounds, window: Window) -> None:
    """Render ``rows`` into ``out``, a ``(len(rows), width)`` view of the image buffer."""

    real, imag = sample_grid(bounds, window, rows)
    out[...] = intensities(escape_counts(real, imag))


def render(bounds: Bounds, window: Window, *, workers: int = 1) -> np.ndarray:
    """Render the whole image and return the raw row-major ``uint8`` buffer.

    With ``workers > 1`` the rows are split into disjoint bands rendered on a
    thread pool; each band writes only to its own slice of the buffer.
    """

    bounds.validate()
    window.validate()
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    buffer = np.zeros(bounds.pixels, dtype=np.uint8)
    grid = buffer.reshape(bounds.shape)
    bands = split_rows(bounds.height, workers)

    if len(bands) == 1:
        render_rows(grid, bands[0], bounds, window)
        return buffer

    with ThreadPoolExecutor(max_workers=len(bands)) as pool:
        futures = [
            pool.submit(render_rows, grid[band.start:band.stop], band, bounds, window)
            for band in bands
        ]
        for future in futures:
            future.result()
    return buffer
