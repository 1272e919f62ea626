"""
Synthetic image generators for Mirage.

Both generators build an RGB image from parameters alone, without an input
file. Pixels are visited in row-major order: every column of row 0, then
every column of row 1, and so on.

Gradient:
    A per-visit counter rather than a function of (x, y). Each channel starts
    at the requested value and, after every pixel, advances as
    ``next = (current % 255) + 1``, cycling through 1..255.

Fractal:
    A Julia set for c = -0.4 + 0.6i drawn in the green channel over a
    red/blue background ramp. The escape-time loop is plain Python complex
    arithmetic, so every pixel is reproducible in double precision.

Example:
    >>> from Mirage_Libs.ImageEditingLib.pixel_generators import render_gradient, render_fractal
    >>> gradient = render_gradient((0, 0, 0))
    >>> fractal = render_fractal(workers=4)
"""

from typing import Any, Iterator, List, Sequence
import concurrent.futures
import logging
import math
import time

import numpy as np
from PIL import Image

from Mirage_Libs.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    CHANNEL_MAX,
    FRACTAL_BACKGROUND_FACTOR,
    FRACTAL_ESCAPE_RADIUS,
    FRACTAL_MAX_ITERATIONS,
    FRACTAL_OFFSET,
    FRACTAL_SPAN,
    GRADIENT_CYCLE,
    JULIA_CONSTANT,
)
from Mirage_Libs.ImageEditingLib.image_models import RgbColor

logger = logging.getLogger(__name__)


# ============================================================================
# Gradient
# ============================================================================

def advance_gradient_channel(value: int) -> int:
    """Return the counter value that follows ``value``."""
    return (value % GRADIENT_CYCLE) + 1


def gradient_channel_at(start: int, index: int) -> int:
    """
    Channel value of the pixel visited ``index``-th (0-based).

    Closed form of applying ``advance_gradient_channel`` ``index`` times to
    ``start``. The start value only appears at index 0; every later value is
    in 1..255.

    Args:
        start: Initial channel value (0-255)
        index: Number of pixels visited before this one

    Returns:
        Channel value 0-255
    """
    if index < 0:
        raise ValueError(f"index must be >= 0, got {index}")
    if index == 0:
        return start
    return ((start % GRADIENT_CYCLE) + index - 1) % GRADIENT_CYCLE + 1


def iter_gradient_colors(start_color: Sequence[int], count: int) -> Iterator[RgbColor]:
    """
    Yield the first ``count`` gradient colors by running the counters.

    Args:
        start_color: Initial (red, green, blue)
        count: Number of pixels to produce

    Yields:
        (red, green, blue) for each visited pixel in order
    """
    red, green, blue = start_color
    for _ in range(count):
        yield (red, green, blue)
        red = advance_gradient_channel(red)
        green = advance_gradient_channel(green)
        blue = advance_gradient_channel(blue)


def _gradient_channel_array(start: int, count: int) -> np.ndarray:
    index = np.arange(count, dtype=np.int64)
    values = ((start % GRADIENT_CYCLE) + index - 1) % GRADIENT_CYCLE + 1
    values[0] = start
    return values.astype(np.uint8)


def render_gradient(
    start_color: Sequence[int],
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
) -> Any:
    """
    Render the cyclic gradient.

    Args:
        start_color: Initial (red, green, blue), each 0-255
        width: Canvas width (default: 800)
        height: Canvas height (default: 800)

    Returns:
        PIL Image in mode RGB

    Raises:
        ValueError: If the canvas is empty or a channel is outside 0-255
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive, got {width}x{height}")
    if len(start_color) != 3 or any(not (0 <= c <= CHANNEL_MAX) for c in start_color):
        raise ValueError(f"start_color must be three values in 0-255, got {start_color}")

    count = width * height
    channels = [_gradient_channel_array(int(start), count) for start in start_color]
    pixels = np.stack(channels, axis=-1).reshape(height, width, 3)

    return Image.fromarray(pixels)


# ============================================================================
# Fractal
# ============================================================================

def julia_escape_count(
    z: complex,
    c: complex = JULIA_CONSTANT,
    max_iterations: int = FRACTAL_MAX_ITERATIONS,
) -> int:
    """
    Count iterations of ``z = z*z + c`` until ``|z| > 2`` or the cap is hit.

    Args:
        z: Starting point
        c: Julia constant
        max_iterations: Iteration cap (default: 255)

    Returns:
        Iteration count 0..max_iterations
    """
    count = 0
    while count < max_iterations and abs(z) <= FRACTAL_ESCAPE_RADIUS:
        z = z * z + c
        count += 1
    return count


def _background_channel(coordinate: int) -> int:
    return min(CHANNEL_MAX, math.floor(FRACTAL_BACKGROUND_FACTOR * coordinate))


def fractal_pixel(
    x: int,
    y: int,
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
) -> RgbColor:
    """
    Compute one fractal pixel.

    Red and blue form a background ramp along x and y. Green is the escape
    count of the Julia iteration started at the point the pixel maps to.
    The plane's real axis follows the image rows and its imaginary axis the
    columns, so the set appears transposed relative to the pixel grid.

    Args:
        x: Column (0 <= x < width)
        y: Row (0 <= y < height)
        width: Canvas width
        height: Canvas height

    Returns:
        (red, green, blue)
    """
    scale_x = FRACTAL_SPAN / width
    scale_y = FRACTAL_SPAN / height

    cx = y * scale_x - FRACTAL_OFFSET
    cy = x * scale_y - FRACTAL_OFFSET

    green = julia_escape_count(complex(cx, cy))
    return (_background_channel(x), green, _background_channel(y))


def fractal_row(y: int, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> List[RgbColor]:
    """Compute every pixel of row ``y``, left to right."""
    return [fractal_pixel(x, y, width, height) for x in range(width)]


def _fractal_rows(task) -> List[List[RgbColor]]:
    rows, width, height = task
    return [fractal_row(y, width, height) for y in rows]


def _row_bands(height: int, band_count: int) -> List[range]:
    band_size = max(1, math.ceil(height / band_count))
    return [range(start, min(start + band_size, height)) for start in range(0, height, band_size)]


def render_fractal(
    width: int = CANVAS_WIDTH,
    height: int = CANVAS_HEIGHT,
    workers: int = 1,
) -> Any:
    """
    Render the Julia-set fractal.

    With ``workers`` > 1 the rows are split into contiguous bands and
    computed in a process pool. Each band is written only by the worker that
    computed it, and bands are reassembled in row order, so the result is
    identical to a single-process render.

    Args:
        width: Canvas width (default: 800)
        height: Canvas height (default: 800)
        workers: Number of worker processes (default: 1 = render in-process)

    Returns:
        PIL Image in mode RGB

    Raises:
        ValueError: If the canvas is empty or workers < 1
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"canvas size must be positive, got {width}x{height}")
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    started = time.perf_counter()
    rows: List[List[RgbColor]] = []

    if workers == 1:
        rows = [fractal_row(y, width, height) for y in range(height)]
    else:
        # four bands per worker
        tasks = [(band, width, height) for band in _row_bands(height, workers * 4)]
        with concurrent.futures.ProcessPoolExecutor(max_workers=workers) as executor:
            for band_rows in executor.map(_fractal_rows, tasks):
                rows.extend(band_rows)

    pixels = np.array(rows, dtype=np.uint8).reshape(height, width, 3)
    image = Image.fromarray(pixels)

    logger.debug(
        f"Rendered {width}x{height} fractal with {workers} worker(s) "
        f"in {time.perf_counter() - started:.2f}s"
    )
    return image
