"""
Core image editing operations for Mirage.

Each function takes a decoded PIL Image and returns a new one; inputs are
never modified in place.

Functions:
    apply_blur: Gaussian blur with a sigma in pixels
    apply_brighten: Add a signed delta to every color channel, saturating at 0/255
    apply_crop: Cut out a rectangle that lies inside the image
    apply_rotate: Rotate clockwise by 90, 180 or 270 degrees
    apply_invert: Complement every color channel
    apply_grayscale: Luminance-preserving desaturation
"""

from typing import Any
import math

import numpy as np
from PIL import Image, ImageFilter

from Mirage_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    FALLBACK_BLUR_SIGMA,
)
from Mirage_Libs.errors import ArgumentError

# Clockwise angle -> Pillow transpose method (Pillow rotates counter-clockwise)
_CLOCKWISE_TRANSPOSE = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}


def _check_image(image: Any) -> None:
    if not hasattr(image, "mode") or not hasattr(image, "size"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")


def _color_band_count(image: Any) -> int:
    """Number of leading bands that carry color (alpha is always last)."""
    bands = len(image.getbands())
    return bands - 1 if image.mode in ("LA", "RGBA") else bands


def _map_color_bands(image: Any, func) -> Any:
    if image.mode == "P":
        image = image.convert("RGBA" if "transparency" in image.info else "RGB")

    pixels = np.array(image)
    if pixels.ndim == 2:
        result = func(pixels)
    else:
        result = pixels.copy()
        color_bands = _color_band_count(image)
        result[..., :color_bands] = func(pixels[..., :color_bands])

    return Image.fromarray(result.astype(np.uint8))


def apply_blur(image: Any, sigma: float) -> Any:
    """
    Apply Gaussian blur to image.

    Args:
        image: PIL Image
        sigma: Standard deviation of the Gaussian kernel in pixels (non-positive values use 1.0)

    Returns:
        Blurred PIL Image (same mode as input)

    Raises:
        ArgumentError: If sigma is not a finite number
        TypeError: If image not PIL Image
    """
    _check_image(image)

    if not math.isfinite(sigma):
        raise ArgumentError(f"blur value must be finite, got {sigma}")
    if sigma <= 0:
        sigma = FALLBACK_BLUR_SIGMA

    if image.mode == "P":
        image = image.convert("RGBA" if "transparency" in image.info else "RGB")

    return image.filter(ImageFilter.GaussianBlur(radius=sigma))


def apply_brighten(image: Any, delta: int) -> Any:
    """
    Brighten (or darken, for negative delta) every color channel.

    Values saturate at 0 and 255 instead of wrapping. Alpha is untouched.

    Args:
        image: PIL Image
        delta: Signed amount added to each color channel

    Returns:
        New PIL Image (same mode as input)
    """
    _check_image(image)
    delta = int(delta)

    def brighten(channels):
        # widen before adding so the sum cannot wrap ahead of the clip
        shifted = channels.astype(np.int64) + delta
        return np.clip(shifted, CHANNEL_MIN, CHANNEL_MAX)

    return _map_color_bands(image, brighten)


def apply_crop(image: Any, x: int, y: int, width: int, height: int) -> Any:
    """
    Cut out the rectangle with top-left corner (x, y) and the given size.

    Args:
        image: PIL Image
        x: Left edge of the rectangle
        y: Top edge of the rectangle
        width: Rectangle width (> 0)
        height: Rectangle height (> 0)

    Returns:
        New PIL Image of exactly width x height

    Raises:
        ArgumentError: If the rectangle is empty or extends past the image bounds
    """
    _check_image(image)

    if width <= 0 or height <= 0:
        raise ArgumentError(f"crop size must be positive, got {width}x{height}")

    if x < 0 or y < 0 or x + width > image.width or y + height > image.height:
        raise ArgumentError(
            f"crop rectangle {width}x{height}+{x}+{y} exceeds image bounds "
            f"{image.width}x{image.height}"
        )

    return image.crop((x, y, x + width, y + height))


def apply_rotate(image: Any, degrees: int) -> Any:
    """
    Rotate the image clockwise.

    Args:
        image: PIL Image
        degrees: 90, 180 or 270

    Returns:
        Rotated PIL Image; width and height swap for 90 and 270

    Raises:
        ArgumentError: If degrees is not a quarter turn
    """
    _check_image(image)

    method = _CLOCKWISE_TRANSPOSE.get(degrees)
    if method is None:
        raise ArgumentError(f"rotate degrees must be 90, 180 or 270, got {degrees!r}")

    return image.transpose(method)


def apply_invert(image: Any) -> Any:
    """Return the color complement of ``image`` (alpha is kept)."""
    _check_image(image)
    return _map_color_bands(image, lambda channels: CHANNEL_MAX - channels)


def apply_grayscale(image: Any) -> Any:
    """
    Desaturate the image using ITU-R 601-2 luma weights.

    Returns:
        PIL Image in mode "L", or "LA" when the input has transparency
    """
    _check_image(image)

    if image.mode in ("L", "LA"):
        return image.copy()

    has_alpha = image.mode in ("RGBA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    return image.convert("LA" if has_alpha else "L")
