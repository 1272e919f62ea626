"""
Image decoding and encoding for Mirage.

Decoding forces Pillow to read the whole file so that a truncated or
unrecognized input fails before any transform runs. Encoding writes to a
temporary file beside the destination and renames it into place, so the
output path either holds a complete image or is left untouched.

Classes:
    OutputConfig: Destination path and encoder settings

Functions:
    load_image: Decode an image file into a normalized PIL Image
    save_image: Atomically encode an image to the configured path
    infer_save_format: Map a file extension to a Pillow format name
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import logging
import os
import tempfile

import numpy as np
from PIL import Image, UnidentifiedImageError

from Mirage_Libs.constants import DEFAULT_JPEG_QUALITY, TEMP_FILE_PREFIX
from Mirage_Libs.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)

# Modes the transforms operate on directly; anything else is converted on load
NATIVE_MODES = {"L", "LA", "RGB", "RGBA"}

# Single-channel modes wider than 8 bits
HIGH_BIT_DEPTH_MODES = {"I", "I;16", "I;16L", "I;16B", "I;16N", "F"}

# Encoders with no alpha channel, and the mode each alpha mode falls back to
OPAQUE_FORMATS = {"JPEG", "BMP", "PPM", "PCX", "EPS"}
ALPHA_FALLBACK_MODES = {"RGBA": "RGB", "LA": "L", "PA": "RGB", "P": "RGB"}


def infer_save_format(path: Path) -> str:
    """
    Map a file extension to the Pillow format that encodes it.

    Args:
        path: Destination path

    Returns:
        Pillow format name (e.g. "PNG", "JPEG")

    Raises:
        EncodeError: If the path has no extension or Pillow has no encoder for it
    """
    ext = Path(path).suffix.lower()
    if not ext:
        raise EncodeError(f"Cannot infer image format: output path has no extension: {path}")

    save_format = Image.registered_extensions().get(ext)
    if save_format is None or save_format not in Image.SAVE:
        raise EncodeError(f"Unsupported output format '{ext}' for {path}")
    return save_format


@dataclass
class OutputConfig:
    """Configuration for writing an output image.

    Attributes:
        output_path: Destination file path; its extension selects the format
        quality: JPEG/WebP quality 1-100 (default: 95)
    """
    output_path: str = "output.png"
    quality: int = DEFAULT_JPEG_QUALITY

    def resolve_format(self) -> str:
        """Return the Pillow format to encode with."""
        return infer_save_format(Path(self.output_path))

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs based on format."""
        save_format = self.resolve_format()
        kwargs: Dict[str, Any] = {"format": save_format}

        if save_format in ("JPEG", "WEBP"):
            kwargs["quality"] = max(1, min(100, self.quality))

        return kwargs


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; give the output the mode open() would
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _scale_to_8bit(image: Any) -> Any:
    """Map a 16/32-bit integer or float grayscale image onto mode L."""
    pixels = np.asarray(image)
    if image.mode == "F":
        # float samples are read as 0.0-1.0
        scaled = np.clip(np.nan_to_num(pixels) * 255.0 + 0.5, 0, 255)
    else:
        scaled = np.clip(pixels.astype(np.int64), 0, 65535) >> 8
    return Image.fromarray(scaled.astype(np.uint8))


def _normalize_mode(image: Any) -> Any:
    if image.mode in NATIVE_MODES:
        return image
    if image.mode in HIGH_BIT_DEPTH_MODES:
        return _scale_to_8bit(image)
    if image.mode == "P" and "transparency" in image.info:
        return image.convert("RGBA")
    if image.mode in ("PA", "La"):
        return image.convert("RGBA")
    return image.convert("RGB")


def load_image(path: Path) -> Any:
    """
    Decode an image file.

    The file is read completely and closed before returning. Palette and
    CMYK images come back as RGB (or RGBA when they carry transparency).
    16-bit, 32-bit and float grayscale images are scaled down to mode L.

    Args:
        path: Input image path

    Returns:
        PIL Image in mode L, LA, RGB or RGBA

    Raises:
        DecodeError: If the file is missing, unreadable, or not an image
    """
    path = Path(path)
    if not path.exists():
        raise DecodeError(f"Input file not found: {path}")
    if not path.is_file():
        raise DecodeError(f"Input path is not a file: {path}")

    try:
        with Image.open(path) as img:
            img.load()
            image = _normalize_mode(img)
            if image is img:
                image = img.copy()
    except UnidentifiedImageError as e:
        raise DecodeError(f"Not a recognized image format: {path}") from e
    except (OSError, ValueError, SyntaxError) as e:
        raise DecodeError(f"Failed to decode {path}: {e}") from e

    logger.debug(f"Decoded {path} ({image.mode}, {image.width}x{image.height})")
    return image


def save_image(image: Any, config: OutputConfig) -> Path:
    """
    Encode an image and move it onto the configured path.

    Formats without an alpha channel (JPEG, BMP, PPM, ...) get the image
    with its alpha dropped.

    Args:
        image: PIL Image to save
        config: Destination and encoder settings

    Returns:
        Path where image was saved

    Raises:
        TypeError: If image is not a PIL Image
        EncodeError: If the format is unsupported or the file cannot be written
    """
    if not hasattr(image, "save") or not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    output_file = Path(config.output_path)
    kwargs = config.get_save_kwargs()

    directory = output_file.parent
    if not directory.is_dir():
        raise EncodeError(f"Output directory does not exist: {directory}")

    if kwargs["format"] in OPAQUE_FORMATS and image.mode in ALPHA_FALLBACK_MODES:
        image = image.convert(ALPHA_FALLBACK_MODES[image.mode])

    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=TEMP_FILE_PREFIX,
            suffix=output_file.suffix,
            dir=directory,
        )
    except OSError as e:
        raise EncodeError(f"Cannot write to {directory}: {e}") from e

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            image.save(handle, **kwargs)
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, output_file)
    except Exception as e:
        tmp_path.unlink(missing_ok=True)
        raise EncodeError(f"Failed to save image to {output_file}: {e}") from e

    logger.debug(f"Encoded {output_file} as {kwargs['format']}")
    return output_file
