"""
Command handlers for Mirage.

Each handler carries out one operation for one invocation and returns the
path it wrote. Transform handlers decode the input, apply a single
ImageEditingLib operation and encode the result; generator handlers render a
canvas from the operation's parameters alone.

Handlers are registered in ``command_registry.build_default_registry`` and
are called through ``CommandRegistry.dispatch``, which has already checked
that an input file is present for the transform commands.

Example:
    >>> from Mirage_Libs.CommandsLib.command_handlers import execute_rotate_command
    >>> from Mirage_Libs.ImageEditingLib.image_models import InvocationContext, Rotate
    >>> context = InvocationContext(outfile="rotated.png", infile="photo.png")
    >>> execute_rotate_command(Rotate(90), context)
    PosixPath('rotated.png')
"""

from pathlib import Path
from typing import Any, Callable
import logging

from Mirage_Libs.constants import CANVAS_SIZE
from Mirage_Libs.errors import UsageError
from Mirage_Libs.ImageEditingLib.image_editing_ops import (
    apply_blur,
    apply_brighten,
    apply_crop,
    apply_grayscale,
    apply_invert,
    apply_rotate,
)
from Mirage_Libs.ImageEditingLib.image_io import OutputConfig, load_image, save_image
from Mirage_Libs.ImageEditingLib.image_models import (
    Blur,
    Brighten,
    Crop,
    Fractal,
    Generate,
    Grayscale,
    Invert,
    InvocationContext,
    Rotate,
)
from Mirage_Libs.ImageEditingLib.pixel_generators import render_fractal, render_gradient

logger = logging.getLogger(__name__)


def _output_config(context: InvocationContext) -> OutputConfig:
    # fail on an unknown extension before any decoding or rendering
    config = OutputConfig(output_path=str(context.outfile))
    config.resolve_format()
    return config


def _transform(context: InvocationContext, transform: Callable[[Any], Any]) -> Path:
    """Decode ``context.infile``, apply ``transform`` and write ``context.outfile``."""
    if context.infile is None:
        raise UsageError("input file required")

    config = _output_config(context)
    logger.debug(f"Transforming {context.infile} -> {context.outfile}")
    image = load_image(context.infile)
    result = transform(image)
    return save_image(result, config)


def execute_blur_command(operation: Blur, context: InvocationContext) -> Path:
    return _transform(context, lambda image: apply_blur(image, operation.intensity))


def execute_brighten_command(operation: Brighten, context: InvocationContext) -> Path:
    return _transform(context, lambda image: apply_brighten(image, operation.delta))


def execute_crop_command(operation: Crop, context: InvocationContext) -> Path:
    """Crop to the operation's rectangle; a rectangle outside the image is an ArgumentError."""
    return _transform(
        context,
        lambda image: apply_crop(image, operation.x, operation.y, operation.width, operation.height),
    )


def execute_rotate_command(operation: Rotate, context: InvocationContext) -> Path:
    return _transform(context, lambda image: apply_rotate(image, operation.degrees))


def execute_invert_command(operation: Invert, context: InvocationContext) -> Path:
    return _transform(context, apply_invert)


def execute_grayscale_command(operation: Grayscale, context: InvocationContext) -> Path:
    return _transform(context, apply_grayscale)


def execute_generate_command(operation: Generate, context: InvocationContext) -> Path:
    """
    Render the cyclic gradient starting at the operation's color.

    Any input file in the context is ignored.
    """
    config = _output_config(context)
    width, height = CANVAS_SIZE
    image = render_gradient(operation.color, width, height)
    return save_image(image, config)


def execute_fractal_command(operation: Fractal, context: InvocationContext) -> Path:
    """
    Render the Julia-set fractal.

    Any input file in the context is ignored. ``operation.workers`` > 1
    spreads the rows over that many worker processes.
    """
    config = _output_config(context)
    width, height = CANVAS_SIZE
    image = render_fractal(width, height, workers=operation.workers)
    return save_image(image, config)
