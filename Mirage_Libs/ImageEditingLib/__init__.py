"""
ImageEditingLib - Core image editing functionality

This module provides the operation models, Pillow-backed transforms,
synthetic pixel generators and file I/O for the Mirage project.
"""

from Mirage_Libs.ImageEditingLib.image_models import (
    RgbColor,
    Operation,
    Blur,
    Brighten,
    Crop,
    Rotate,
    Generate,
    Invert,
    Grayscale,
    Fractal,
    InvocationContext,
)
from Mirage_Libs.ImageEditingLib.image_editing_ops import (
    apply_blur,
    apply_brighten,
    apply_crop,
    apply_rotate,
    apply_invert,
    apply_grayscale,
)
from Mirage_Libs.ImageEditingLib.pixel_generators import (
    gradient_channel_at,
    iter_gradient_colors,
    render_gradient,
    julia_escape_count,
    fractal_pixel,
    render_fractal,
)
from Mirage_Libs.ImageEditingLib.image_io import (
    OutputConfig,
    load_image,
    save_image,
    infer_save_format,
)

__all__ = [
    "RgbColor",
    "Operation",
    "Blur",
    "Brighten",
    "Crop",
    "Rotate",
    "Generate",
    "Invert",
    "Grayscale",
    "Fractal",
    "InvocationContext",
    "apply_blur",
    "apply_brighten",
    "apply_crop",
    "apply_rotate",
    "apply_invert",
    "apply_grayscale",
    "gradient_channel_at",
    "iter_gradient_colors",
    "render_gradient",
    "julia_escape_count",
    "fractal_pixel",
    "render_fractal",
    "OutputConfig",
    "load_image",
    "save_image",
    "infer_save_format",
]
