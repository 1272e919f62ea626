"""
Image editing data models for Mirage.

This module defines the operations a single invocation can perform and the
context that names the files it reads and writes.

Classes:
    Operation: Base class for every command operation
    Blur, Brighten, Crop, Rotate, Invert, Grayscale: Operations that transform an input image
    Generate, Fractal: Operations that synthesize an image from parameters alone
    InvocationContext: Input and output paths for one invocation

Type Aliases:
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
"""

import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Tuple

from Mirage_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    COMMAND_BLUR,
    COMMAND_BRIGHTEN,
    COMMAND_CROP,
    COMMAND_FRACTAL,
    COMMAND_GENERATE,
    COMMAND_GRAYSCALE,
    COMMAND_INVERT,
    COMMAND_ROTATE,
    DEFAULT_BLUR_SIGMA,
    DEFAULT_BRIGHTEN_DELTA,
    DEFAULT_FRACTAL_WORKERS,
    MAX_FRACTAL_WORKERS,
    ROTATION_ANGLES,
    U32_MAX,
)
from Mirage_Libs.errors import ArgumentError

RgbColor = Tuple[int, int, int]


def _require_int(name: str, value: Any, low: int, high: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ArgumentError(f"{name} must be an integer, got {value!r}")
    if not (low <= value <= high):
        raise ArgumentError(f"{name} must be in {low}..{high}, got {value}")


@dataclass(frozen=True)
class Operation:
    """Base class for operations.

    Attributes:
        name: Command name used on the command line and in the registry
        requires_input: Whether the operation reads pixels from an input file
    """
    name: ClassVar[str] = ""
    requires_input: ClassVar[bool] = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, including the command name."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["command"] = self.name
        return data


@dataclass(frozen=True)
class Blur(Operation):
    """Gaussian blur; a non-positive ``intensity`` blurs with sigma 1."""
    intensity: float = DEFAULT_BLUR_SIGMA

    name: ClassVar[str] = COMMAND_BLUR

    def __post_init__(self):
        if isinstance(self.intensity, bool) or not isinstance(self.intensity, (int, float)):
            raise ArgumentError(f"blur intensity must be a number, got {self.intensity!r}")
        if not math.isfinite(self.intensity):
            raise ArgumentError(f"blur intensity must be finite, got {self.intensity}")


@dataclass(frozen=True)
class Brighten(Operation):
    delta: int = DEFAULT_BRIGHTEN_DELTA

    name: ClassVar[str] = COMMAND_BRIGHTEN

    def __post_init__(self):
        if isinstance(self.delta, bool) or not isinstance(self.delta, int):
            raise ArgumentError(f"brighten delta must be an integer, got {self.delta!r}")


@dataclass(frozen=True)
class Crop(Operation):
    """Rectangle to keep, given by its top-left corner and size."""
    x: int
    y: int
    width: int
    height: int

    name: ClassVar[str] = COMMAND_CROP

    def __post_init__(self):
        for field_name in ("x", "y", "width", "height"):
            _require_int(f"crop {field_name}", getattr(self, field_name), 0, U32_MAX)

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Pillow-style (left, upper, right, lower) box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class Rotate(Operation):
    """Clockwise rotation by a quarter-turn multiple."""
    degrees: int

    name: ClassVar[str] = COMMAND_ROTATE

    def __post_init__(self):
        if self.degrees not in ROTATION_ANGLES:
            allowed = ", ".join(str(angle) for angle in ROTATION_ANGLES)
            raise ArgumentError(f"rotate degrees must be one of {allowed}, got {self.degrees!r}")


@dataclass(frozen=True)
class Generate(Operation):
    red: int
    green: int
    blue: int

    name: ClassVar[str] = COMMAND_GENERATE
    requires_input: ClassVar[bool] = False

    def __post_init__(self):
        for field_name in ("red", "green", "blue"):
            _require_int(f"generate {field_name}", getattr(self, field_name), CHANNEL_MIN, CHANNEL_MAX)

    @property
    def color(self) -> RgbColor:
        return (self.red, self.green, self.blue)


@dataclass(frozen=True)
class Invert(Operation):
    name: ClassVar[str] = COMMAND_INVERT


@dataclass(frozen=True)
class Grayscale(Operation):
    name: ClassVar[str] = COMMAND_GRAYSCALE


@dataclass(frozen=True)
class Fractal(Operation):
    """Julia-set render; ``workers`` > 1 renders rows in worker processes."""
    workers: int = DEFAULT_FRACTAL_WORKERS

    name: ClassVar[str] = COMMAND_FRACTAL
    requires_input: ClassVar[bool] = False

    def __post_init__(self):
        _require_int("fractal workers", self.workers, 1, MAX_FRACTAL_WORKERS)


@dataclass(frozen=True)
class InvocationContext:
    """Files touched by one invocation.

    Attributes:
        outfile: Destination path; its extension selects the encoder
        infile: Source image path, required by operations that read pixels
    """
    outfile: Path
    infile: Optional[Path] = None

    def __post_init__(self):
        object.__setattr__(self, "outfile", Path(self.outfile))
        if self.infile is not None:
            object.__setattr__(self, "infile", Path(self.infile))
