"""
Command-line parsing for Mirage.

Turns ``argv`` into one Operation and the InvocationContext it runs in.
Malformed numbers and out-of-range values are rejected by argparse itself
(exit status 2) before anything is dispatched.

Usage:
    mirage --outfile PATH [--infile PATH] <command> [command options]

Functions:
    build_parser: Create the argparse parser with one subcommand per operation
    operation_from_args: Build the Operation selected by parsed arguments
    context_from_args: Build the InvocationContext from parsed arguments
    parse_invocation: Parse argv into (namespace, operation, context)
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import argparse

from Mirage_Libs import __version__
from Mirage_Libs.constants import (
    CHANNEL_MAX,
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
    PROGRAM_NAME,
    ROTATION_ANGLES,
    U32_MAX,
)
from Mirage_Libs.ImageEditingLib.image_models import (
    Blur,
    Brighten,
    Crop,
    Fractal,
    Generate,
    Grayscale,
    Invert,
    InvocationContext,
    Operation,
    Rotate,
)

I32_MIN = -(2 ** 31)
I32_MAX = 2 ** 31 - 1


def _bounded_int(text: str, low: int, high: int, kind: str) -> int:
    try:
        value = int(text, 10)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"invalid {kind} value: {text!r}")
    if not (low <= value <= high):
        raise argparse.ArgumentTypeError(f"{kind} value must be in {low}..{high}, got {value}")
    return value


def u8_value(text: str) -> int:
    """argparse type for a byte (0-255)."""
    return _bounded_int(text, 0, CHANNEL_MAX, "byte")


def u32_value(text: str) -> int:
    """argparse type for an unsigned 32-bit integer."""
    return _bounded_int(text, 0, U32_MAX, "unsigned 32-bit")


def i32_value(text: str) -> int:
    """argparse type for a signed 32-bit integer."""
    return _bounded_int(text, I32_MIN, I32_MAX, "signed 32-bit")


def worker_count(text: str) -> int:
    return _bounded_int(text, 1, MAX_FRACTAL_WORKERS, "worker count")


def rotation_degrees(text: str) -> int:
    """
    argparse type for a clockwise rotation.

    Accepts 90, 180 and 270, and the spellings r90, r180 and r270.
    """
    normalized = str(text).strip().lower()
    if normalized.startswith("r"):
        normalized = normalized[1:]
    try:
        degrees = int(normalized, 10)
    except ValueError:
        degrees = None
    if degrees not in ROTATION_ANGLES:
        allowed = ", ".join(str(angle) for angle in ROTATION_ANGLES)
        raise argparse.ArgumentTypeError(f"invalid choice: {text!r} (choose from {allowed})")
    return degrees


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Apply one image filter, or generate a synthetic image, and write the result.",
    )
    parser.add_argument("--version", action="version", version=f"{PROGRAM_NAME} {__version__}")
    parser.add_argument("-i", "--infile", default=None, help="Input image (required by every filter command)")
    parser.add_argument("-o", "--outfile", required=True, help="Output image; the extension selects the format")
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr")

    commands = parser.add_subparsers(dest="command", metavar="<command>")
    commands.required = True

    blur = commands.add_parser(COMMAND_BLUR, help="Gaussian blur")
    blur.add_argument("-v", "--val", type=float, default=DEFAULT_BLUR_SIGMA,
                      help=f"Blur sigma in pixels; 0 or less means 1 (default: {DEFAULT_BLUR_SIGMA})")

    brighten = commands.add_parser(COMMAND_BRIGHTEN, help="Add a signed amount to every channel")
    brighten.add_argument("-v", "--val", type=i32_value, default=DEFAULT_BRIGHTEN_DELTA,
                          help=f"Brightness delta, negative darkens (default: {DEFAULT_BRIGHTEN_DELTA})")

    crop = commands.add_parser(COMMAND_CROP, help="Cut out a rectangle")
    crop.add_argument("-x", type=u32_value, required=True, help="Left edge")
    crop.add_argument("-y", type=u32_value, required=True, help="Top edge")
    crop.add_argument("--width", type=u32_value, required=True, help="Rectangle width")
    crop.add_argument("--height", type=u32_value, required=True, help="Rectangle height")

    rotate = commands.add_parser(COMMAND_ROTATE, help="Rotate clockwise")
    rotate.add_argument("-d", "--degrees", type=rotation_degrees, required=True,
                        help="90, 180 or 270")

    generate = commands.add_parser(COMMAND_GENERATE, help="Render an 800x800 cyclic gradient")
    generate.add_argument("-r", type=u8_value, required=True, help="Initial red (0-255)")
    generate.add_argument("-g", type=u8_value, required=True, help="Initial green (0-255)")
    generate.add_argument("-b", type=u8_value, required=True, help="Initial blue (0-255)")

    commands.add_parser(COMMAND_INVERT, help="Complement every color channel")
    commands.add_parser(COMMAND_GRAYSCALE, help="Convert to grayscale")

    fractal = commands.add_parser(COMMAND_FRACTAL, help="Render an 800x800 Julia-set fractal")
    fractal.add_argument("--workers", type=worker_count, default=DEFAULT_FRACTAL_WORKERS,
                         help=f"Worker processes for rendering rows (default: {DEFAULT_FRACTAL_WORKERS})")

    return parser


def operation_from_args(args: argparse.Namespace) -> Operation:
    """
    Build the Operation for the parsed subcommand.

    Raises:
        ArgumentError: If a value is rejected by the operation
        ValueError: If the namespace names no known command
    """
    command = args.command

    if command == COMMAND_BLUR:
        return Blur(intensity=args.val)
    if command == COMMAND_BRIGHTEN:
        return Brighten(delta=args.val)
    if command == COMMAND_CROP:
        return Crop(x=args.x, y=args.y, width=args.width, height=args.height)
    if command == COMMAND_ROTATE:
        return Rotate(degrees=args.degrees)
    if command == COMMAND_GENERATE:
        return Generate(red=args.r, green=args.g, blue=args.b)
    if command == COMMAND_INVERT:
        return Invert()
    if command == COMMAND_GRAYSCALE:
        return Grayscale()
    if command == COMMAND_FRACTAL:
        return Fractal(workers=args.workers)

    raise ValueError(f"Unknown command: {command}")


def context_from_args(args: argparse.Namespace) -> InvocationContext:
    infile: Optional[Path] = Path(args.infile) if args.infile else None
    return InvocationContext(outfile=Path(args.outfile), infile=infile)


def parse_invocation(
    argv: Optional[Sequence[str]] = None,
) -> Tuple[argparse.Namespace, Operation, InvocationContext]:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        (namespace, operation, context)

    Raises:
        SystemExit: On malformed arguments, --help or --version (argparse)
        ArgumentError: If a parsed value is rejected by the operation
    """
    parser = build_parser()
    args_list: Optional[List[str]] = list(argv) if argv is not None else None
    args = parser.parse_args(args_list)
    return args, operation_from_args(args), context_from_args(args)
