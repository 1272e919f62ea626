"""
Mirage - command-line image transformation tool.

Applies one filter (blur, brighten, crop, rotate, invert, grayscale) to an
input image, or generates a synthetic image (gradient, fractal), and writes
the result to the output path.

Examples:
    mirage --infile photo.png --outfile blurred.png blur --val 2.5
    mirage -i photo.png -o turned.png rotate --degrees 90
    mirage --outfile gradient.png generate -r 0 -g 64 -b 128
    mirage --outfile julia.png fractal --workers 4
"""

from typing import Optional, Sequence
import logging
import sys

from Mirage_Libs.CommandsLib.command_parser import parse_invocation
from Mirage_Libs.CommandsLib.command_registry import build_default_registry
from Mirage_Libs.constants import EXIT_OK
from Mirage_Libs.errors import MirageError

logger = logging.getLogger("mirage")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # Pillow logs every plugin it tries at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run one invocation.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Process exit status: 0 on success, the error's exit code otherwise
    """
    try:
        args, operation, context = parse_invocation(argv)
    except MirageError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    configure_logging(args.verbose)

    registry = build_default_registry()
    try:
        registry.dispatch(operation, context)
    except MirageError as e:
        logger.debug("Invocation failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
