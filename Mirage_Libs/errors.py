"""
Error types raised by Mirage.

Every failure that ends an invocation derives from MirageError and carries
the process exit code the command line reports for it. Each class also
derives from the builtin exception the rest of the code would otherwise
raise, so callers catching ValueError or OSError keep working.
"""

from Mirage_Libs.constants import (
    EXIT_ARGUMENT_ERROR,
    EXIT_DECODE_ERROR,
    EXIT_ENCODE_ERROR,
    EXIT_USAGE_ERROR,
)


class MirageError(Exception):
    """Base class for errors that terminate an invocation."""

    exit_code = 1


class UsageError(MirageError, ValueError):
    """An operation that reads pixels was invoked without an input file."""

    exit_code = EXIT_USAGE_ERROR


class ArgumentError(MirageError, ValueError):
    """An argument parsed but holds a value the operation cannot accept."""

    exit_code = EXIT_ARGUMENT_ERROR


class DecodeError(MirageError, OSError):
    """The input file is missing, unreadable, or not a recognized image."""

    exit_code = EXIT_DECODE_ERROR


class EncodeError(MirageError, OSError):
    """The output could not be encoded or written."""

    exit_code = EXIT_ENCODE_ERROR
