"""
CommandsLib - Command-line surface for Mirage

This module parses arguments into operations, holds the handler for each
command, and dispatches exactly one handler per invocation.
"""

from Mirage_Libs.CommandsLib.command_registry import (
    CommandRegistry,
    build_default_registry,
)
from Mirage_Libs.CommandsLib.command_parser import (
    build_parser,
    operation_from_args,
    context_from_args,
    parse_invocation,
)

__all__ = [
    "CommandRegistry",
    "build_default_registry",
    "build_parser",
    "operation_from_args",
    "context_from_args",
    "parse_invocation",
]
