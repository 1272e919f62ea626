"""
Command Handler Registry and Dispatcher.

This module maps command names to the handlers that carry them out and
dispatches exactly one handler per invocation.

Classes:
    CommandRegistry: Registry and dispatcher for command handlers

Functions:
    build_default_registry: Create a registry holding every built-in command
"""

from pathlib import Path
from typing import Callable, Dict, List, NamedTuple, Optional, Type
import logging

from Mirage_Libs.ImageEditingLib.image_models import InvocationContext, Operation
from Mirage_Libs.errors import UsageError

logger = logging.getLogger(__name__)

# Type alias for handler function
HandlerFunction = Callable[[Operation, InvocationContext], Path]


class _Entry(NamedTuple):
    handler: HandlerFunction
    operation_type: Optional[Type[Operation]]
    requires_input: bool


class CommandRegistry:
    """
    Registry for command handlers.

    Each command name maps to one handler and the operation type it accepts.
    ``dispatch`` enforces the input-file precondition before the handler
    runs, so handlers can assume ``context.infile`` is set whenever their
    command requires it.

    Example:
        >>> registry = CommandRegistry()
        >>> registry.register("blur", execute_blur_command, Blur, requires_input=True)
        >>> registry.dispatch(Blur(2.0), InvocationContext(outfile="out.png", infile="in.png"))
        PosixPath('out.png')
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._entries: Dict[str, _Entry] = {}

    def register(
        self,
        name: str,
        handler: HandlerFunction,
        operation_type: Optional[Type[Operation]] = None,
        requires_input: bool = True,
    ) -> None:
        """
        Register a command handler.

        Args:
            name: Unique command name (e.g., "blur")
            handler: Callable accepting (operation, context) and returning the written path
            operation_type: Operation class the handler accepts (None = any)
            requires_input: Whether the command needs an input file

        Raises:
            ValueError: If name is empty or handler is not callable
            RuntimeError: If name is already registered
        """
        name = str(name).strip()

        if not name:
            raise ValueError("command name cannot be empty")

        if not callable(handler):
            raise ValueError(f"handler must be callable, got {type(handler)}")

        if name in self._entries:
            raise RuntimeError(f"Command '{name}' is already registered")

        self._entries[name] = _Entry(handler, operation_type, bool(requires_input))
        logger.debug(f"Registered handler for command: {name}")

    def get_handler(self, name: str) -> HandlerFunction:
        """
        Get the handler for a command.

        Raises:
            KeyError: If name is not registered
        """
        name = str(name).strip()

        if name not in self._entries:
            available = ", ".join(self.list_commands())
            raise KeyError(
                f"No handler registered for command '{name}'. "
                f"Available commands: {available}"
            )

        return self._entries[name].handler

    def list_commands(self) -> List[str]:
        """Sorted list of all registered command names."""
        return sorted(self._entries.keys())

    def dispatch(self, operation: Operation, context: InvocationContext) -> Path:
        """
        Run the handler for ``operation``.

        The input-file check happens before the handler is called, so a
        missing input never causes any file to be read or written.

        Args:
            operation: Parsed operation
            context: Input and output paths

        Returns:
            Path the handler wrote

        Raises:
            KeyError: If no handler is registered for the operation
            TypeError: If the handler was registered for a different operation type
            UsageError: If the command needs an input file and none was given
            MirageError: Any error raised by the handler
        """
        name = operation.name
        handler = self.get_handler(name)
        entry = self._entries[name]

        if entry.operation_type is not None and not isinstance(operation, entry.operation_type):
            raise TypeError(
                f"Command '{name}' expects {entry.operation_type.__name__}, "
                f"got {type(operation).__name__}"
            )

        if entry.requires_input:
            if context.infile is None:
                raise UsageError(f"input file required for '{name}' (pass --infile PATH)")
        elif context.infile is not None:
            logger.warning(f"Command '{name}' does not read an input file; ignoring {context.infile}")

        logger.debug(f"Dispatching {name}: {operation.to_dict()}")
        output_path = handler(operation, context)
        logger.info(f"{name} wrote {output_path}")
        return output_path


def build_default_registry() -> CommandRegistry:
    """
    Create a registry with every built-in command.

    The six transforms (blur, brighten, crop, rotate, invert, grayscale)
    need an input file; generate and fractal do not.

    Returns:
        A new CommandRegistry
    """
    from Mirage_Libs.CommandsLib.command_handlers import (
        execute_blur_command,
        execute_brighten_command,
        execute_crop_command,
        execute_rotate_command,
        execute_invert_command,
        execute_grayscale_command,
        execute_generate_command,
        execute_fractal_command,
    )
    from Mirage_Libs.ImageEditingLib.image_models import (
        Blur,
        Brighten,
        Crop,
        Rotate,
        Invert,
        Grayscale,
        Generate,
        Fractal,
    )

    registry = CommandRegistry()

    for operation_type, handler in (
        (Blur, execute_blur_command),
        (Brighten, execute_brighten_command),
        (Crop, execute_crop_command),
        (Rotate, execute_rotate_command),
        (Invert, execute_invert_command),
        (Grayscale, execute_grayscale_command),
        (Generate, execute_generate_command),
        (Fractal, execute_fractal_command),
    ):
        registry.register(
            name=operation_type.name,
            handler=handler,
            operation_type=operation_type,
            requires_input=operation_type.requires_input,
        )

    return registry
