"""
Mirage_Libs - Mirage Library Modules

This package contains core functionality for the Mirage command-line image tool,
organized into specialized sub-packages:

- ImageEditingLib: Image models, Pillow-backed transforms, pixel generators and file I/O
- CommandsLib: Command-line parsing, command handlers and the command registry
"""

__version__ = "0.1.0"
