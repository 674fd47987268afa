"""Backends rendering the structural model to source text (Python, ...)."""

from .python_generator import (
    DEFAULT_FORMAT_COMMAND,
    FormattingError,
    format_python_file,
    generate_python,
    save_python_file,
)

__all__ = [
    "DEFAULT_FORMAT_COMMAND",
    "FormattingError",
    "format_python_file",
    "generate_python",
    "save_python_file",
]
