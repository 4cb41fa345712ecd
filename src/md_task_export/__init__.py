"""Markdown Task Export - collect outstanding markdown checkbox tasks into CSV."""

__version__ = "1.0.1"
__author__ = "Markdown Task Export Team"

from .models import TaskRecord, FormatOptions
from .exceptions import (
    TaskExportError,
    ReadFailure,
    InputNotFoundError,
    EmptyInputError,
    WriteFailure,
    InvalidOptionError,
)
from .parser import scan_lines, scan_file
from .export import serialize, export_to_file

__all__ = [
    "TaskRecord",
    "FormatOptions",
    "TaskExportError",
    "ReadFailure",
    "InputNotFoundError",
    "EmptyInputError",
    "WriteFailure",
    "InvalidOptionError",
    "scan_lines",
    "scan_file",
    "serialize",
    "export_to_file",
    "__version__",
]
