"""Exception hierarchy for Markdown Task Export.

Each failure class maps to a distinct exit code in the CLI so scripting
callers can branch on the cause of a failed run.
"""

from typing import Union
from pathlib import Path


class TaskExportError(Exception):
    """Base exception for task export operations."""
    pass


class ReadFailure(TaskExportError):
    """A single markdown file could not be read."""
    
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read {self.path}: {reason}")


class InputNotFoundError(TaskExportError):
    """The input directory does not exist."""
    
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        super().__init__(f"Input directory not found: {self.path}")


class EmptyInputError(TaskExportError):
    """There are no task records to export."""
    
    def __init__(self, message: str = "No tasks to export"):
        super().__init__(message)


class WriteFailure(TaskExportError):
    """The output file could not be written."""
    
    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write output file {self.path}: {reason}")


class InvalidOptionError(TaskExportError, ValueError):
    """A configuration value is malformed (e.g. an unknown delimiter name)."""
    pass
