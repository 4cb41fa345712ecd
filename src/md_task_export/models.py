"""Data models for exported tasks and serializer options."""

from dataclasses import dataclass, field
from typing import List

from .exceptions import InvalidOptionError


SUPPORTED_DELIMITERS = (",", ";")


@dataclass
class TaskRecord:
    """One outstanding task with the context it was found under.
    
    ``levels`` runs from the outermost document header to the innermost open
    parent task. Empty strings keep header slots aligned with their depth, so
    the length differs from record to record.
    """
    
    customer_name: str
    project_name: str
    task: str
    levels: List[str] = field(default_factory=list)
    
    def non_empty_levels(self) -> List[str]:
        """Return the level values that carry text, in order."""
        return [level for level in self.levels if level]


@dataclass(frozen=True)
class FormatOptions:
    """Options controlling how task records are laid out as rows."""
    
    delimiter: str = ","
    compress_levels: bool = False
    include_header: bool = True
    
    def __post_init__(self):
        if self.delimiter not in SUPPORTED_DELIMITERS:
            raise InvalidOptionError(
                f"Invalid delimiter: {self.delimiter!r}. Use ',' or ';'."
            )
    
    @property
    def delimiter_name(self) -> str:
        """Human readable delimiter name used in log output."""
        return "Comma" if self.delimiter == "," else "Semicolon"
