"""Directory traversal for Markdown Task Export.

The input directory holds one sub-directory per customer. Every markdown
file below a customer directory is one project, named after the file stem.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .models import TaskRecord
from .parser import MarkdownTaskParser
from .exceptions import ReadFailure, InputNotFoundError


logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def _is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


@dataclass
class CollectionResult:
    """Aggregated output of a collection run."""

    records: List[TaskRecord] = field(default_factory=list)
    files_scanned: int = 0
    failures: List[ReadFailure] = field(default_factory=list)

    @property
    def customers(self) -> List[str]:
        """Customer names that contributed at least one task, in order."""
        seen: List[str] = []
        for record in self.records:
            if record.customer_name not in seen:
                seen.append(record.customer_name)
        return seen


class TaskCollector:
    """Walks a customers directory and scans every project file."""

    def __init__(self, parser: Optional[MarkdownTaskParser] = None, verbose: bool = False):
        self.parser = parser or MarkdownTaskParser()
        self.verbose = verbose

    def _progress(self, message: str) -> None:
        logger.log(logging.INFO if self.verbose else logging.DEBUG, message)

    def collect(self, customers_path: Union[str, Path]) -> CollectionResult:
        """Collect outstanding tasks from every customer directory.

        Raises:
            InputNotFoundError: If ``customers_path`` is not a directory
        """
        root = Path(customers_path)
        if not root.is_dir():
            raise InputNotFoundError(root)

        result = CollectionResult()
        for customer_dir in self._list_subdirectories(root):
            self._collect_directory(customer_dir, customer_dir.name, result)

        logger.debug(
            f"Collected {len(result.records)} task(s) from {result.files_scanned} file(s), "
            f"{len(result.failures)} failure(s)"
        )
        return result

    def _list_subdirectories(self, directory: Path) -> List[Path]:
        return sorted(
            (p for p in directory.iterdir()
             if p.is_dir() and not p.is_symlink() and not _is_hidden(p)),
            key=lambda p: p.name,
        )

    def _list_markdown_files(self, directory: Path) -> List[Path]:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == MARKDOWN_SUFFIX),
            key=lambda p: p.name,
        )

    def _collect_directory(self, directory: Path, customer_name: str,
                           result: CollectionResult) -> None:
        """Scan markdown files in ``directory``, then recurse into sub-directories."""
        try:
            markdown_files = self._list_markdown_files(directory)
            subdirectories = self._list_subdirectories(directory)
        except OSError as e:
            logger.warning(f"Failed to access directory {directory}: {e}")
            return

        for file_path in markdown_files:
            project_name = file_path.stem
            self._progress(f"Processing: {customer_name} / {project_name}")

            try:
                records = self.parser.parse_file(file_path, customer_name, project_name)
            except ReadFailure as e:
                logger.warning(f"Failed to process file {file_path}: {e.reason}")
                result.failures.append(e)
                continue

            result.files_scanned += 1
            if records:
                result.records.extend(records)
                self._progress(f"  Found {len(records)} task(s)")

        for subdirectory in subdirectories:
            self._collect_directory(subdirectory, customer_name, result)


def collect_tasks(customers_path: Union[str, Path], verbose: bool = False) -> CollectionResult:
    """Collect outstanding tasks below ``customers_path``."""
    return TaskCollector(verbose=verbose).collect(customers_path)
