"""Markdown task scanner for Markdown Task Export.

Lines are first classified by a pure function into one of four kinds
(header, open task, closed task, other). A ``LevelTracker`` then consumes
the classified lines and keeps the header hierarchy and the stack of open
parent tasks that give every outstanding task its context.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from .models import TaskRecord
from .exceptions import ReadFailure


logger = logging.getLogger(__name__)


HEADER_RE = re.compile(r"^(#{2,})\s+(.+)$")
OPEN_TASK_RE = re.compile(r"^(\s*)-\s+\[ \]\s+(.+)$")
CLOSED_TASK_RE = re.compile(r"^(\s*)-\s+\[(x|X)\]")
# Tasks annotated as done by hand, e.g. "Ship release ✅ 2024-03-01"
CHECKMARK_RE = re.compile(r"✅\s+\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True)
class HeaderLine:
    """A markdown header; depth 0 is ``##``, depth 1 is ``###`` and so on."""
    depth: int
    text: str


@dataclass(frozen=True)
class OpenTask:
    """An unchecked ``- [ ]`` checkbox item."""
    indent: int
    text: str


@dataclass(frozen=True)
class ClosedTask:
    """A checked ``- [x]`` / ``- [X]`` checkbox item."""
    indent: int


@dataclass(frozen=True)
class OtherLine:
    """Anything the scanner does not care about."""
    pass


ClassifiedLine = Union[HeaderLine, OpenTask, ClosedTask, OtherLine]

OTHER_LINE = OtherLine()


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single markdown line."""
    header_match = HEADER_RE.match(line)
    if header_match:
        return HeaderLine(
            depth=len(header_match.group(1)) - 2,
            text=header_match.group(2).strip(),
        )

    closed_match = CLOSED_TASK_RE.match(line)
    if closed_match:
        return ClosedTask(indent=len(closed_match.group(1)))

    task_match = OPEN_TASK_RE.match(line)
    if task_match:
        return OpenTask(
            indent=len(task_match.group(1)),
            text=task_match.group(2).strip(),
        )

    return OTHER_LINE


def is_marked_done(text: str) -> bool:
    """Return True if task text carries a dated completion checkmark."""
    return CHECKMARK_RE.search(text) is not None


def has_subtasks(lines: Sequence[str], start: int, indent: int) -> bool:
    """Look ahead from ``start`` for an open task nested deeper than ``indent``.

    The search stops at the next header or at the next open task that is
    not indented deeper (a sibling or an ancestor's sibling). Blank lines,
    plain text and checked tasks are skipped.
    """
    for line in lines[start:]:
        if not line.strip():
            continue

        kind = classify_line(line)
        if isinstance(kind, HeaderLine):
            return False
        if isinstance(kind, OpenTask):
            return kind.indent > indent

    return False


@dataclass
class LevelTracker:
    """Header slots and open parent tasks for one file's scan."""

    headers: List[str] = field(default_factory=list)
    parents: List[Tuple[int, str]] = field(default_factory=list)

    def enter_header(self, header: HeaderLine) -> None:
        """Record a header and drop everything nested under the previous one."""
        while len(self.headers) <= header.depth:
            self.headers.append("")

        self.headers[header.depth] = header.text
        for index in range(header.depth + 1, len(self.headers)):
            self.headers[index] = ""

        self.parents.clear()

    def close_parents(self, indent: int) -> None:
        """Pop every open parent at the same or a deeper indent."""
        while self.parents and self.parents[-1][0] >= indent:
            self.parents.pop()

    def open_parent(self, task: OpenTask) -> None:
        """Push a task that has nested children."""
        self.close_parents(task.indent)
        self.parents.append((task.indent, task.text))

    def snapshot(self) -> List[str]:
        """Return a fresh list of the current context levels."""
        return list(self.headers) + [text for _, text in self.parents]


class MarkdownTaskParser:
    """Extracts outstanding tasks from markdown project files."""

    def __init__(self, encoding: str = "utf-8-sig"):
        self.encoding = encoding

    def parse_lines(self, lines: Sequence[str], customer_name: str,
                    project_name: str) -> List[TaskRecord]:
        """Scan already loaded lines and return the outstanding leaf tasks."""
        tracker = LevelTracker()
        records: List[TaskRecord] = []

        for index, line in enumerate(lines):
            kind = classify_line(line)

            if isinstance(kind, HeaderLine):
                tracker.enter_header(kind)
                continue

            if not isinstance(kind, OpenTask) or is_marked_done(kind.text):
                continue

            if has_subtasks(lines, index + 1, kind.indent):
                tracker.open_parent(kind)
                continue

            tracker.close_parents(kind.indent)
            records.append(TaskRecord(
                customer_name=customer_name,
                project_name=project_name,
                task=kind.text,
                levels=tracker.snapshot(),
            ))

        return records

    def read_lines(self, path: Union[str, Path]) -> List[str]:
        """Read a whole file into memory, raising ``ReadFailure`` on error."""
        path = Path(path)
        try:
            content = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadFailure(path, str(e)) from e
        # Text mode folds \r\n and \r into \n; form feeds and Unicode separators stay in the line.
        lines = content.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def parse_file(self, path: Union[str, Path], customer_name: str,
                   project_name: str) -> List[TaskRecord]:
        """Read and scan one markdown file."""
        lines = self.read_lines(path)
        records = self.parse_lines(lines, customer_name, project_name)
        logger.debug(f"Scanned {path}: {len(lines)} line(s), {len(records)} task(s)")
        return records


def scan_lines(lines: Sequence[str], customer_name: str,
               project_name: str) -> List[TaskRecord]:
    """Return the outstanding tasks found in ``lines``."""
    return MarkdownTaskParser().parse_lines(lines, customer_name, project_name)


def scan_file(path: Union[str, Path], customer_name: str,
              project_name: str) -> List[TaskRecord]:
    """Return the outstanding tasks found in the markdown file at ``path``."""
    return MarkdownTaskParser().parse_file(path, customer_name, project_name)
