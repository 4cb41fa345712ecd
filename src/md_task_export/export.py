"""
CSV export for Markdown Task Export

Task records carry a variable number of context levels, so the column layout
is resolved once over the whole collection before any row is written. Output
files are framed with a UTF-8 byte-order marker so spreadsheet applications
pick up the encoding.
"""

import csv
import logging
from io import StringIO
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .models import TaskRecord, FormatOptions
from .exceptions import EmptyInputError, WriteFailure


logger = logging.getLogger(__name__)

BOM_ENCODING = "utf-8-sig"
LINE_TERMINATOR = "\r\n"


def resolve_level_columns(records: Sequence[TaskRecord], compress_levels: bool) -> int:
    """Return the number of level columns needed for ``records``."""
    if compress_levels:
        return max((len(record.non_empty_levels()) for record in records), default=0)
    return max((len(record.levels) for record in records), default=0)


class CSVExporter:
    """Export task records to delimited text"""

    def __init__(self, options: Optional[FormatOptions] = None):
        self.options = options or FormatOptions()

    def header_row(self, level_columns: int) -> List[str]:
        """Column labels for a table with ``level_columns`` level columns"""
        labels = [f"Level{i}" for i in range(1, level_columns + 1)]
        return ["CustomerName", "ProjectName"] + labels + ["Task"]

    def record_row(self, record: TaskRecord, level_columns: int) -> List[str]:
        """Lay out one record, padding its levels to ``level_columns``"""
        if self.options.compress_levels:
            levels = record.non_empty_levels()
        else:
            levels = list(record.levels)
        levels += [""] * (level_columns - len(levels))
        return [record.customer_name, record.project_name] + levels + [record.task]

    def export_records(self, records: Sequence[TaskRecord]) -> str:
        """Export records to CSV text"""
        if not records:
            raise EmptyInputError()

        level_columns = resolve_level_columns(records, self.options.compress_levels)
        logger.debug(f"Resolved {level_columns} level column(s) for {len(records)} record(s)")

        output = StringIO()
        writer = csv.writer(
            output,
            delimiter=self.options.delimiter,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=LINE_TERMINATOR,
        )

        if self.options.include_header:
            writer.writerow(self.header_row(level_columns))

        for record in records:
            writer.writerow(self.record_row(record, level_columns))

        return output.getvalue()


def serialize(records: Sequence[TaskRecord], options: FormatOptions) -> bytes:
    """Serialize records to UTF-8 encoded CSV (without byte-order marker)."""
    return CSVExporter(options).export_records(records).encode("utf-8")


def write_csv(content: str, output_path: Union[str, Path]) -> Path:
    """Write CSV text with a UTF-8 byte-order marker, creating parent directories."""
    path = Path(output_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding=BOM_ENCODING, newline="") as f:
            f.write(content)
    except OSError as e:
        raise WriteFailure(path, str(e)) from e

    logger.debug(f"Wrote {len(content)} characters to {path}")
    return path


def export_to_file(records: Sequence[TaskRecord], options: FormatOptions,
                   output_path: Union[str, Path]) -> int:
    """Serialize records and write them to ``output_path``.

    Returns:
        Number of data rows written
    """
    content = CSVExporter(options).export_records(records)
    write_csv(content, output_path)
    return len(records)
