"""
Column Remapper
===============

Reads a CSV fully into memory, finds the configured column in the header
and rewrites every data row's value in that column through the
:class:`~remap.lookup.LookupTable`. The header is written unchanged.

Output goes to ``sanitized_<source name>`` inside the job's output
directory. The sanitized content is built completely before the output
file is opened, so a failing input never leaves a partial file behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union

from remap.config import RunConfig
from remap.csv_io import Record, read_numbered_records, write_records
from remap.errors import ColumnNotFoundError, EmptyFileError, MalformedRowError
from remap.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

SANITIZED_PREFIX = "sanitized_"


@dataclass
class RemapResult:
    """
    Outcome of one remap.

    Attributes:
        output_path: sanitized file written
        rows: data rows processed (header excluded)
        replaced: cells whose value actually changed
        padded: rows padded under the ``pad`` ragged-row policy
    """
    output_path: Path
    rows: int
    replaced: int
    padded: int = 0


def sanitized_name(csv_path: PathLike) -> str:
    return SANITIZED_PREFIX + Path(csv_path).name


def find_column(header: Sequence[str], column_name: str) -> int:
    """Zero-based index of the first header cell equal to ``column_name``, or -1."""
    for i, name in enumerate(header):
        if name == column_name:
            return i
    return -1


class ColumnRemapper:
    """Apply the configured lookup to one column of a CSV file."""

    def __init__(self, config: RunConfig):
        self._config = config

    def transform(
        self,
        records: List[Record],
        path: str = "",
        lines: Optional[Sequence[int]] = None,
    ) -> RemapResult:
        """
        Remap ``records`` in place (header untouched).

        ``path`` and ``lines`` (the file line each record starts on) are only
        used in error messages; without ``lines`` records count from 1.
        The returned result's ``output_path`` is left empty; :meth:`remap`
        fills it in.
        """
        if len(records) < 1:
            raise EmptyFileError(f"empty CSV: {path}", path)

        header = records[0]
        col_idx = find_column(header, self._config.column_name)
        if col_idx == -1:
            raise ColumnNotFoundError(self._config.column_name, path)
        logger.debug("Column %r at index %d in %s", self._config.column_name, col_idx, path)

        lookup = self._config.lookup
        pad = self._config.ragged_rows == "pad"
        replaced = 0
        padded = 0
        for n, row in enumerate(records[1:], start=1):
            if len(row) <= col_idx:
                if not pad:
                    line = lines[n] if lines else n + 1
                    raise MalformedRowError(line, len(row), col_idx, path)
                row.extend([""] * (col_idx + 1 - len(row)))
                padded += 1
            original = row[col_idx]
            mapped = lookup.lookup(original)
            if mapped != original:
                replaced += 1
            row[col_idx] = mapped

        return RemapResult(output_path=Path(), rows=len(records) - 1, replaced=replaced, padded=padded)

    def remap(self, csv_path: PathLike, out_dir: PathLike) -> RemapResult:
        """
        Sanitize ``csv_path`` into ``out_dir/sanitized_<name>``.

        Raises:
            OpenError / ReadError: the source cannot be opened or parsed
            EmptyFileError: the source holds no record at all
            ColumnNotFoundError: the header lacks the configured column
            MalformedRowError: a row is too short and ragged rows are errors
            WriteError: the sanitized file cannot be written
        """
        numbered = read_numbered_records(csv_path)
        records = [row for _, row in numbered]
        lines = [line for line, _ in numbered]
        result = self.transform(records, str(csv_path), lines)

        out_path = Path(out_dir) / sanitized_name(csv_path)
        write_records(out_path, records)
        result.output_path = out_path

        if result.padded:
            logger.warning("Padded %d short rows in %s", result.padded, csv_path)
        logger.info(
            "Sanitized %s -> %s (%d rows, %d replaced)",
            csv_path, out_path, result.rows, result.replaced,
        )
        return result


def remap_csv(csv_path: PathLike, out_dir: PathLike, config: RunConfig) -> RemapResult:
    return ColumnRemapper(config).remap(csv_path, out_dir)
