"""
CSV reading/writing helpers shared by the extractor and the remapper.

Output is comma-delimited, minimally ``"``-quoted, ``\\n``-terminated UTF-8.
Input tolerates a leading UTF-8 BOM; blank lines are not records.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

from remap.errors import OpenError, ReadError, WriteError

PathLike = Union[str, Path]

Record = List[str]

INPUT_ENCODING = "utf-8-sig"
OUTPUT_ENCODING = "utf-8"
DELIMITER = ","
LINE_TERMINATOR = "\n"


def read_numbered_records(path: PathLike) -> List[Tuple[int, Record]]:
    """
    Read every non-blank record of ``path`` into memory, in file order,
    paired with the 1-based file line the record starts on.
    """
    try:
        fh = open(path, "r", encoding=INPUT_ENCODING, newline="")
    except OSError as exc:
        raise OpenError(f"cannot open {path}: {exc}", str(path)) from exc
    with fh:
        reader = csv.reader(fh, delimiter=DELIMITER)
        numbered: List[Tuple[int, Record]] = []
        try:
            start = reader.line_num + 1
            for row in reader:
                if row:
                    numbered.append((start, row))
                start = reader.line_num + 1
        except (csv.Error, UnicodeDecodeError) as exc:
            raise ReadError(f"cannot read {path}: {exc}", str(path)) from exc
    return numbered


def read_records(path: PathLike) -> List[Record]:
    return [row for _, row in read_numbered_records(path)]


def render_records(records: Iterable[Sequence[str]]) -> str:
    buf = io.StringIO(newline="")
    writer = csv.writer(buf, delimiter=DELIMITER, lineterminator=LINE_TERMINATOR)
    for row in records:
        writer.writerow(row)
    return buf.getvalue()


def write_records(path: PathLike, records: Iterable[Sequence[str]]) -> None:
    """Create or truncate ``path`` and write ``records`` to it."""
    text = render_records(records)
    try:
        with open(path, "w", encoding=OUTPUT_ENCODING, newline="") as fh:
            fh.write(text)
    except OSError as exc:
        raise WriteError(f"cannot write {path}: {exc}", str(path)) from exc
