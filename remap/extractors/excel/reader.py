"""
SpreadsheetExtractor: low-level workbook I/O and first-sheet export.

Opens a workbook with openpyxl, picks the first sheet in declared order,
reads its rows as displayed strings and writes them verbatim as CSV.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple, Union

from openpyxl import load_workbook

from remap.csv_io import Record, write_records
from remap.errors import NoSheetsError, OpenError, ReadError
from remap.extractors.excel.data_cleaner import DataCleaner
from remap.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class SpreadsheetExtractor:
    """
    Export the first sheet of an ``.xlsx`` workbook to CSV.

    Rows are ragged: trailing empty cells and trailing empty rows are
    dropped, interior empty rows are kept, nothing is padded.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_sheet_names(self, file_path: PathLike) -> List[str]:
        wb = self._open(file_path)
        try:
            return list(wb.sheetnames or [])
        finally:
            self._close(wb)

    def read_rows(self, file_path: PathLike) -> Tuple[str, List[Record]]:
        """
        Return ``(sheet_name, rows)`` for the workbook's first sheet.

        Raises:
            OpenError: the workbook cannot be parsed
            NoSheetsError: the workbook declares no sheets
            ReadError: row iteration failed
        """
        wb = self._open(file_path)
        try:
            names = list(wb.sheetnames or [])
            if not names:
                raise NoSheetsError(f"no sheets in {file_path}", str(file_path))
            sheet_name = names[0]
            logger.debug("Sheets in %s: %s (using %s)", file_path, names, sheet_name)
            try:
                ws = wb[sheet_name]
                rows = [DataCleaner.row_to_strs(r) for r in ws.iter_rows()]
            except Exception as exc:
                raise ReadError(f"cannot read rows of {sheet_name} in {file_path}: {exc}", str(file_path)) from exc
            return sheet_name, DataCleaner.drop_trailing_empty_rows(rows)
        finally:
            self._close(wb)

    def extract(self, xlsx_path: PathLike, csv_path: PathLike) -> int:
        """
        Write the first sheet of ``xlsx_path`` to ``csv_path`` (created or
        truncated). Returns the number of rows written.

        Nothing is written when opening or reading the workbook fails.
        """
        sheet_name, rows = self.read_rows(xlsx_path)
        write_records(csv_path, rows)
        logger.info("Converted %s [%s] -> %s (%d rows)", xlsx_path, sheet_name, csv_path, len(rows))
        return len(rows)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _open(file_path: PathLike):
        try:
            return load_workbook(str(file_path), read_only=True, data_only=True)
        except Exception as exc:
            raise OpenError(f"cannot open workbook {file_path}: {exc}", str(file_path)) from exc

    @staticmethod
    def _close(wb) -> None:
        close = getattr(wb, "close", None)
        if callable(close):
            close()


def extract_first_sheet(xlsx_path: PathLike, csv_path: PathLike) -> int:
    return SpreadsheetExtractor().extract(xlsx_path, csv_path)
