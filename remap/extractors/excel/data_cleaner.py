"""
DataCleaner: value normalisation utilities for the Excel extractor.

Responsibilities:
- Cell-level string conversion (``cell_to_str``)
- Number-format rendering (``format_value``), so exported cells read as a
  spreadsheet application displays them (``00123``, ``50%``, ``1,234.50``)
- Trimming ragged row tails
"""

from __future__ import annotations

import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from openpyxl.styles.numbers import is_datetime

# Zero-padded integers, fixed decimals, thousands grouping and percent,
# e.g. "00000", "0.00", "#,##0", "#,##0.00", "0%", "0.0%"
NUMERIC_FORMAT_RE = re.compile(
    r"^(?P<grouping>#,##)?(?P<digits>0+)(?:\.(?P<decimals>0+))?(?P<percent>%)?$"
)

GENERAL_FORMATS = {"", "general", "@"}


class DataCleaner:
    """Stateless helper that turns raw openpyxl cell values into strings."""

    # ----- cell → string ---------------------------------------------------

    @staticmethod
    def cell_to_str(value: Any) -> str:
        """
        Convert a cell value to its string form under the General format.

        Strings are returned verbatim (no trimming) since the remapper
        matches values exactly.
        """
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float):
            if value.is_integer():
                return str(int(value))
            return repr(value)
        if isinstance(value, (int, Decimal)):
            return str(value)
        if isinstance(value, datetime):
            if value.time() == time(0, 0):
                return value.date().isoformat()
            return value.isoformat(sep=" ", timespec="seconds")
        if isinstance(value, (date, time)):
            return value.isoformat()
        # Rich-text objects from openpyxl may expose .plain or .text
        plain_attr = getattr(value, "plain", None)
        if isinstance(plain_attr, str):
            return plain_attr
        text_attr = getattr(value, "text", None)
        if isinstance(text_attr, str):
            return text_attr
        return str(value)

    @classmethod
    def format_value(cls, value: Any, number_format: Optional[str]) -> str:
        """
        Render ``value`` under ``number_format``.

        Only the first section of the format is honoured. Formats outside
        the handled subset fall back to :meth:`cell_to_str`.
        """
        fmt = (number_format or "").split(";")[0].strip()
        if fmt.lower() in GENERAL_FORMATS:
            return cls.cell_to_str(value)

        if isinstance(value, datetime):
            kind = is_datetime(fmt)
            if kind == "date":
                return value.date().isoformat()
            if kind == "time":
                return value.time().isoformat(timespec="seconds")
            return cls.cell_to_str(value)

        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return cls.cell_to_str(value)

        m = NUMERIC_FORMAT_RE.match(fmt)
        if not m:
            return cls.cell_to_str(value)
        return cls._format_number(
            value,
            width=len(m.group("digits")),
            decimals=len(m.group("decimals") or ""),
            grouping=bool(m.group("grouping")),
            percent=bool(m.group("percent")),
        )

    @staticmethod
    def _format_number(value: Any, width: int, decimals: int, grouping: bool, percent: bool) -> str:
        number = float(value) * 100 if percent else float(value)
        spec = f"{',' if grouping else ''}.{decimals}f"
        text = format(abs(number), spec)
        int_part, dot, frac_part = text.partition(".")
        if not grouping and len(int_part) < width:
            int_part = int_part.zfill(width)
        sign = "-" if number < 0 and text.strip("0.,") else ""
        return f"{sign}{int_part}{dot}{frac_part}{'%' if percent else ''}"

    @classmethod
    def cell_display(cls, cell: Any) -> str:
        """Displayed string of an openpyxl cell (``value`` + ``number_format``)."""
        return cls.format_value(getattr(cell, "value", None), getattr(cell, "number_format", None))

    # ----- rows ------------------------------------------------------------

    @classmethod
    def row_to_strs(cls, cells: Sequence[Any]) -> List[str]:
        """Render a row of cells and drop its trailing empty cells (no padding)."""
        strs = [cls.cell_display(c) for c in (cells or ())]
        while strs and strs[-1] == "":
            strs.pop()
        return strs

    @staticmethod
    def drop_trailing_empty_rows(rows: List[List[str]]) -> List[List[str]]:
        end = len(rows)
        while end > 0 and not rows[end - 1]:
            end -= 1
        return rows[:end]
