"""
Extractors turning source documents into CSV records.

Provides:
- SpreadsheetExtractor: first sheet of an ``.xlsx`` workbook -> CSV
- extract_first_sheet: functional wrapper around SpreadsheetExtractor
"""

from remap.extractors.excel.reader import SpreadsheetExtractor, extract_first_sheet

__all__ = [
    "SpreadsheetExtractor",
    "extract_first_sheet",
]
