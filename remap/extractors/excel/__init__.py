"""
Excel extraction subpackage.

Public API:
  - SpreadsheetExtractor   (workbook I/O, first-sheet export, in reader.py)
  - DataCleaner            (cell -> displayed string)
"""

from remap.extractors.excel.data_cleaner import DataCleaner
from remap.extractors.excel.reader import SpreadsheetExtractor, extract_first_sheet

__all__ = [
    "DataCleaner",
    "SpreadsheetExtractor",
    "extract_first_sheet",
]
