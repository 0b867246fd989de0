"""
Error taxonomy for the remap pipeline.

Every failure raised by this package derives from :class:`RemapError`, so
callers can isolate a single file's failure without catching unrelated
exceptions.
"""

from typing import Optional, Sequence


class RemapError(Exception):
    """Base class for all remap errors. ``path`` names the offending file or directory."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigError(RemapError):
    """Configuration could not be loaded or holds an invalid value."""


class ConfigMissingError(ConfigError):
    """One or more required configuration keys are absent or blank."""

    def __init__(self, keys: Sequence[str]):
        self.keys = list(keys)
        super().__init__(", ".join(f"{k} is not set" for k in self.keys))


class DirectoryCreateError(RemapError):
    pass


class NoSheetsError(RemapError):
    pass


class OpenError(RemapError):
    pass


class ReadError(RemapError):
    pass


class WriteError(RemapError):
    pass


class EmptyFileError(RemapError):
    pass


class ColumnNotFoundError(RemapError):
    def __init__(self, column: str, path: Optional[str] = None):
        super().__init__(f"column {column} not found in {path}", path)
        self.column = column


class MalformedRowError(RemapError):
    """A data row is too short to hold the target column."""

    def __init__(self, line: int, width: int, column_index: int, path: Optional[str] = None):
        super().__init__(
            f"row {line} in {path} has {width} cells, column index {column_index} out of range",
            path,
        )
        self.line = line
        self.width = width
        self.column_index = column_index
