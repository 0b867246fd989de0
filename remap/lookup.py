"""
LookupTable: positional Values -> Overwrite mapping with a Default fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


def split_list(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated setting. Items are kept verbatim (no trimming)."""
    return tuple(raw.split(","))


@dataclass(frozen=True)
class LookupTable:
    """
    Immutable lookup used by the column remapper.

    ``values[i]`` maps to ``overwrite[i]``. The first matching entry wins.
    A match whose index has no counterpart in ``overwrite`` (the lists are
    allowed to differ in length) resolves to ``default`` instead of failing.
    """

    values: Tuple[str, ...]
    overwrite: Tuple[str, ...]
    default: str

    def index_of(self, original: str) -> Optional[int]:
        for i, v in enumerate(self.values):
            if v == original:
                return i
        return None

    def lookup(self, original: str) -> str:
        i = self.index_of(original)
        if i is not None and i < len(self.overwrite):
            return self.overwrite[i]
        return self.default
