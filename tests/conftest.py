"""
Pytest configuration and shared fixtures.
"""
import os
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from openpyxl import Workbook

from remap.config import RunConfig
from remap.lookup import LookupTable

ENV_KEYS = (
    "DATA_OUTPUT_DIR", "DOCS_DIR", "COLUMN_NAME", "VALUES", "OVERWRITE", "DEFAULT",
    "RAGGED_ROWS", "FAIL_FAST", "WORKERS", "WRITE_REPORT", "LOG_LEVEL",
)


def write_xlsx(path, rows, title="Sheet1"):
    """Save a single-sheet workbook holding ``rows``."""
    wb = Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    wb.save(str(path))
    return Path(path)


def write_csv(path, text):
    Path(path).write_text(text, encoding="utf-8", newline="")
    return Path(path)


@pytest.fixture
def make_config(tmp_path):
    """Factory for a RunConfig pointing at ``tmp_path/docs`` and ``tmp_path/out``."""
    def _make(**overrides):
        params = dict(
            output_root=tmp_path / "out",
            docs_dir=tmp_path / "docs",
            column_name="status",
            lookup=LookupTable(("open", "closed"), ("ACTIVE", "DONE"), "UNKNOWN"),
        )
        params.update(overrides)
        return RunConfig(**params)
    return _make


@pytest.fixture
def docs_dir(tmp_path):
    d = tmp_path / "docs"
    d.mkdir()
    return d


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove every config key from the environment and run from an empty directory."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
        monkeypatch.delenv(key.lower(), raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
