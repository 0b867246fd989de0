"""
Configuration Module
====================

Loads run settings from an optional ``.env`` file and the process
environment, and turns them into an immutable :class:`RunConfig` that is
handed to every component explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

from dotenv import find_dotenv
from pydantic import ValidationError, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from remap.errors import ConfigError, ConfigMissingError
from remap.logger import get_logger
from remap.lookup import LookupTable, split_list

logger = get_logger(__name__)

REQUIRED_KEYS: Tuple[str, ...] = (
    "DATA_OUTPUT_DIR",
    "DOCS_DIR",
    "COLUMN_NAME",
    "VALUES",
    "OVERWRITE",
    "DEFAULT",
)

RAGGED_ROW_POLICIES = ("error", "pad")


class Settings(BaseSettings):
    """
    Raw settings as read from the environment.

    Attributes:
        DATA_OUTPUT_DIR: output root, created when missing
        DOCS_DIR: input directory scanned (non-recursive)
        COLUMN_NAME: exact header of the column to remap
        VALUES / OVERWRITE: comma-separated, positionally aligned lists
        DEFAULT: replacement when nothing matches
        RAGGED_ROWS: ``error`` or ``pad`` for rows too short for the column
        FAIL_FAST: stop at the first failing file
        WORKERS: per-file worker threads
        WRITE_REPORT: write ``run_report.json`` into the output root
        LOG_LEVEL: project log level
    """

    DATA_OUTPUT_DIR: str
    DOCS_DIR: str
    COLUMN_NAME: str
    VALUES: str
    OVERWRITE: str
    DEFAULT: str
    RAGGED_ROWS: str = "error"
    FAIL_FAST: bool = False
    WORKERS: int = 1
    WRITE_REPORT: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    @field_validator(*REQUIRED_KEYS)
    @classmethod
    def validate_not_empty(cls, v: str, info: ValidationInfo) -> str:
        if v is None or v == "":
            raise ValueError(f"{info.field_name} is not set")
        return v

    @field_validator("RAGGED_ROWS")
    @classmethod
    def validate_ragged_rows(cls, v: str) -> str:
        policy = (v or "").strip().lower()
        if policy not in RAGGED_ROW_POLICIES:
            raise ValueError(f"RAGGED_ROWS must be one of {', '.join(RAGGED_ROW_POLICIES)}, got {v!r}")
        return policy

    @field_validator("WORKERS")
    @classmethod
    def validate_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("WORKERS must be at least 1")
        return v

    def to_run_config(self) -> "RunConfig":
        return RunConfig(
            output_root=Path(self.DATA_OUTPUT_DIR),
            docs_dir=Path(self.DOCS_DIR),
            column_name=self.COLUMN_NAME,
            lookup=LookupTable(split_list(self.VALUES), split_list(self.OVERWRITE), self.DEFAULT),
            ragged_rows=self.RAGGED_ROWS,
            fail_fast=self.FAIL_FAST,
            workers=self.WORKERS,
            write_report=self.WRITE_REPORT,
            log_level=self.LOG_LEVEL,
        )


@dataclass(frozen=True)
class RunConfig:
    """Immutable configuration shared (read-only) by every file job."""

    output_root: Path
    docs_dir: Path
    column_name: str
    lookup: LookupTable
    ragged_rows: str = "error"
    fail_fast: bool = False
    workers: int = 1
    write_report: bool = True
    log_level: str = "INFO"


def resolve_env_file(env_file: Optional[str] = None) -> Optional[str]:
    """
    Locate the ``.env`` file to read.

    An explicit path must exist. Otherwise ``.env`` is searched upwards from
    the current working directory; absence is only a warning.
    """
    if env_file:
        if not os.path.isfile(env_file):
            raise ConfigError(f"env file not found: {env_file}", env_file)
        return env_file
    found = find_dotenv(usecwd=True)
    if not found:
        logger.warning(".env not found, using system environment variables")
        return None
    return found


def load_settings(env_file: Optional[str] = None, **overrides: Any) -> Settings:
    """
    Build :class:`Settings` from ``.env`` + environment, with keyword overrides
    (e.g. CLI flags) taking precedence. ``None`` overrides are ignored.

    Raises:
        ConfigMissingError: a required key is absent or empty
        ConfigError: any other invalid value
    """
    path = resolve_env_file(env_file)
    init_kwargs = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(_env_file=path, **init_kwargs)
    except ValidationError as exc:
        missing = []
        for err in exc.errors():
            loc = err.get("loc") or ()
            key = str(loc[0]) if loc else ""
            if key in REQUIRED_KEYS and key not in missing:
                missing.append(key)
        if missing:
            raise ConfigMissingError([k for k in REQUIRED_KEYS if k in missing]) from exc
        raise ConfigError(str(exc)) from exc


def load_config(env_file: Optional[str] = None, **overrides: Any) -> RunConfig:
    return load_settings(env_file, **overrides).to_run_config()
