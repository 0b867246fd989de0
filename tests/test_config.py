from pathlib import Path

import pytest

from remap.config import load_config, load_settings, resolve_env_file
from remap.errors import ConfigError, ConfigMissingError

FULL_ENV = {
    "DATA_OUTPUT_DIR": "out",
    "DOCS_DIR": "docs",
    "COLUMN_NAME": "status",
    "VALUES": "open,closed",
    "OVERWRITE": "ACTIVE,DONE",
    "DEFAULT": "UNKNOWN",
}


def _set_env(monkeypatch, values):
    for key, value in values.items():
        monkeypatch.setenv(key, value)


def test_load_config_from_environment(clean_env, monkeypatch):
    _set_env(monkeypatch, FULL_ENV)

    cfg = load_config()

    assert cfg.output_root == Path("out")
    assert cfg.docs_dir == Path("docs")
    assert cfg.column_name == "status"
    assert cfg.lookup.values == ("open", "closed")
    assert cfg.lookup.overwrite == ("ACTIVE", "DONE")
    assert cfg.lookup.default == "UNKNOWN"
    assert cfg.ragged_rows == "error"
    assert cfg.fail_fast is False
    assert cfg.workers == 1
    assert cfg.write_report is True


def test_load_config_from_env_file(clean_env):
    env_file = clean_env / ".env"
    env_file.write_text("\n".join(f"{k}={v}" for k, v in FULL_ENV.items()) + "\n", encoding="utf-8")

    cfg = load_config()

    assert cfg.column_name == "status"
    assert cfg.lookup.lookup("closed") == "DONE"


def test_environment_wins_over_env_file(clean_env, monkeypatch):
    env_file = clean_env / "custom.env"
    env_file.write_text("\n".join(f"{k}={v}" for k, v in FULL_ENV.items()) + "\n", encoding="utf-8")
    monkeypatch.setenv("COLUMN_NAME", "state")

    cfg = load_config(str(env_file))

    assert cfg.column_name == "state"


def test_overrides_win_and_none_is_ignored(clean_env, monkeypatch):
    _set_env(monkeypatch, FULL_ENV)

    cfg = load_config(DOCS_DIR="elsewhere", WORKERS=4, FAIL_FAST=True, LOG_LEVEL=None)

    assert cfg.docs_dir == Path("elsewhere")
    assert cfg.workers == 4
    assert cfg.fail_fast is True
    assert cfg.log_level == "INFO"


def test_missing_keys_are_all_reported(clean_env, monkeypatch):
    _set_env(monkeypatch, {"DOCS_DIR": "docs", "VALUES": "a", "DEFAULT": "d"})

    with pytest.raises(ConfigMissingError) as info:
        load_settings()

    assert info.value.keys == ["DATA_OUTPUT_DIR", "COLUMN_NAME", "OVERWRITE"]
    assert "COLUMN_NAME is not set" in str(info.value)


def test_empty_key_counts_as_missing(clean_env, monkeypatch):
    _set_env(monkeypatch, dict(FULL_ENV, DEFAULT=""))

    with pytest.raises(ConfigMissingError) as info:
        load_settings()

    assert info.value.keys == ["DEFAULT"]


def test_whitespace_values_are_kept_verbatim(clean_env, monkeypatch):
    _set_env(monkeypatch, dict(FULL_ENV, DEFAULT=" ", VALUES=" "))

    cfg = load_config()

    assert cfg.lookup.default == " "
    assert cfg.lookup.values == (" ",)


def test_invalid_optional_value(clean_env, monkeypatch):
    _set_env(monkeypatch, dict(FULL_ENV, RAGGED_ROWS="ignore"))

    with pytest.raises(ConfigError) as info:
        load_settings()

    assert not isinstance(info.value, ConfigMissingError)


def test_ragged_rows_policy_is_normalised(clean_env, monkeypatch):
    _set_env(monkeypatch, dict(FULL_ENV, RAGGED_ROWS=" PAD "))

    assert load_config().ragged_rows == "pad"


def test_workers_must_be_positive(clean_env, monkeypatch):
    _set_env(monkeypatch, dict(FULL_ENV, WORKERS="0"))

    with pytest.raises(ConfigError):
        load_settings()


def test_explicit_env_file_must_exist(clean_env):
    with pytest.raises(ConfigError):
        resolve_env_file(str(clean_env / "missing.env"))


def test_absent_env_file_is_not_an_error(clean_env):
    assert resolve_env_file() is None
