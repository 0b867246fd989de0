from app.cli import EXIT_FATAL, EXIT_FILE_FAILED, EXIT_OK, main
from conftest import write_csv, write_xlsx


def _write_env(path, docs, out, **extra):
    values = {
        "DATA_OUTPUT_DIR": str(out),
        "DOCS_DIR": str(docs),
        "COLUMN_NAME": "status",
        "VALUES": "open,closed",
        "OVERWRITE": "ACTIVE,DONE",
        "DEFAULT": "UNKNOWN",
    }
    values.update(extra)
    path.write_text("\n".join(f"{k}={v}" for k, v in values.items()) + "\n", encoding="utf-8")
    return path


def test_cli_success(clean_env, docs_dir, tmp_path):
    write_xlsx(docs_dir / "book.xlsx", [["id", "status"], ["1", "closed"]])
    out = tmp_path / "out"
    env_file = _write_env(tmp_path / "run.env", docs_dir, out)

    assert main(["--env-file", str(env_file)]) == EXIT_OK
    assert (out / "book" / "book.csv").exists()
    assert (out / "book" / "sanitized_book.csv").read_text(encoding="utf-8") == "id,status\n1,DONE\n"


def test_cli_file_failure_exit_code(clean_env, docs_dir, tmp_path):
    write_csv(docs_dir / "bad.csv", "id,state\n1,open\n")
    env_file = _write_env(tmp_path / "run.env", docs_dir, tmp_path / "out")

    assert main(["--env-file", str(env_file)]) == EXIT_FILE_FAILED


def test_cli_flags_override_env(clean_env, docs_dir, tmp_path):
    write_csv(docs_dir / "ok.csv", "status\nopen\n")
    env_file = _write_env(tmp_path / "run.env", tmp_path / "unused", tmp_path / "unused_out")
    out = tmp_path / "flag_out"

    code = main([
        "--env-file", str(env_file),
        "--docs-dir", str(docs_dir),
        "--output-dir", str(out),
        "--workers", "2",
        "--fail-fast",
    ])

    assert code == EXIT_OK
    assert (out / "ok" / "sanitized_ok.csv").exists()


def test_cli_missing_config_is_fatal(clean_env):
    assert main([]) == EXIT_FATAL


def test_cli_bad_log_level_is_fatal(clean_env, docs_dir, tmp_path):
    env_file = _write_env(tmp_path / "run.env", docs_dir, tmp_path / "out", LOG_LEVEL="LOUD")

    assert main(["--env-file", str(env_file)]) == EXIT_FATAL


def test_cli_missing_docs_dir_is_fatal(clean_env, tmp_path):
    env_file = _write_env(tmp_path / "run.env", tmp_path / "nowhere", tmp_path / "out")

    assert main(["--env-file", str(env_file)]) == EXIT_FATAL
