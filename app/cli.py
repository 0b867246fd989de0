import argparse
import sys
from pathlib import Path
from typing import List, Optional

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from remap.config import load_config
from remap.errors import ConfigError, RemapError
from remap.logger import get_logger, set_level
from remap.pipeline import Dispatcher

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FILE_FAILED = 1
EXIT_FATAL = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert spreadsheets to CSV and remap one column through a lookup table."
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file (default: search for .env from the current directory).",
    )
    parser.add_argument(
        "--docs-dir",
        default=None,
        help="Input directory to scan (overrides DOCS_DIR).",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Output root directory (overrides DATA_OUTPUT_DIR).",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Stop at the first file that fails (overrides FAIL_FAST).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of files processed in parallel (overrides WORKERS).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="DEBUG, INFO, WARNING or ERROR (overrides LOG_LEVEL).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(
            args.env_file,
            DOCS_DIR=args.docs_dir,
            DATA_OUTPUT_DIR=args.output_dir,
            FAIL_FAST=args.fail_fast,
            WORKERS=args.workers,
            LOG_LEVEL=args.log_level,
        )
        set_level(config.log_level)
    except (ConfigError, ValueError) as exc:
        logger.error("%s", exc)
        return EXIT_FATAL

    try:
        summary = Dispatcher(config).run()
    except RemapError as exc:
        logger.error("%s", exc)
        return EXIT_FATAL

    return EXIT_OK if summary.ok else EXIT_FILE_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
