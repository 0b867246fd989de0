"""
Dispatcher: walk the input directory and process every file job.

For each file:
  - ``.xlsx`` -> SpreadsheetExtractor into ``<out_dir>/<base>.csv``, then
    ColumnRemapper on that CSV
  - ``.csv``  -> ColumnRemapper on the source file
  - otherwise -> skipped with a notice

Per-file failures are isolated and recorded in the RunSummary unless
``fail_fast`` is set, in which case the run stops at the first failure.
"""

from __future__ import annotations

import traceback
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from remap.config import RunConfig
from remap.errors import DirectoryCreateError, WriteError
from remap.extractors.excel.reader import SpreadsheetExtractor
from remap.ir import FileJob, FileResult, RunSummary
from remap.logger import get_logger
from remap.remapper import ColumnRemapper
from remap.router import discover_files, route_files

logger = get_logger(__name__)

PathLike = Union[str, Path]

REPORT_FILENAME = "run_report.json"


def ensure_dir(path: PathLike) -> Path:
    """Create ``path`` and its parents if absent (idempotent)."""
    p = Path(path)
    try:
        p.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreateError(f"cannot create folder {p}: {exc}", str(p)) from exc
    return p


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class Dispatcher:
    """
    Run every file job found in ``config.docs_dir``.

    The extractor and remapper can be injected, mostly for tests.
    """

    def __init__(
        self,
        config: RunConfig,
        extractor: Optional[SpreadsheetExtractor] = None,
        remapper: Optional[ColumnRemapper] = None,
    ):
        self._config = config
        self._extractor = extractor or SpreadsheetExtractor()
        self._remapper = remapper or ColumnRemapper(config)

    # -- public API ----------------------------------------------------------

    def process(self, job: FileJob) -> FileResult:
        """
        Process one job. Errors propagate to the caller.
        """
        out_dir = ensure_dir(job.out_dir)
        if job.kind == "unsupported":
            logger.info("Skipping unsupported file %s", job.source)
            return FileResult(job=job, status="skipped")

        outputs: List[str] = []
        if job.kind == "xlsx":
            csv_path = out_dir / f"{job.base}.csv"
            self._extractor.extract(job.source, csv_path)
            outputs.append(str(csv_path))
            source = csv_path
        else:
            source = Path(job.source)

        result = self._remapper.remap(source, out_dir)
        outputs.append(str(result.output_path))
        return FileResult(
            job=job,
            status="ok",
            outputs=outputs,
            rows=result.rows,
            replaced=result.replaced,
        )

    def safe_process(self, job: FileJob) -> FileResult:
        """
        Process one job, turning any failure into a ``failed`` FileResult.
        """
        try:
            return self.process(job)
        except Exception as exc:
            logger.error("Error processing %s: %s", job.source, exc)
            logger.debug("Traceback: %s", traceback.format_exc())
            return FileResult(
                job=job,
                status="failed",
                error_type=type(exc).__name__,
                error=str(exc),
            )

    def run(self) -> RunSummary:
        """
        Discover, route and process every file, then write the run report.

        Raises:
            DirectoryCreateError: the output root cannot be created
            OpenError: the input directory cannot be listed
        """
        cfg = self._config
        ensure_dir(cfg.output_root)
        summary = RunSummary(
            docs_dir=str(cfg.docs_dir),
            output_root=str(cfg.output_root),
            started_at=_now(),
        )

        jobs = route_files(discover_files(cfg.docs_dir), cfg.output_root)
        logger.info("Processing %d files from %s", len(jobs), cfg.docs_dir)

        if cfg.workers > 1 and len(jobs) > 1:
            self._run_pool(jobs, summary)
        else:
            self._run_sequential(jobs, summary)

        summary.finished_at = _now()
        if cfg.write_report:
            write_report(summary, cfg.output_root)

        if summary.ok:
            logger.info("All files processed.")
        else:
            logger.error(
                "%d of %d files failed%s",
                summary.failed, len(jobs), " (run aborted)" if summary.aborted else "",
            )
        logger.info(
            "Summary: %d processed, %d skipped, %d failed",
            summary.processed, summary.skipped, summary.failed,
        )
        return summary

    # -- helpers -------------------------------------------------------------

    def _run_sequential(self, jobs: List[FileJob], summary: RunSummary) -> None:
        for job in jobs:
            result = self.safe_process(job)
            summary.results.append(result)
            if result.status == "failed" and self._config.fail_fast:
                summary.aborted = True
                logger.error("Stopping after first failure (fail-fast)")
                return

    def _run_pool(self, jobs: List[FileJob], summary: RunSummary) -> None:
        with ThreadPoolExecutor(max_workers=self._config.workers) as pool:
            futures: List[Future] = [pool.submit(self.safe_process, job) for job in jobs]
            for i, fut in enumerate(futures):
                if summary.aborted:
                    if fut.cancel():
                        continue
                result = fut.result()
                summary.results.append(result)
                if result.status == "failed" and self._config.fail_fast and not summary.aborted:
                    summary.aborted = True
                    logger.error("Stopping after first failure (fail-fast)")
                    for pending in futures[i + 1:]:
                        pending.cancel()


def write_report(summary: RunSummary, output_root: PathLike, filename: str = REPORT_FILENAME) -> Path:
    path = Path(output_root) / filename
    try:
        path.write_text(summary.model_dump_json(indent=2), encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"cannot write {path}: {exc}", str(path)) from exc
    logger.debug("Run report written to %s", path)
    return path


def run(config: RunConfig) -> RunSummary:
    return Dispatcher(config).run()
