"""
Intermediate Representation Module
==================================

Data structures passed between the router, the dispatcher and the run
report: FileJob, FileResult, RunSummary.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

# Job kind, decided by lowercased file extension
JobKind = Literal["xlsx", "csv", "unsupported"]

FileStatus = Literal["ok", "skipped", "failed"]


class FileJob(BaseModel):
    """
    One input file and where its outputs go.

    Attributes:
        source: input file path
        kind: job kind derived from the extension
        base: file name without extension
        out_dir: ``<output_root>/<base>``
    """
    source: str
    kind: JobKind
    base: str
    out_dir: str


class FileResult(BaseModel):
    job: FileJob
    status: FileStatus
    outputs: List[str] = Field(default_factory=list)
    rows: Optional[int] = None
    replaced: Optional[int] = None
    error_type: Optional[str] = None
    error: Optional[str] = None


class RunSummary(BaseModel):
    """Per-run outcome, also serialised as ``run_report.json``."""
    docs_dir: str
    output_root: str
    started_at: str
    finished_at: Optional[str] = None
    aborted: bool = False
    results: List[FileResult] = Field(default_factory=list)

    def _count(self, status: str) -> int:
        return sum(1 for r in self.results if r.status == status)

    @property
    def processed(self) -> int:
        return self._count("ok")

    @property
    def skipped(self) -> int:
        return self._count("skipped")

    @property
    def failed(self) -> int:
        return self._count("failed")

    @property
    def ok(self) -> bool:
        return self.failed == 0 and not self.aborted
