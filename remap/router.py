"""
File Router Module
==================

Enumerates the input directory (single level) and routes each file to a
job kind by its lowercased extension.
"""

from pathlib import Path
from typing import Dict, List, Union

from remap.errors import OpenError
from remap.ir import FileJob, JobKind
from remap.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]

XLSX_EXTENSIONS = {".xlsx"}
CSV_EXTENSIONS = {".csv"}


def classify(path: PathLike) -> JobKind:
    ext = Path(path).suffix.lower()
    if ext in XLSX_EXTENSIONS:
        return "xlsx"
    if ext in CSV_EXTENSIONS:
        return "csv"
    return "unsupported"


def discover_files(input_dir: PathLike) -> List[Path]:
    """
    Regular files directly inside ``input_dir``, sorted by name.

    Sub-directories are ignored; nothing is scanned recursively.
    """
    root = Path(input_dir)
    if not root.is_dir():
        raise OpenError(f"failed to list files in {root}: not a directory", str(root))
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise OpenError(f"failed to list files in {root}: {exc}", str(root)) from exc
    return sorted((p for p in entries if p.is_file()), key=lambda p: p.name)


def build_job(path: PathLike, output_root: PathLike) -> FileJob:
    p = Path(path)
    base = p.stem
    return FileJob(
        source=str(p),
        kind=classify(p),
        base=base,
        out_dir=str(Path(output_root) / base),
    )


def route_files(paths: List[Path], output_root: PathLike) -> List[FileJob]:
    """
    Build one job per path, in the given order.

    Jobs sharing an output directory (``a.csv`` and ``a.xlsx``) are kept but
    reported, since the later one overwrites the earlier one's sanitized file.
    """
    jobs = [build_job(p, output_root) for p in paths]
    seen: Dict[str, str] = {}
    for job in jobs:
        if job.kind == "unsupported":
            continue
        other = seen.get(job.out_dir)
        if other is not None:
            logger.warning("%s and %s share output folder %s", other, job.source, job.out_dir)
        else:
            seen[job.out_dir] = job.source
    return jobs
