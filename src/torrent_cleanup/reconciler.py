"""Reconciler: compare a directory tree against the expected paths.

Every regular file below the root is listed (sorted, so the outcome does not
depend on directory enumeration order), its absolute path is folded the same
way the manifest layer folds expected paths, and whatever is not expected is
an orphan. Per-file I/O problems are recorded and never stop the scan.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field

from loguru import logger

from .manifest import fold_path

MB = 1024 * 1024


@dataclass(slots=True)
class LocalFile:
    path: str
    size: int
    deleted: bool = False

    def __str__(self) -> str:
        return self.path


@dataclass(slots=True)
class IoFailure:
    path: str
    operation: str  # "list" | "stat" | "delete"
    message: str

    def __str__(self) -> str:
        return f"{self.operation} {self.path}: {self.message}"


@dataclass
class ScanResult:
    files: list[LocalFile] = field(default_factory=list)
    failures: list[IoFailure] = field(default_factory=list)


@dataclass
class ReconcileReport:
    """Outcome of one reconciliation run."""

    total_local_files: int = 0
    orphans: list[LocalFile] = field(default_factory=list)
    failures: list[IoFailure] = field(default_factory=list)

    @property
    def orphan_count(self) -> int:
        return len(self.orphans)

    @property
    def orphan_bytes(self) -> int:
        return sum(f.size for f in self.orphans)

    @property
    def orphan_megabytes(self) -> float:
        return self.orphan_bytes / MB


# ---------------------------------------------------------------------------
# Directory scan
# ---------------------------------------------------------------------------

def scan_local_files(
    root_dir: str | os.PathLike[str], *, follow_symlinks: bool | None = None
) -> ScanResult:
    """List every regular file below *root_dir* with its size."""
    from .config import settings

    if follow_symlinks is None:
        follow_symlinks = settings.follow_symlinks

    root = os.path.abspath(os.fspath(root_dir))
    if not os.path.isdir(root):
        raise NotADirectoryError(f"not a directory: {root}")

    result = ScanResult()

    def _on_error(exc: OSError) -> None:
        result.failures.append(
            IoFailure(exc.filename or root, "list", exc.strerror or str(exc))
        )

    for dirpath, _dirnames, filenames in os.walk(
        root, onerror=_on_error, followlinks=follow_symlinks
    ):
        for name in filenames:
            path = os.path.join(dirpath, name)
            try:
                st = os.stat(path, follow_symlinks=follow_symlinks)
            except OSError as exc:
                result.failures.append(IoFailure(path, "stat", exc.strerror or str(exc)))
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            result.files.append(LocalFile(path, st.st_size))

    result.files.sort(key=lambda f: f.path)
    logger.info("Local directory tree contains {} files", len(result.files))
    return result


# ---------------------------------------------------------------------------
# Reconciliation
# ---------------------------------------------------------------------------

def reconcile(
    root_dir: str | os.PathLike[str],
    expected_paths: set[str],
    delete: bool = False,
    *,
    case_sensitive: bool | None = None,
    follow_symlinks: bool | None = None,
) -> ReconcileReport:
    """Find (and optionally delete) local files no manifest expects.

    *expected_paths* must already be folded (see :func:`manifest.fold_path`).
    Deletion is immediate and best-effort: a failed delete is recorded in
    ``report.failures`` and the remaining files are still processed.
    """
    from .config import settings

    if case_sensitive is None:
        case_sensitive = settings.case_sensitive

    scan = scan_local_files(root_dir, follow_symlinks=follow_symlinks)
    report = ReconcileReport(
        total_local_files=len(scan.files), failures=list(scan.failures)
    )

    for local in scan.files:
        if fold_path(local.path, case_sensitive) in expected_paths:
            continue
        logger.debug("Local file {} not in torrent", local.path)
        report.orphans.append(local)
        if delete:
            try:
                os.remove(local.path)
            except OSError as exc:
                logger.warning("Could not delete {}: {}", local.path, exc)
                report.failures.append(
                    IoFailure(local.path, "delete", exc.strerror or str(exc))
                )
            else:
                local.deleted = True

    logger.info(
        "Total: {:.0f} MB and {} of {} files NOT in any torrent",
        report.orphan_megabytes,
        report.orphan_count,
        report.total_local_files,
    )
    return report
