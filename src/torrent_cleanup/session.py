"""CleanupSession — load several torrents, then reconcile one directory."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from loguru import logger

from .config import CleanupSettings, settings as default_settings
from .decoder import decode_file
from .errors import TorrentCleanupError
from .manifest import ManifestBuilder, ManifestInfo
from .reconciler import ReconcileReport, reconcile


@dataclass(slots=True)
class LoadFailure:
    source: str
    error: Exception

    def __str__(self) -> str:
        return f"{self.source}: {self.error}"


class CleanupSession:
    """Accumulates expected paths across torrents sharing one root directory.

    Usage::

        session = CleanupSession("/downloads")
        session.load_torrents(["a.torrent", "b.torrent"])
        report = session.reconcile(delete=False)
        report.orphan_count
    """

    def __init__(
        self,
        root_dir: str | os.PathLike[str],
        settings: CleanupSettings | None = None,
        default_encoding: str | None = None,
    ) -> None:
        self.settings = settings or default_settings
        self.builder = ManifestBuilder(
            root_dir,
            default_encoding=default_encoding or self.settings.default_encoding,
            case_sensitive=self.settings.case_sensitive,
        )
        self.errors: list[LoadFailure] = []

    @property
    def root_dir(self) -> str:
        return self.builder.root_dir

    @property
    def expected_paths(self) -> set[str]:
        return self.builder.expected_paths

    @property
    def manifests(self) -> list[ManifestInfo]:
        return self.builder.manifests

    # -- Loading ----------------------------------------------------------

    def load_torrent(self, path: str | os.PathLike[str]) -> ManifestInfo:
        """Decode one torrent file and add its paths.

        Decode and manifest errors propagate to the caller.
        """
        source = os.fspath(path)
        cfg = self.settings.decoder
        value = decode_file(
            source,
            max_depth=cfg.max_depth,
            duplicate_keys=cfg.duplicate_keys,
            allow_negative=cfg.allow_negative,
        )
        return self.builder.add(value, source=source)

    def load_torrents(self, paths: Iterable[str | os.PathLike[str]]) -> list[ManifestInfo]:
        """Load each torrent; failures are logged, recorded and skipped."""
        loaded: list[ManifestInfo] = []
        for path in paths:
            try:
                loaded.append(self.load_torrent(path))
            except (TorrentCleanupError, OSError) as exc:
                logger.error("Skipping {}: {}", path, exc)
                self.errors.append(LoadFailure(os.fspath(path), exc))
        return loaded

    # -- Reconciliation ---------------------------------------------------

    def reconcile(self, delete: bool = False) -> ReconcileReport:
        return reconcile(
            self.root_dir,
            self.expected_paths,
            delete,
            case_sensitive=self.settings.case_sensitive,
            follow_symlinks=self.settings.follow_symlinks,
        )
