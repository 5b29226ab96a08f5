"""``torrent-cleanup`` command-line entry point.

Usage::

    torrent-cleanup <torrentfile> [<torrentfile>...] <directory> [-d]

Lists (and with ``-d`` deletes) files below *directory* that none of the
given torrents contain.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import IO, Sequence

from .config import CleanupSettings, settings
from .decoder import decode_file
from .errors import TorrentCleanupError
from .logging_setup import setup_logging
from .pretty import pretty_print
from .reconciler import ReconcileReport
from .session import CleanupSession


class UsageError(Exception):
    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _classify_paths(paths: Sequence[str]) -> tuple[list[str], str]:
    """Split positional arguments into torrent files and the one directory."""
    torrents: list[str] = []
    directory: str | None = None
    for p in paths:
        if os.path.isfile(p):
            torrents.append(p)
        elif os.path.isdir(p):
            if directory is not None:
                raise UsageError(
                    f"Please specify only one directory:\n  {directory}\n  {p}"
                )
            directory = p
        else:
            raise UsageError(f"Unknown option '{p}'")

    if directory is None:
        raise UsageError("Please specify a path to check")
    if not torrents:
        raise UsageError("Please specify at least one torrent file")
    return torrents, directory


def _print_manifests(session: CleanupSession, dest: IO[str]) -> None:
    for info in session.manifests:
        print(f"{info.source}:", file=dest)
        if info.comment:
            print(f"  Comment: {info.comment}", file=dest)
        if info.encoding:
            print(f"  Encoding: {info.encoding}", file=dest)
        if info.single_file:
            print(f"  Single-file torrent: {info.name}", file=dest)
        else:
            print(f"  Multi-file torrent contains {info.file_count} files", file=dest)


def _print_report(report: ReconcileReport, dest: IO[str]) -> None:
    for orphan in report.orphans:
        suffix = " (deleted)" if orphan.deleted else ""
        print(f"Local file {orphan.path} not in torrent{suffix}", file=dest)
    for failure in report.failures:
        print(f"Error: {failure}", file=dest)
    print(
        f"Total: {report.orphan_megabytes:.0f} MB and {report.orphan_count} of "
        f"{report.total_local_files} files NOT in any torrent",
        file=dest,
    )


def _dump(torrents: Sequence[str], cfg: CleanupSettings, dest: IO[str]) -> int:
    status = 0
    for path in torrents:
        try:
            value = decode_file(
                path,
                max_depth=cfg.decoder.max_depth,
                duplicate_keys=cfg.decoder.duplicate_keys,
                allow_negative=cfg.decoder.allow_negative,
            )
        except (TorrentCleanupError, OSError) as exc:
            print(f"Error reading '{path}': {exc}", file=sys.stderr)
            status = 1
            continue
        print(f"{path}:", file=dest)
        dest.write(pretty_print(value, 2))
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="torrent-cleanup",
        description="Find local files that are not part of any of the given torrents.",
    )
    parser.add_argument(
        "paths",
        nargs="+",
        metavar="PATH",
        help="one or more .torrent files followed by the directory to check",
    )
    parser.add_argument(
        "-d", "--delete",
        action="store_true",
        help="delete local files not in any torrent. USE WITH CARE!",
    )
    parser.add_argument(
        "--encoding",
        default=None,
        help="codec for file names in torrents that declare none",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_true",
        default=None,
        help="compare paths exactly instead of case-insensitively",
    )
    parser.add_argument("--log-level", default=None, help="loguru level (default: INFO)")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    parser.add_argument(
        "--dump",
        action="store_true",
        help="pretty-print the decoded torrents instead of checking the directory",
    )
    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Sequence[str] | None = None, dest: IO[str] | None = None) -> int:
    dest = dest or sys.stdout
    args = build_parser().parse_args(argv)

    updates: dict[str, object] = {}
    if args.case_sensitive is not None:
        updates["case_sensitive"] = args.case_sensitive
    if args.log_level:
        updates["log_level"] = args.log_level.upper()
    if args.log_file:
        updates["log_file"] = Path(args.log_file)
    cfg = settings.model_copy(update=updates) if updates else settings

    setup_logging(cfg.log_level, cfg.log_file)

    if args.dump:
        torrents = [p for p in args.paths if os.path.isfile(p)]
        if not torrents:
            print("Please specify at least one torrent file", file=sys.stderr)
            return 2
        return _dump(torrents, cfg, dest)

    try:
        torrents, directory = _classify_paths(args.paths)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 2

    session = CleanupSession(directory, settings=cfg, default_encoding=args.encoding)
    session.load_torrents(torrents)
    _print_manifests(session, dest)
    for failure in session.errors:
        print(f"Error: {failure}", file=dest)

    delete = args.delete
    if delete and session.errors:
        # A torrent that failed to load would make its files look orphaned.
        print("Not deleting anything: some torrents could not be read", file=dest)
        delete = False

    report = session.reconcile(delete=delete)
    _print_report(report, dest)

    return 1 if session.errors or report.failures else 0


if __name__ == "__main__":
    sys.exit(main())
