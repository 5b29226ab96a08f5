"""Manifest layer: expected file paths from decoded torrent metadata."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field

from loguru import logger

from .errors import MissingFieldError, UnsupportedEncodingError
from .values import Value, VDict, VList, VString


def fold_path(path: str, case_sensitive: bool = False) -> str:
    """Normalise *path* for comparison (lower-cased unless case-sensitive)."""
    return path if case_sensitive else path.lower()


@dataclass
class ManifestInfo:
    """What one torrent contributed to the expected-path set."""

    source: str | None = None
    comment: str | None = None
    encoding: str | None = None
    name: str | None = None
    single_file: bool = False
    paths: set[str] = field(default_factory=set)

    @property
    def file_count(self) -> int:
        return 1 if self.single_file else len(self.paths)


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _check_codec(name: str) -> str:
    try:
        info = codecs.lookup(name)
    except LookupError:
        raise UnsupportedEncodingError(name) from None
    # Codecs such as base64 transform bytes to bytes and cannot produce text.
    if not info._is_text_encoding:
        raise UnsupportedEncodingError(name)
    return info.name


def _optional_text(d: VDict, key: str, codec: str) -> str | None:
    value = d.get(key)
    if isinstance(value, VString):
        return value.text(codec, "replace")
    return None


def _path_segments(entry: VDict, codec: str) -> list[str]:
    path = entry.get("path")
    if not isinstance(path, VList):
        raise MissingFieldError("info.files[].path", "missing or not a list")
    # Non-string segments are skipped.
    return [seg.text(codec, "surrogateescape") for seg in path if isinstance(seg, VString)]


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def read_manifest(
    manifest: Value,
    root_dir: str | os.PathLike[str],
    declared_encoding: str | None = None,
    *,
    case_sensitive: bool | None = None,
    source: str | None = None,
) -> ManifestInfo:
    """Read one decoded torrent and build its expected absolute paths.

    Path segments are decoded with the torrent's own ``encoding`` field when
    it has one, else *declared_encoding*, else ``settings.default_encoding``.
    Single-file torrents only report their ``name``; they add no path.
    """
    from .config import settings

    if case_sensitive is None:
        case_sensitive = settings.case_sensitive

    if not isinstance(manifest, VDict):
        raise MissingFieldError("info", "missing (manifest is not a dictionary)")
    info = manifest.get("info")
    if not isinstance(info, VDict):
        raise MissingFieldError("info", "missing or not a dictionary")

    result = ManifestInfo(source=source)

    encoding_field = manifest.get("encoding")
    if isinstance(encoding_field, VString):
        result.encoding = encoding_field.text("ascii", "replace")
        codec = _check_codec(result.encoding)
    else:
        codec = _check_codec(declared_encoding or settings.default_encoding)

    result.comment = _optional_text(manifest, "comment", codec)
    result.name = _optional_text(info, "name", codec)

    if "length" in info:
        if result.name is None:
            raise MissingFieldError("info.name")
        result.single_file = True
        return result

    files = info.get("files")
    if not isinstance(files, VList):
        raise MissingFieldError("info.files", "missing or not a list")

    root = os.path.abspath(os.fspath(root_dir))
    for entry in files:
        if not isinstance(entry, VDict):
            logger.debug("Skipping non-dictionary entry in info.files: {}", entry)
            continue
        segments = _path_segments(entry, codec)
        if not segments:
            logger.debug("Skipping info.files entry with an empty path")
            continue
        result.paths.add(fold_path(os.path.join(root, *segments), case_sensitive))

    return result


def extract_expected_paths(
    manifest: Value,
    root_dir: str | os.PathLike[str],
    declared_encoding: str | None = None,
    *,
    case_sensitive: bool | None = None,
) -> set[str]:
    """Return the folded absolute paths a single torrent expects under *root_dir*."""
    return read_manifest(
        manifest, root_dir, declared_encoding, case_sensitive=case_sensitive
    ).paths


# ---------------------------------------------------------------------------
# ManifestBuilder
# ---------------------------------------------------------------------------

class ManifestBuilder:
    """Accumulates the expected paths of several torrents sharing a root.

    Usage::

        builder = ManifestBuilder("/downloads")
        builder.add(decode_file("a.torrent"), source="a.torrent")
        builder.add(decode_file("b.torrent"), source="b.torrent")
        builder.expected_paths   # union of both
    """

    def __init__(
        self,
        root_dir: str | os.PathLike[str],
        default_encoding: str | None = None,
        case_sensitive: bool | None = None,
    ) -> None:
        from .config import settings

        self.root_dir = os.path.abspath(os.fspath(root_dir))
        self.default_encoding = default_encoding
        self.case_sensitive = (
            settings.case_sensitive if case_sensitive is None else case_sensitive
        )
        self.expected_paths: set[str] = set()
        self.manifests: list[ManifestInfo] = []

    def add(self, manifest: Value, source: str | None = None) -> ManifestInfo:
        """Read *manifest* and merge its paths into :attr:`expected_paths`."""
        info = read_manifest(
            manifest,
            self.root_dir,
            self.default_encoding,
            case_sensitive=self.case_sensitive,
            source=source,
        )
        if info.comment:
            logger.info("Comment: {}", info.comment)
        if info.encoding:
            logger.info("Encoding: {}", info.encoding)
        if info.single_file:
            logger.info("Single-file torrent: {}", info.name)
        else:
            logger.info("Multi-file torrent contains {} files", info.file_count)

        self.expected_paths |= info.paths
        self.manifests.append(info)
        return info
