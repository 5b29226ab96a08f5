"""torrent-cleanup — bencode decoding and torrent-vs-directory reconciliation."""

from .decoder import decode, decode_file, parse
from .encoder import serialize
from .equality import compare, equals, structural_hash
from .errors import (
    DecodeError,
    DuplicateKeyError,
    MalformedInputError,
    ManifestError,
    MissingFieldError,
    TooDeeplyNestedError,
    TorrentCleanupError,
    UnexpectedEofError,
    UnsupportedEncodingError,
)
from .manifest import ManifestBuilder, ManifestInfo, extract_expected_paths, fold_path
from .pretty import pretty_print
from .reconciler import IoFailure, LocalFile, ReconcileReport, reconcile, scan_local_files
from .session import CleanupSession
from .values import Value, VDict, VInt, VList, VString

__all__ = [
    "parse",
    "decode",
    "decode_file",
    "serialize",
    "pretty_print",
    "equals",
    "structural_hash",
    "compare",
    "Value",
    "VString",
    "VInt",
    "VList",
    "VDict",
    "ManifestBuilder",
    "ManifestInfo",
    "extract_expected_paths",
    "fold_path",
    "reconcile",
    "scan_local_files",
    "ReconcileReport",
    "LocalFile",
    "IoFailure",
    "CleanupSession",
    "TorrentCleanupError",
    "DecodeError",
    "MalformedInputError",
    "UnexpectedEofError",
    "DuplicateKeyError",
    "TooDeeplyNestedError",
    "ManifestError",
    "MissingFieldError",
    "UnsupportedEncodingError",
]
