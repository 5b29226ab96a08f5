"""Exception hierarchy for torrent-cleanup."""

from __future__ import annotations


class TorrentCleanupError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

class DecodeError(TorrentCleanupError):
    """A bencoded term could not be decoded.

    ``offset`` is the byte position (relative to where decoding started)
    at which the problem was detected.
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        self.message = message
        self.offset = offset
        if offset is not None:
            message = f"{message} (at byte {offset})"
        super().__init__(message)


class MalformedInputError(DecodeError):
    """Grammar violation: bad tag byte, bad digit, missing delimiter."""


class UnexpectedEofError(DecodeError):
    """Input ended in the middle of a term."""


class DuplicateKeyError(DecodeError):
    """A dictionary repeats a key."""


class TooDeeplyNestedError(DecodeError):
    """Containers are nested deeper than the configured limit."""


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------

class ManifestError(TorrentCleanupError):
    """A decoded manifest does not have the shape of a torrent."""


class MissingFieldError(ManifestError):
    def __init__(self, field: str, detail: str = "missing") -> None:
        self.field = field
        super().__init__(f"manifest field '{field}' is {detail}")


class UnsupportedEncodingError(ManifestError):
    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"unknown text encoding '{encoding}'")
