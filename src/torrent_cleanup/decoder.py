"""Decoder: recursive-descent parser for bencoded terms.

Grammar::

    term    := string | integer | list | dict
    string  := <digits> ":" <length bytes>
    integer := "i" <digits> "e"
    list    := "l" term* "e"
    dict    := "d" (term term)* "e"

The reader never looks past the last byte of the term it is parsing, so
:func:`parse` leaves a stream positioned right after that term.
"""

from __future__ import annotations

import io
import os
from typing import BinaryIO

from loguru import logger

from .errors import (
    DuplicateKeyError,
    MalformedInputError,
    TooDeeplyNestedError,
    UnexpectedEofError,
)
from .values import INT64_MAX, INT64_MIN, Value, VDict, VInt, VList, VString

_CHUNK = 64 * 1024


# ---------------------------------------------------------------------------
# Byte reader with one byte of lookahead
# ---------------------------------------------------------------------------

class _Reader:
    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._peeked: bytes | None = None
        self.offset = 0

    def peek(self) -> bytes:
        """Return the next byte without consuming it (``b""`` at EOF)."""
        if self._peeked is None:
            self._peeked = self._stream.read(1)
        return self._peeked

    def read_byte(self) -> bytes:
        ch = self.peek()
        self._peeked = None
        if ch:
            self.offset += 1
        return ch

    def read_exact(self, count: int) -> bytes:
        """Read *count* bytes or fail with UnexpectedEofError."""
        start = self.offset
        buf = bytearray()
        if count and self._peeked:
            buf += self._peeked
            self._peeked = None
        while len(buf) < count:
            chunk = self._stream.read(min(count - len(buf), _CHUNK))
            if not chunk:
                raise UnexpectedEofError(
                    f"string needs {count} bytes, input ended after {len(buf)}",
                    start,
                )
            buf += chunk
        self.offset += count
        return bytes(buf)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class _Parser:
    def __init__(
        self,
        reader: _Reader,
        max_depth: int,
        duplicate_keys: str,
        allow_negative: bool,
    ) -> None:
        self.reader = reader
        self.max_depth = max_depth
        self.duplicate_keys = duplicate_keys
        self.allow_negative = allow_negative

    def term(self, depth: int = 0) -> Value:
        ch = self.reader.peek()
        if not ch:
            if depth == 0:
                raise MalformedInputError("no term at end of input", self.reader.offset)
            raise UnexpectedEofError("expected a term", self.reader.offset)
        if ch.isdigit():
            return self.string()
        if ch == b"i":
            return self.integer()
        if ch == b"l":
            return self.list_(depth + 1)
        if ch == b"d":
            return self.dict_(depth + 1)
        raise MalformedInputError(f"invalid type tag {ch!r}", self.reader.offset)

    # -- Scalars ----------------------------------------------------------

    def string(self) -> VString:
        start = self.reader.offset
        digits = bytearray()
        while True:
            ch = self.reader.read_byte()
            if not ch:
                raise UnexpectedEofError("input ended inside a string length", start)
            if not ch.isdigit():
                break
            digits += ch
        if not digits:
            raise MalformedInputError("string length has no digits", start)
        if ch != b":":
            raise MalformedInputError(
                f"expected ':' after string length, got {ch!r}", self.reader.offset - 1
            )
        return VString(self.reader.read_exact(int(digits)))

    def integer(self) -> VInt:
        start = self.reader.offset
        if self.reader.read_byte() != b"i":
            raise MalformedInputError("'i' expected", start)

        negative = False
        if self.allow_negative and self.reader.peek() == b"-":
            self.reader.read_byte()
            negative = True

        digits = bytearray()
        while True:
            ch = self.reader.read_byte()
            if not ch:
                raise UnexpectedEofError("input ended inside an integer", start)
            if ch == b"e":
                break
            if not ch.isdigit():
                raise MalformedInputError(
                    f"invalid integer digit {ch!r}", self.reader.offset - 1
                )
            digits += ch

        if not digits:
            raise MalformedInputError("integer has no digits", start)
        if len(digits) > 1 and digits[0:1] == b"0":
            raise MalformedInputError("integer has a leading zero", start)
        if negative and digits == b"0":
            raise MalformedInputError("negative zero is not allowed", start)

        value = int(digits)
        if negative:
            value = -value
        if not INT64_MIN <= value <= INT64_MAX:
            raise MalformedInputError("integer does not fit in 64 bits", start)
        return VInt(value)

    # -- Containers -------------------------------------------------------

    def _enter(self, depth: int) -> None:
        if depth > self.max_depth:
            raise TooDeeplyNestedError(
                f"nesting exceeds {self.max_depth} levels", self.reader.offset
            )

    def _at_end(self, start: int, what: str) -> bool:
        ch = self.reader.peek()
        if not ch:
            raise UnexpectedEofError(f"input ended inside a {what}", start)
        if ch == b"e":
            self.reader.read_byte()
            return True
        return False

    def list_(self, depth: int) -> VList:
        self._enter(depth)
        start = self.reader.offset
        self.reader.read_byte()  # 'l'
        items: list[Value] = []
        while not self._at_end(start, "list"):
            items.append(self.term(depth))
        return VList(items)

    def dict_(self, depth: int) -> VDict:
        self._enter(depth)
        start = self.reader.offset
        self.reader.read_byte()  # 'd'
        entries: dict[Value, Value] = {}
        while not self._at_end(start, "dictionary"):
            key_offset = self.reader.offset
            key = self.term(depth)
            value = self.term(depth)
            if key in entries and self.duplicate_keys == "error":
                raise DuplicateKeyError(f"duplicate key {str(key)!r}", key_offset)
            entries[key] = value
        return VDict(entries)


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------

def _options(max_depth, duplicate_keys, allow_negative) -> tuple[int, str, bool]:
    from .config import MAX_DEPTH_LIMIT, settings

    if max_depth is not None and not 1 <= max_depth <= MAX_DEPTH_LIMIT:
        raise ValueError(f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}")
    cfg = settings.decoder
    return (
        cfg.max_depth if max_depth is None else max_depth,
        cfg.duplicate_keys if duplicate_keys is None else duplicate_keys,
        cfg.allow_negative if allow_negative is None else allow_negative,
    )


def parse(
    stream: BinaryIO,
    *,
    max_depth: int | None = None,
    duplicate_keys: str | None = None,
    allow_negative: bool | None = None,
) -> Value:
    """Parse exactly one term from a binary stream.

    Options left as ``None`` take their value from ``settings.decoder``.
    """
    parser = _Parser(_Reader(stream), *_options(max_depth, duplicate_keys, allow_negative))
    return parser.term()


def decode(data: bytes | bytearray | memoryview | str, **options) -> Value:
    """Decode a complete buffer holding one term and nothing else.

    ``str`` input is encoded as UTF-8 first.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    stream = io.BytesIO(bytes(data))
    value = parse(stream, **options)
    if stream.read(1):
        raise MalformedInputError("trailing data after term", stream.tell() - 1)
    return value


def decode_file(path: str | os.PathLike[str], **options) -> Value:
    """Decode the first term of a file, typically a ``.torrent``."""
    with open(path, "rb") as fh:
        value = parse(fh, **options)
        if fh.read(1):
            logger.warning("Ignoring trailing data after the torrent in {}", path)
    return value
