"""Encoder: serialize values back to bencode."""

from __future__ import annotations

from .values import Value, VDict, VInt, VList, VString


def serialize(value: Value) -> bytes:
    """Return the bencoded form of *value*.

    Dictionary entries are written in their current iteration order; keys
    are not sorted.
    """
    out = bytearray()
    _write(value, out)
    return bytes(out)


def _write(value: Value, out: bytearray) -> None:
    if isinstance(value, VString):
        out += b"%d:" % len(value.value)
        out += value.value
    elif isinstance(value, VInt):
        out += b"i%de" % value.value
    elif isinstance(value, VList):
        out += b"l"
        for item in value.items:
            _write(item, out)
        out += b"e"
    elif isinstance(value, VDict):
        out += b"d"
        for key, item in value.entries.items():
            _write(key, out)
            _write(item, out)
        out += b"e"
    else:
        raise TypeError(f"cannot serialize {type(value).__name__}")
