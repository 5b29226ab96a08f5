"""Structural equality, hashing and ordering for values.

``==`` on values only ever compares a value with another value of the same
variant. The helpers here add the conversions to native Python objects:

- a ``VString`` matches a ``str`` (by its UTF-8 encoding) or any bytes-like
  object holding the same bytes,
- a ``VInt`` matches anything ``operator.index`` accepts with the same value,
- a string never matches an integer, whatever the content.
"""

from __future__ import annotations

import operator

from .values import Value, VDict, VInt, VList, VString, VALUE_TYPES

_MASK64 = (1 << 64) - 1


# ---------------------------------------------------------------------------
# Native conversions
# ---------------------------------------------------------------------------

def _native_bytes(obj: object) -> bytes | None:
    if isinstance(obj, str):
        return obj.encode("utf-8", "surrogateescape")
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return bytes(obj)
    return None


def _native_int(obj: object) -> int | None:
    if isinstance(obj, (str, bytes, bytearray, memoryview)):
        return None
    try:
        return operator.index(obj)
    except TypeError:
        return None


# ---------------------------------------------------------------------------
# equals
# ---------------------------------------------------------------------------

def equals(a: object, b: object) -> bool:
    """Deep equality between values, or a value and a native object.

    Returns ``False`` when either side is ``None`` and never raises.
    """
    if a is None or b is None:
        return False
    if not isinstance(a, VALUE_TYPES):
        if not isinstance(b, VALUE_TYPES):
            return False
        a, b = b, a

    if isinstance(a, VString):
        if isinstance(b, VString):
            return a.value == b.value
        if isinstance(b, VALUE_TYPES):
            return False
        other = _native_bytes(b)
        return other is not None and a.value == other

    if isinstance(a, VInt):
        if isinstance(b, VInt):
            return a.value == b.value
        if isinstance(b, VALUE_TYPES):
            return False
        other = _native_int(b)
        return other is not None and a.value == other

    if isinstance(a, VList):
        if not isinstance(b, VList) or len(a.items) != len(b.items):
            return False
        return all(equals(x, y) for x, y in zip(a.items, b.items))

    if isinstance(a, VDict):
        if not isinstance(b, VDict) or len(a.entries) != len(b.entries):
            return False
        for key, value in a.entries.items():
            if key not in b.entries:
                return False
            if not equals(value, b.entries[key]):
                return False
        return True

    raise TypeError(f"not a value: {type(a).__name__}")


# ---------------------------------------------------------------------------
# structural_hash
# ---------------------------------------------------------------------------

def structural_hash(value: Value) -> int:
    """Hash consistent with :func:`equals`.

    Lists combine their children in order. Dicts add up per-entry hashes so
    that insertion order does not matter.
    """
    if isinstance(value, VString):
        return hash(value.value)
    if isinstance(value, VInt):
        return hash(value.value)
    if isinstance(value, VList):
        return hash(("l", tuple(structural_hash(v) for v in value.items)))
    if isinstance(value, VDict):
        total = 0
        for key, item in value.entries.items():
            total = (total + hash((structural_hash(key), structural_hash(item)))) & _MASK64
        return hash(("d", total))
    raise TypeError(f"not a value: {type(value).__name__}")


# ---------------------------------------------------------------------------
# compare
# ---------------------------------------------------------------------------

def _cmp(x, y) -> int:
    return (x > y) - (x < y)


def compare(a: Value, b: object) -> int:
    """Order strings by bytes and integers numerically.

    Any pairing that has no natural order (including ``None``) sorts *a*
    first and returns ``-1``.
    """
    if isinstance(a, VString):
        if isinstance(b, VString):
            return _cmp(a.value, b.value)
        if not isinstance(b, VALUE_TYPES):
            other = _native_bytes(b)
            if other is not None:
                return _cmp(a.value, other)
        return -1

    if isinstance(a, VInt):
        if isinstance(b, VInt):
            return _cmp(a.value, b.value)
        if not isinstance(b, VALUE_TYPES) and b is not None:
            other = _native_int(b)
            if other is not None:
                return _cmp(a.value, other)
        return -1

    return -1
