"""Value types for decoded bencode terms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(slots=True)
class VString:
    value: bytes

    def __post_init__(self) -> None:
        if isinstance(self.value, (bytearray, memoryview)):
            self.value = bytes(self.value)
        elif not isinstance(self.value, bytes):
            raise TypeError(f"VString needs bytes, got {type(self.value).__name__}")

    @classmethod
    def from_text(cls, text: str, encoding: str = "utf-8") -> "VString":
        return cls(text.encode(encoding))

    def text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self.value.decode(encoding, errors)

    def __str__(self) -> str:
        return self.value.decode("utf-8", "replace")

    def __hash__(self) -> int:
        from .equality import structural_hash
        return structural_hash(self)


@dataclass(slots=True)
class VInt:
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int):
            raise TypeError(f"VInt needs an int, got {type(self.value).__name__}")
        self.value = int(self.value)
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} does not fit in a signed 64-bit integer")

    def __str__(self) -> str:
        return str(self.value)

    def __hash__(self) -> int:
        from .equality import structural_hash
        return structural_hash(self)


@dataclass(slots=True)
class VList:
    items: list["Value"] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"

    def __hash__(self) -> int:
        from .equality import structural_hash
        return structural_hash(self)


@dataclass(slots=True)
class VDict:
    """Dictionary term.

    ``entries`` keeps insertion order, which is the order used when printing
    and re-encoding. ``==`` ignores that order, as does the structural hash.
    Lookups accept native ``str``/``bytes``/``int`` keys as well as values.
    """

    entries: dict["Value", "Value"] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return as_key(key) in self.entries

    def __getitem__(self, key: object) -> "Value":
        return self.entries[as_key(key)]

    def get(self, key: object, default: "Value | None" = None) -> "Value | None":
        return self.entries.get(as_key(key), default)

    def items(self):
        return self.entries.items()

    def keys(self):
        return self.entries.keys()

    def values(self):
        return self.entries.values()

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries.items()) + "}"

    def __hash__(self) -> int:
        from .equality import structural_hash
        return structural_hash(self)


Value = Union[VString, VInt, VList, VDict]

VALUE_TYPES = (VString, VInt, VList, VDict)


def as_key(key: object) -> "Value":
    """Turn a native dictionary key into the matching value."""
    if isinstance(key, VALUE_TYPES):
        return key
    if isinstance(key, str):
        return VString.from_text(key)
    if isinstance(key, (bytes, bytearray, memoryview)):
        return VString(bytes(key))
    if isinstance(key, int):
        return VInt(key)
    raise TypeError(f"unsupported key type: {type(key).__name__}")
