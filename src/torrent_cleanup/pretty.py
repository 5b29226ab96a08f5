"""Indented, human-readable rendering of values (not parseable)."""

from __future__ import annotations

from .values import Value, VDict, VInt, VList, VString


def pretty_print(value: Value, indent: int = 0) -> str:
    """Render *value* one item per line, children two columns deeper.

    Example::

        d4:infod4:name3:fooee  →  [
                                    'info'
                                    [
                                      'name'
                                      'foo'
                                      ----
                                    ]
                                    ----
                                  ]
    """
    lines: list[str] = []
    _render(value, indent, lines)
    return "".join(line + "\n" for line in lines)


def _render(value: Value, indent: int, lines: list[str]) -> None:
    pad = " " * indent
    if isinstance(value, VString):
        lines.append(f"{pad}'{value}'")
    elif isinstance(value, VInt):
        lines.append(f"{pad}{value.value}")
    elif isinstance(value, VList):
        lines.append(f"{pad}(")
        for item in value.items:
            _render(item, indent + 2, lines)
        lines.append(f"{pad})")
    elif isinstance(value, VDict):
        lines.append(f"{pad}[")
        for key, item in value.entries.items():
            _render(key, indent + 2, lines)
            _render(item, indent + 2, lines)
            lines.append(f"{pad}  ----")
        lines.append(f"{pad}]")
    else:
        raise TypeError(f"cannot print {type(value).__name__}")
