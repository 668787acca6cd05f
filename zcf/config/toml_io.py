from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

from .compat import TOMLDecodeError, tomllib
from .exceptions import ConfigParseError

_BARE_KEY = re.compile(r"^[A-Za-z0-9_-]+$")

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _toml_escape(value: str) -> str:
    chunks: List[str] = []
    for char in value:
        if char in _ESCAPES:
            chunks.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            chunks.append(f"\\u{ord(char):04X}")
        else:
            chunks.append(char)
    return "".join(chunks)


def format_toml_key(key: str) -> str:
    if _BARE_KEY.match(key):
        return key
    return f'"{_toml_escape(key)}"'


def format_toml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value != value:
            return "nan"
        if value in (float("inf"), float("-inf")):
            return "inf" if value > 0 else "-inf"
        return repr(value)
    if isinstance(value, str):
        return f'"{_toml_escape(value)}"'
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_toml_value(v) for v in value) + "]"
    if isinstance(value, dict):
        items = [
            f"{format_toml_key(str(k))} = {format_toml_value(v)}"
            for k, v in value.items()
            if v is not None
        ]
        if not items:
            return "{}"
        return "{ " + ", ".join(items) + " }"
    raise TypeError(f"Unsupported value type for TOML serialization: {type(value)!r}")


def dumps(data: Dict[str, Any]) -> str:
    """Serialize a nested mapping into a fresh TOML document.

    Comments and the layout of any previous document are not preserved.
    """
    lines: List[str] = []

    def write_table(prefix: str, table: Dict[str, Any]) -> None:
        scalar_items: List[Tuple[str, Any]] = []
        sub_tables: List[Tuple[str, Dict[str, Any]]] = []

        for key, value in table.items():
            if value is None:
                continue
            if isinstance(value, dict):
                sub_tables.append((key, value))
            else:
                scalar_items.append((key, value))

        if prefix:
            if lines:
                lines.append("")
            lines.append(f"[{prefix}]")

        for key, value in scalar_items:
            lines.append(f"{format_toml_key(key)} = {format_toml_value(value)}")

        for key, value in sub_tables:
            quoted = format_toml_key(key)
            new_prefix = f"{prefix}.{quoted}" if prefix else quoted
            write_table(new_prefix, value)

    write_table("", data)
    return "\n".join(lines) + "\n"


def loads(text: str) -> Dict[str, Any]:
    try:
        return tomllib.loads(text)
    except TOMLDecodeError as exc:
        raise ConfigParseError(f"Invalid TOML document: {exc}") from exc


__all__ = ["format_toml_key", "format_toml_value", "dumps", "loads"]
