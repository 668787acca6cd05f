"""Text patching for the scalars that live above the first TOML table.

``version`` and ``lastUpdated`` are not addressable by the dotted-path editor,
so they are located with line-anchored patterns inside the top-level span
(everything before the first line starting with ``[``) and rewritten in place.
Missing fields are inserted: ``version`` after the leading comment block,
``lastUpdated`` directly below ``version``.
"""

from __future__ import annotations

import re
from typing import Pattern

from .toml_io import format_toml_value

_SECTION_START = re.compile(r"^\[", re.MULTILINE)


def _field_pattern(name: str) -> Pattern[str]:
    return re.compile(
        rf"^(?P<lead>{re.escape(name)}[ \t]*=[ \t]*)"
        r"(?P<quote>[\"'])[^\"'\r\n]*(?P=quote)"
        r"(?P<tail>[ \t]*(?:#[^\r\n]*)?)(?P<eol>\r?)$",
        re.MULTILINE,
    )


_VERSION_FIELD = _field_pattern("version")
_LAST_UPDATED_FIELD = _field_pattern("lastUpdated")


def _replace_field(top_level: str, pattern: Pattern[str], value: str) -> str:
    rendered = format_toml_value(value)
    return pattern.sub(
        lambda m: f"{m.group('lead')}{rendered}{m.group('tail')}{m.group('eol')}",
        top_level,
        count=1,
    )


def insert_at_top_level_start(top_level: str, line: str) -> str:
    """Insert ``line`` after the leading run of comments and blank lines."""
    if not top_level:
        return f"{line}\n"
    trailing_newline = top_level.endswith("\n")
    lines = top_level.split("\n")
    if trailing_newline:
        lines.pop()

    index = len(lines)
    for position, raw in enumerate(lines):
        stripped = raw.strip()
        if stripped and not stripped.startswith("#"):
            index = position
            break

    lines.insert(index, line)
    result = "\n".join(lines)
    return f"{result}\n" if trailing_newline else result


def insert_after_version_field(top_level: str, line: str) -> str:
    match = _VERSION_FIELD.search(top_level)
    if match is None:
        return insert_at_top_level_start(top_level, line)
    end = match.end()
    return f"{top_level[:end]}\n{line}{top_level[end:]}"


def update_top_level_toml_fields(content: str, version: str, last_updated: str) -> str:
    """Set ``version`` and ``lastUpdated`` without touching any section."""
    boundary = _SECTION_START.search(content)
    top_end = boundary.start() if boundary else len(content)
    top_level, rest = content[:top_end], content[top_end:]

    if _VERSION_FIELD.search(top_level):
        top_level = _replace_field(top_level, _VERSION_FIELD, version)
    else:
        top_level = insert_at_top_level_start(
            top_level, f"version = {format_toml_value(version)}"
        )

    # version is guaranteed to exist here, so a new timestamp lands right below it
    if _LAST_UPDATED_FIELD.search(top_level):
        top_level = _replace_field(top_level, _LAST_UPDATED_FIELD, last_updated)
    else:
        top_level = insert_after_version_field(
            top_level, f"lastUpdated = {format_toml_value(last_updated)}"
        )

    if rest and not top_level.endswith("\n"):
        top_level += "\n"
    return top_level + rest


__all__ = [
    "insert_at_top_level_start",
    "insert_after_version_field",
    "update_top_level_toml_fields",
]
