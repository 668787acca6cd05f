"""Format-preserving edits for TOML documents.

Edits go through a tomlkit document, so comments, key order, whitespace and
keys this module does not manage survive. Replacing an existing value keeps
its indentation and trailing comment.

Only sectioned keys can be addressed (``"general.preferredLang"``). Top-level
scalars are handled by :mod:`zcf.config.top_level`.
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Iterable, Tuple

import tomlkit
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import AoT, Table

from .exceptions import ConfigEditError

logger = logging.getLogger(__name__)

Edit = Tuple[str, Any]
KeyPath = Tuple[str, ...]


def _split_path(path: str) -> Tuple[KeyPath, str]:
    parts = tuple(path.split("."))
    if len(parts) < 2 or not all(parts):
        raise ConfigEditError(
            f"Edit path '{path}' must address a key inside a section"
        )
    return parts[:-1], parts[-1]


def _inline(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    table = tomlkit.inline_table()
    for key, nested in value.items():
        if nested is not None:
            table[key] = _inline(nested)
    return table


def _resolve_table(document: tomlkit.TOMLDocument, table: KeyPath, path: str) -> MutableMapping:
    current: MutableMapping = document
    for part in table:
        if part not in current:
            logger.debug("Creating table [%s] for %s", ".".join(table), path)
            current[part] = tomlkit.table()
        nested = current[part]
        if isinstance(nested, AoT):
            raise ConfigEditError(f"'{path}' points into an array of tables")
        if not isinstance(nested, MutableMapping):
            raise ConfigEditError(f"Cannot set '{path}': '{part}' is not a table")
        current = nested
    return current


def _assign(document: tomlkit.TOMLDocument, path: str, value: Any) -> None:
    table, key = _split_path(path)
    if value is None:
        raise ConfigEditError(f"Cannot write an empty value to '{path}'")

    container = _resolve_table(document, table, path)
    if isinstance(value, dict):
        if isinstance(container.get(key), Table):
            # [a.b.key] and [a.b.key.*] blocks give way to one inline table
            del container[key]
        value = _inline(value)
    container[key] = value


def batch_edit_toml(text: str, edits: Iterable[Edit]) -> str:
    """Apply ``edits`` in order and return the new document text.

    Later edits to the same path win. Any failure raises
    :class:`ConfigEditError` and no partial result is returned.
    """
    try:
        document = tomlkit.parse(text)
        for path, value in edits:
            _assign(document, path, value)
        return tomlkit.dumps(document)
    except TOMLKitError as exc:
        raise ConfigEditError(f"Cannot edit TOML document: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigEditError(f"Cannot render value: {exc}") from exc


def edit_toml(text: str, path: str, value: Any) -> str:
    """Set a single dotted ``path`` to ``value``."""
    return batch_edit_toml(text, [(path, value)])


__all__ = ["Edit", "edit_toml", "batch_edit_toml"]
