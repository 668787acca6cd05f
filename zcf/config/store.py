"""Read, write and update the zcf configuration.

:class:`ZcfConfigStore` is the contract the rest of the CLI talks to. Reading
never fails (a missing or broken file simply means "no configuration") and
writing never raises, since saved preferences are a convenience and must not
block an install. The module-level functions operate on a lazily created
default store rooted in the user's home directory.
"""

from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from ..constants import ZcfPaths
from .defaults import create_default_legacy_config, create_default_toml_config, utc_timestamp
from .migration import (
    MigrationResult,
    from_legacy_flat,
    is_canonical_shape,
    legacy_updates_to_partial,
    migrate_legacy_files,
    normalize_toml_config,
    normalize_zcf_config,
    sanitize_code_tool_type,
    to_legacy_flat,
)
from .storage import ConfigStorage, WriteResult
from .types import ZcfConfig, ZcfTomlConfig

logger = logging.getLogger(__name__)

_GROUPS = ("general", "claudeCode", "codex")

# Fields edited by other flows (profile switching, tool installs) that a
# caller writing preferences usually does not know about
_CARRIED_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("claudeCode", "profiles"),
    ("claudeCode", "currentProfile"),
    ("claudeCode", "version"),
    ("claudeCode", "installType"),
    ("codex", "systemPromptStyle"),
)


def _supplied_by_legacy_record(record: Mapping[str, Any]) -> Set[Tuple[str, str]]:
    supplied: Set[Tuple[str, str]] = set()
    legacy_claude = record.get("claudeCode")
    if isinstance(legacy_claude, Mapping) and "profiles" in legacy_claude:
        supplied.add(("claudeCode", "profiles"))
    if record.get("currentProfileId"):
        supplied.add(("claudeCode", "currentProfile"))
    if record.get("claudeCodeInstallation"):
        supplied.add(("claudeCode", "installType"))
    if record.get("systemPromptStyle"):
        supplied.add(("codex", "systemPromptStyle"))
    return supplied


class ZcfConfigStore:
    """Configuration persistence for one set of :class:`ZcfPaths`."""

    def __init__(self, paths: Optional[ZcfPaths] = None) -> None:
        self.paths = paths or ZcfPaths.default()
        self.storage = ConfigStorage(self.paths.config_file)

    @property
    def config_path(self) -> Path:
        return self.storage.path

    # -- migration ------------------------------------------------------------

    def migrate_legacy_locations(self) -> MigrationResult:
        result = migrate_legacy_files(self.paths)
        if result.migrated:
            self._upgrade_migrated_file()
        return result

    def _upgrade_migrated_file(self) -> None:
        """Rewrite a freshly moved JSON record as TOML."""
        if self.storage.read_toml_config() is not None:
            return
        record = self.storage.read_legacy_json(self.config_path)
        if record is None:
            return
        outcome = self.storage.write_toml_config(
            from_legacy_flat(record), preserve_format=False
        )
        if outcome.written:
            logger.info("Converted legacy configuration at %s to TOML", self.config_path)

    # -- reading --------------------------------------------------------------

    def _legacy_candidates(self) -> List[Path]:
        # The current file may still hold JSON if converting it failed
        return [
            self.config_path,
            self.paths.json_config_file,
            *self.paths.legacy_files,
        ]

    def _read_legacy_record(self) -> Optional[Dict[str, Any]]:
        for path in self._legacy_candidates():
            record = self.storage.read_legacy_json(path)
            if record is not None:
                logger.debug("Using legacy configuration from %s", path)
                return record
        return None

    def read(self) -> Optional[ZcfTomlConfig]:
        self.migrate_legacy_locations()
        config = self.storage.read_toml_config()
        if config is not None:
            return config
        record = self._read_legacy_record()
        return from_legacy_flat(record) if record is not None else None

    def read_legacy(self) -> Optional[ZcfConfig]:
        """Flat view for callers that predate the nested layout."""
        self.migrate_legacy_locations()
        config = self.storage.read_toml_config()
        if config is not None:
            return to_legacy_flat(config)
        return normalize_zcf_config(self._read_legacy_record())

    def get(self) -> ZcfTomlConfig:
        return self.read() or create_default_toml_config()

    def get_legacy(self) -> ZcfConfig:
        return self.read_legacy() or create_default_legacy_config()

    # -- writing --------------------------------------------------------------

    def _prepare(self, config: Mapping[str, Any]) -> ZcfTomlConfig:
        if is_canonical_shape(config):
            data: Dict[str, Any] = deepcopy(dict(config))
            for group in _GROUPS:
                data.setdefault(group, {})
            supplied = {
                (group, key)
                for group, key in _CARRIED_FIELDS
                if key in data[group]
            }
            prepared = normalize_toml_config(data)
        else:
            record = dict(config)
            record["codeToolType"] = sanitize_code_tool_type(record.get("codeToolType"))
            supplied = _supplied_by_legacy_record(record)
            prepared = from_legacy_flat(record)

        existing = self.storage.read_toml_config()
        if existing is not None:
            for group, key in _CARRIED_FIELDS:
                if (group, key) in supplied:
                    continue
                if key in existing.get(group, {}):  # type: ignore[attr-defined]
                    prepared[group][key] = deepcopy(existing[group][key])  # type: ignore[literal-required]
        return prepared

    def write(self, config: Mapping[str, Any]) -> WriteResult:
        """Persist a nested or flat configuration; never raises."""
        try:
            prepared = self._prepare(config)
        except Exception as exc:
            logger.warning("Discarding invalid configuration update: %s", exc)
            return WriteResult(written=False, error=exc)
        return self.storage.write_toml_config(prepared)

    def update(self, updates: Mapping[str, Any]) -> ZcfTomlConfig:
        """Merge ``updates`` group by group into the stored configuration."""
        partial: Mapping[str, Any] = (
            updates if is_canonical_shape(updates) else legacy_updates_to_partial(updates)
        )
        existing = self.read() or create_default_toml_config()

        merged: Dict[str, Any] = {
            "version": partial.get("version") or existing.get("version"),
            "lastUpdated": utc_timestamp(),
        }
        for group in _GROUPS:
            merged[group] = {
                **deepcopy(existing.get(group, {})),
                **deepcopy(dict(partial.get(group) or {})),
            }

        self.write(merged)
        return merged  # type: ignore[return-value]


_default_store: Optional[ZcfConfigStore] = None


def get_default_store() -> ZcfConfigStore:
    global _default_store
    if _default_store is None:
        _default_store = ZcfConfigStore()
    return _default_store


def set_default_store(store: Optional[ZcfConfigStore]) -> None:
    """Replace the default store; ``None`` re-derives it on next use."""
    global _default_store
    _default_store = store


def migrate_zcf_config_if_needed() -> MigrationResult:
    return get_default_store().migrate_legacy_locations()


def read_zcf_config() -> Optional[ZcfConfig]:
    return get_default_store().read_legacy()


async def read_zcf_config_async() -> Optional[ZcfConfig]:
    return read_zcf_config()


def get_zcf_config() -> ZcfConfig:
    return get_default_store().get_legacy()


async def get_zcf_config_async() -> ZcfConfig:
    return get_zcf_config()


def write_zcf_config(config: Mapping[str, Any]) -> None:
    get_default_store().write(config)


async def save_zcf_config(config: Mapping[str, Any]) -> None:
    write_zcf_config(config)


def update_zcf_config(updates: Mapping[str, Any]) -> None:
    try:
        get_default_store().update(updates)
    except Exception as exc:
        logger.warning("Could not update configuration: %s", exc)


def update_toml_config(updates: Mapping[str, Any]) -> ZcfTomlConfig:
    return get_default_store().update(updates)


def read_default_toml_config() -> Optional[ZcfTomlConfig]:
    return get_default_store().storage.read_toml_config()


__all__ = [
    "ZcfConfigStore",
    "get_default_store",
    "set_default_store",
    "migrate_zcf_config_if_needed",
    "read_zcf_config",
    "read_zcf_config_async",
    "get_zcf_config",
    "get_zcf_config_async",
    "write_zcf_config",
    "save_zcf_config",
    "update_zcf_config",
    "update_toml_config",
    "read_default_toml_config",
]
