"""Conversion between the legacy flat record and the nested TOML layout.

Releases before the TOML file stored a single flat JSON object with one
``codeToolType`` discriminator. The nested layout keeps a section per tool so
Claude Code and Codex can be toggled independently. Conversion is one-way:
:func:`from_legacy_flat` widens a legacy record, :func:`to_legacy_flat` only
exists for callers that still read the flat shape and drops per-tool data.
"""

from __future__ import annotations

import errno
import logging
import shutil
from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..constants import (
    CONFIG_VERSION,
    DEFAULT_CODE_TOOL_TYPE,
    DEFAULT_INSTALL_TYPE,
    DEFAULT_LANG,
    ZcfPaths,
    is_code_tool_type,
    is_supported_lang,
)
from ..utils.file_helpers import path_exists
from .defaults import create_default_toml_config, utc_timestamp
from .exceptions import ConfigMigrationError
from .types import PartialZcfTomlConfig, ZcfConfig, ZcfTomlConfig
from .validation import validate_toml_config

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = {
    "general": ("preferredLang", "currentTool"),
    "claudeCode": ("enabled", "outputStyles", "installType"),
    "codex": ("enabled", "systemPromptStyle"),
}


def sanitize_preferred_lang(lang: Any) -> str:
    return lang if is_supported_lang(lang) else DEFAULT_LANG


def sanitize_code_tool_type(code_tool: Any) -> str:
    return code_tool if is_code_tool_type(code_tool) else DEFAULT_CODE_TOOL_TYPE


def _string_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def is_canonical_shape(data: Any) -> bool:
    return isinstance(data, Mapping) and any(
        group in data for group in ("general", "claudeCode", "codex")
    )


def from_legacy_flat(record: Mapping[str, Any]) -> ZcfTomlConfig:
    """Widen a legacy flat record into the nested layout."""
    installation = record.get("claudeCodeInstallation")
    install_type = (
        installation.get("type") if isinstance(installation, Mapping) else None
    ) or DEFAULT_INSTALL_TYPE
    defaults = create_default_toml_config(DEFAULT_LANG, install_type)

    current_tool = sanitize_code_tool_type(record.get("codeToolType"))
    preferred_lang = sanitize_preferred_lang(
        _string_or_none(record.get("preferredLang"))
        or defaults["general"]["preferredLang"]
    )

    general: Dict[str, Any] = {
        "preferredLang": preferred_lang,
        "templateLang": _string_or_none(record.get("templateLang"))
        or _string_or_none(record.get("preferredLang"))
        or defaults["general"]["preferredLang"],
        "currentTool": current_tool,
    }
    ai_output_lang = _string_or_none(record.get("aiOutputLang")) or defaults[
        "general"
    ].get("aiOutputLang")
    if ai_output_lang:
        general["aiOutputLang"] = ai_output_lang

    output_styles = record.get("outputStyles")
    default_style = record.get("defaultOutputStyle")
    legacy_claude = record.get("claudeCode")
    profiles = legacy_claude.get("profiles") if isinstance(legacy_claude, Mapping) else None

    return {
        "version": _string_or_none(record.get("version")) or defaults["version"],
        "lastUpdated": _string_or_none(record.get("lastUpdated")) or utc_timestamp(),
        "general": general,  # type: ignore[typeddict-item]
        "claudeCode": {
            "enabled": current_tool == "claude-code",
            "outputStyles": list(output_styles)
            if isinstance(output_styles, list)
            else list(defaults["claudeCode"]["outputStyles"]),
            "defaultOutputStyle": default_style
            if isinstance(default_style, str)
            else defaults["claudeCode"]["defaultOutputStyle"],
            "installType": defaults["claudeCode"]["installType"],
            "currentProfile": _string_or_none(record.get("currentProfileId"))
            or defaults["claudeCode"]["currentProfile"],
            "profiles": deepcopy(dict(profiles)) if isinstance(profiles, Mapping) else {},
        },
        "codex": {
            "enabled": current_tool == "codex",
            "systemPromptStyle": _string_or_none(record.get("systemPromptStyle"))
            or defaults["codex"]["systemPromptStyle"],
        },
    }


def to_legacy_flat(config: ZcfTomlConfig) -> ZcfConfig:
    """Project the nested layout onto the flat shape.

    Lossy: enabled flags, install type, profiles and the Codex section are
    dropped, so the result must never be written back as the source of truth.
    """
    general = config.get("general", {})
    claude_code = config.get("claudeCode", {})
    flat: Dict[str, Any] = {
        "version": config.get("version", CONFIG_VERSION),
        "preferredLang": general.get("preferredLang", DEFAULT_LANG),
        "templateLang": general.get("templateLang"),
        "aiOutputLang": general.get("aiOutputLang"),
        "outputStyles": claude_code.get("outputStyles"),
        "defaultOutputStyle": claude_code.get("defaultOutputStyle"),
        "codeToolType": general.get("currentTool", DEFAULT_CODE_TOOL_TYPE),
        "lastUpdated": config.get("lastUpdated") or utc_timestamp(),
    }
    return {key: value for key, value in flat.items() if value is not None}  # type: ignore[return-value]


def normalize_zcf_config(record: Any) -> Optional[ZcfConfig]:
    if not isinstance(record, Mapping):
        return None

    template_lang = record.get("templateLang")
    normalized: Dict[str, Any] = {
        "version": record["version"] if isinstance(record.get("version"), str) else CONFIG_VERSION,
        "preferredLang": sanitize_preferred_lang(record.get("preferredLang")),
        "codeToolType": sanitize_code_tool_type(record.get("codeToolType")),
        "lastUpdated": record["lastUpdated"]
        if isinstance(record.get("lastUpdated"), str)
        else utc_timestamp(),
    }
    if template_lang:
        normalized["templateLang"] = sanitize_preferred_lang(template_lang)
    if record.get("aiOutputLang") is not None:
        normalized["aiOutputLang"] = record["aiOutputLang"]
    if isinstance(record.get("outputStyles"), list):
        normalized["outputStyles"] = list(record["outputStyles"])
    if isinstance(record.get("defaultOutputStyle"), str):
        normalized["defaultOutputStyle"] = record["defaultOutputStyle"]
    return normalized  # type: ignore[return-value]


def normalize_toml_config(data: Any) -> ZcfTomlConfig:
    """Validate a parsed document and fill the fields every reader relies on.

    Fields holding a value of the wrong type or outside their allowed set fall
    back to the default (or are dropped when there is none). Valid optional
    fields and keys this module does not know are kept as found.
    """
    invalid = validate_toml_config(data)
    config: Dict[str, Any] = deepcopy(dict(data))
    defaults = create_default_toml_config()

    for group, key in invalid:
        fallback = defaults[group].get(key)  # type: ignore[literal-required]
        logger.debug(
            "Replacing invalid %s.%s value %r", group, key, config[group].get(key)
        )
        if fallback is None:
            config[group].pop(key, None)
        else:
            config[group][key] = deepcopy(fallback)

    if not isinstance(config.get("version"), str):
        config["version"] = defaults["version"]
    if not isinstance(config.get("lastUpdated"), str):
        config["lastUpdated"] = defaults["lastUpdated"]

    for group, keys in _REQUIRED_FIELDS.items():
        section = config[group]
        for key in keys:
            if key not in section:
                section[key] = deepcopy(defaults[group][key])  # type: ignore[literal-required]

    general = config["general"]
    general["preferredLang"] = sanitize_preferred_lang(general["preferredLang"])
    general["currentTool"] = sanitize_code_tool_type(general["currentTool"])
    return config  # type: ignore[return-value]


def legacy_updates_to_partial(updates: Mapping[str, Any]) -> PartialZcfTomlConfig:
    """Map flat-shaped partial updates onto the nested groups."""
    general: Dict[str, Any] = {}
    claude_code: Dict[str, Any] = {}
    codex: Dict[str, Any] = {}
    partial: Dict[str, Any] = {}

    if updates.get("version"):
        partial["version"] = updates["version"]
    if updates.get("preferredLang") is not None:
        general["preferredLang"] = sanitize_preferred_lang(updates["preferredLang"])
    if updates.get("templateLang") is not None:
        general["templateLang"] = updates["templateLang"]
    if updates.get("aiOutputLang") is not None:
        general["aiOutputLang"] = updates["aiOutputLang"]
    if updates.get("codeToolType") is not None:
        tool = sanitize_code_tool_type(updates["codeToolType"])
        general["currentTool"] = tool
        # Selecting a tool turns it on; the other tool keeps its own flag
        (claude_code if tool == "claude-code" else codex)["enabled"] = True
    if updates.get("outputStyles") is not None:
        claude_code["outputStyles"] = list(updates["outputStyles"])
    if updates.get("defaultOutputStyle") is not None:
        claude_code["defaultOutputStyle"] = updates["defaultOutputStyle"]
    if updates.get("systemPromptStyle") is not None:
        codex["systemPromptStyle"] = updates["systemPromptStyle"]

    for group, values in (("general", general), ("claudeCode", claude_code), ("codex", codex)):
        if values:
            partial[group] = values
    return partial  # type: ignore[return-value]


@dataclass
class MigrationResult:
    migrated: bool
    target: Path
    source: Optional[Path] = None
    removed: List[Path] = field(default_factory=list)


def _move_file(source: Path, target: Path) -> None:
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        try:
            source.rename(target)
        except OSError as exc:
            if exc.errno != errno.EXDEV:
                raise
            # rename cannot cross filesystems
            shutil.copy2(source, target)
            source.unlink()
    except OSError as exc:
        raise ConfigMigrationError(
            f"Failed to move {source} to {target}: {exc}"
        ) from exc


def _remove_quietly(path: Path, removed: List[Path]) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning("Failed to remove legacy configuration '%s': %s", path, exc)
        return
    removed.append(path)


def migrate_legacy_files(paths: ZcfPaths) -> MigrationResult:
    """Move the first legacy file into place and delete the others.

    When the current file already exists it wins and every legacy file is
    deleted unread. Never raises.
    """
    target = paths.config_file
    removed: List[Path] = []
    legacy_sources = [path for path in paths.legacy_files if path_exists(path)]
    if not legacy_sources:
        return MigrationResult(migrated=False, target=target)

    if path_exists(target):
        for source in legacy_sources:
            _remove_quietly(source, removed)
        if removed:
            logger.info(
                "Removed legacy configuration files: %s",
                ", ".join(str(path) for path in removed),
            )
        return MigrationResult(migrated=False, target=target, removed=removed)

    source = legacy_sources[0]
    try:
        _move_file(source, target)
    except ConfigMigrationError as exc:
        logger.warning("Legacy configuration left in place: %s", exc)
        return MigrationResult(migrated=False, target=target)

    for leftover in legacy_sources[1:]:
        _remove_quietly(leftover, removed)
    logger.info("Legacy configuration migrated from %s into %s", source, target)
    return MigrationResult(migrated=True, target=target, source=source, removed=removed)


__all__ = [
    "MigrationResult",
    "sanitize_preferred_lang",
    "sanitize_code_tool_type",
    "is_canonical_shape",
    "from_legacy_flat",
    "to_legacy_flat",
    "normalize_zcf_config",
    "normalize_toml_config",
    "legacy_updates_to_partial",
    "migrate_legacy_files",
]
