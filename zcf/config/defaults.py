from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..constants import (
    CONFIG_VERSION,
    DEFAULT_AI_OUTPUT_LANG,
    DEFAULT_CODE_TOOL_TYPE,
    DEFAULT_INSTALL_TYPE,
    DEFAULT_LANG,
    DEFAULT_OUTPUT_STYLE,
    DEFAULT_SYSTEM_PROMPT_STYLE,
    INSTALL_TYPES,
    is_supported_lang,
)
from .types import ZcfConfig, ZcfTomlConfig


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 timestamp in UTC with millisecond precision."""
    current = moment or datetime.now(timezone.utc)
    return current.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def create_default_toml_config(
    preferred_lang: str = DEFAULT_LANG,
    install_type: str = DEFAULT_INSTALL_TYPE,
) -> ZcfTomlConfig:
    lang = preferred_lang if is_supported_lang(preferred_lang) else DEFAULT_LANG
    if install_type not in INSTALL_TYPES:
        install_type = DEFAULT_INSTALL_TYPE

    general: Dict[str, Any] = {
        "preferredLang": lang,
        # New installations render templates in the interface language
        "templateLang": lang,
        "currentTool": DEFAULT_CODE_TOOL_TYPE,
    }
    if lang == DEFAULT_AI_OUTPUT_LANG:
        general["aiOutputLang"] = lang

    return {
        "version": CONFIG_VERSION,
        "lastUpdated": utc_timestamp(),
        "general": general,  # type: ignore[typeddict-item]
        "claudeCode": {
            "enabled": True,
            "outputStyles": [DEFAULT_OUTPUT_STYLE],
            "defaultOutputStyle": DEFAULT_OUTPUT_STYLE,
            "installType": install_type,
            "currentProfile": "",
            "profiles": {},
        },
        "codex": {
            "enabled": False,
            "systemPromptStyle": DEFAULT_SYSTEM_PROMPT_STYLE,
        },
    }


def create_default_legacy_config() -> ZcfConfig:
    return {
        "version": CONFIG_VERSION,
        "preferredLang": DEFAULT_LANG,
        "codeToolType": DEFAULT_CODE_TOOL_TYPE,
        "lastUpdated": utc_timestamp(),
    }


_STRING = {"type": "string"}
_BOOLEAN = {"type": "boolean"}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "general": {
            "type": "object",
            "properties": {
                "preferredLang": _STRING,
                "templateLang": _STRING,
                "aiOutputLang": _STRING,
                "currentTool": _STRING,
            },
            "additionalProperties": True,
        },
        "claudeCode": {
            "type": "object",
            "properties": {
                "enabled": _BOOLEAN,
                "outputStyles": {"type": "array", "items": _STRING},
                "defaultOutputStyle": _STRING,
                "installType": {"type": "string", "enum": list(INSTALL_TYPES)},
                "currentProfile": _STRING,
                "profiles": {"type": "object"},
                "version": _STRING,
            },
            "additionalProperties": True,
        },
        "codex": {
            "type": "object",
            "properties": {
                "enabled": _BOOLEAN,
                "systemPromptStyle": _STRING,
            },
            "additionalProperties": True,
        },
    },
    "required": ["general", "claudeCode", "codex"],
    "additionalProperties": True,
}

__all__ = [
    "CONFIG_SCHEMA",
    "create_default_toml_config",
    "create_default_legacy_config",
    "utc_timestamp",
]
