# zcf/constants.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

SUPPORTED_LANGS: Tuple[str, ...] = ("zh-CN", "en")
DEFAULT_LANG = "en"

# Language for which new installations also pin the AI output language
DEFAULT_AI_OUTPUT_LANG = "zh-CN"
AI_OUTPUT_LANGUAGES: Tuple[str, ...] = ("zh-CN", "en", "custom")

CODE_TOOL_TYPES: Tuple[str, ...] = ("claude-code", "codex")
DEFAULT_CODE_TOOL_TYPE = "claude-code"

INSTALL_TYPES: Tuple[str, ...] = ("global", "local")
DEFAULT_INSTALL_TYPE = "global"

DEFAULT_OUTPUT_STYLE = "engineer-professional"
DEFAULT_SYSTEM_PROMPT_STYLE = "engineer-professional"

CONFIG_VERSION = "1.0.0"


def is_supported_lang(value: object) -> bool:
    return isinstance(value, str) and value in SUPPORTED_LANGS


def is_code_tool_type(value: object) -> bool:
    return isinstance(value, str) and value in CODE_TOOL_TYPES


@dataclass(frozen=True)
class ZcfPaths:
    """Filesystem locations used by the configuration store."""

    config_dir: Path
    config_file: Path
    legacy_files: Tuple[Path, ...]
    claude_dir: Path
    settings_file: Path

    @property
    def json_config_file(self) -> Path:
        """JSON file that used to live beside the TOML configuration."""
        return self.config_file.with_suffix(".json")

    @classmethod
    def default(cls, home: Optional[Path] = None) -> "ZcfPaths":
        base = (home or Path.home()).expanduser()
        config_dir = base / ".ufomiao" / "zcf"
        claude_dir = base / ".claude"
        return cls(
            config_dir=config_dir,
            config_file=config_dir / "config.toml",
            # Priority order: the first existing file wins during migration
            legacy_files=(
                claude_dir / ".zcf-config.json",
                base / ".zcf.json",
            ),
            claude_dir=claude_dir,
            settings_file=claude_dir / "settings.json",
        )

    def with_config_dir(self, config_dir: Path) -> "ZcfPaths":
        config_dir = config_dir.expanduser()
        return ZcfPaths(
            config_dir=config_dir,
            config_file=config_dir / "config.toml",
            legacy_files=self.legacy_files,
            claude_dir=self.claude_dir,
            settings_file=self.settings_file,
        )


__all__ = [
    "SUPPORTED_LANGS",
    "DEFAULT_LANG",
    "DEFAULT_AI_OUTPUT_LANG",
    "AI_OUTPUT_LANGUAGES",
    "CODE_TOOL_TYPES",
    "DEFAULT_CODE_TOOL_TYPE",
    "INSTALL_TYPES",
    "DEFAULT_INSTALL_TYPE",
    "DEFAULT_OUTPUT_STYLE",
    "DEFAULT_SYSTEM_PROMPT_STYLE",
    "CONFIG_VERSION",
    "ZcfPaths",
    "is_supported_lang",
    "is_code_tool_type",
]
