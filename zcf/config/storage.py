from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import ConfigEditError, ConfigIOError, ConfigParseError, ConfigValidationError
from .migration import normalize_toml_config
from .toml_edit import Edit, batch_edit_toml
from .toml_io import dumps, loads
from .top_level import update_top_level_toml_fields
from .types import ZcfTomlConfig
from ..utils.file_helpers import path_exists

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """Outcome of a write; callers outside the store only ever ignore it."""

    written: bool
    strategy: Optional[str] = None
    error: Optional[BaseException] = None


def build_edit_set(config: ZcfTomlConfig) -> List[Edit]:
    """Edits for every sectioned field the application manages."""
    general = config["general"]
    claude_code = config["claudeCode"]
    codex = config["codex"]

    candidates: List[Edit] = [
        ("general.preferredLang", general.get("preferredLang")),
        ("general.currentTool", general.get("currentTool")),
        ("general.templateLang", general.get("templateLang")),
        ("general.aiOutputLang", general.get("aiOutputLang")),
        ("claudeCode.enabled", claude_code.get("enabled")),
        ("claudeCode.outputStyles", claude_code.get("outputStyles")),
        ("claudeCode.installType", claude_code.get("installType")),
        ("claudeCode.defaultOutputStyle", claude_code.get("defaultOutputStyle")),
        ("claudeCode.currentProfile", claude_code.get("currentProfile")),
        ("claudeCode.profiles", claude_code.get("profiles")),
        ("claudeCode.version", claude_code.get("version")),
        ("codex.enabled", codex.get("enabled")),
        ("codex.systemPromptStyle", codex.get("systemPromptStyle")),
    ]
    return [(path, value) for path, value in candidates if value is not None]


def _lookup(data: Dict[str, Any], path: str) -> Any:
    cursor: Any = data
    for part in path.split("."):
        if not isinstance(cursor, dict) or part not in cursor:
            return None
        cursor = cursor[part]
    return cursor


class ConfigStorage:
    """Filesystem interaction for the TOML configuration file."""

    def __init__(self, path: Path) -> None:
        self._path = path.expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def ensure_directory(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigIOError(
                f"Unable to create configuration directory: {exc}"
            ) from exc

    def read_toml_config(self) -> Optional[ZcfTomlConfig]:
        """Parsed and normalized configuration, or ``None`` when unusable."""
        if not path_exists(self._path):
            return None
        try:
            text = self._path.read_text(encoding="utf-8")
            return normalize_toml_config(loads(text))
        except (ConfigParseError, ConfigValidationError) as exc:
            logger.debug("Ignoring configuration file %s: %s", self._path, exc)
        except (OSError, ValueError) as exc:
            logger.debug("Unable to read configuration file %s: %s", self._path, exc)
        return None

    @staticmethod
    def read_legacy_json(path: Path) -> Optional[Dict[str, Any]]:
        if not path_exists(path):
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring legacy configuration %s: %s", path, exc)
            return None
        return data if isinstance(data, dict) else None

    def _render_incremental(self, existing: str, config: ZcfTomlConfig) -> str:
        edits = build_edit_set(config)
        updated = batch_edit_toml(existing, edits)
        updated = update_top_level_toml_fields(
            updated, config["version"], config["lastUpdated"]
        )

        # The patched document must parse back to what was asked for
        parsed = loads(updated)
        expected: List[Edit] = edits + [
            ("version", config["version"]),
            ("lastUpdated", config["lastUpdated"]),
        ]
        for path, value in expected:
            if _lookup(parsed, path) != value:
                raise ConfigEditError(f"'{path}' did not survive the incremental edit")
        return updated

    def write_toml_config(
        self, config: ZcfTomlConfig, preserve_format: bool = True
    ) -> WriteResult:
        """Persist ``config``; never raises.

        An existing file is edited in place so comments and unmanaged keys
        survive. If that fails the whole document is regenerated.
        """
        try:
            self.ensure_directory()
            strategy = "full"
            content: Optional[str] = None
            if preserve_format and path_exists(self._path):
                existing = self._path.read_text(encoding="utf-8")
                try:
                    content = self._render_incremental(existing, config)
                    strategy = "incremental"
                except Exception as exc:
                    logger.debug(
                        "Incremental update of %s failed, rewriting the file: %s",
                        self._path,
                        exc,
                    )
            if content is None:
                content = dumps(dict(config))
            self._path.write_text(content, encoding="utf-8")
            return WriteResult(written=True, strategy=strategy)
        except Exception as exc:
            logger.warning("Could not save configuration to %s: %s", self._path, exc)
            return WriteResult(written=False, error=exc)


__all__ = ["ConfigStorage", "WriteResult", "build_edit_set"]
