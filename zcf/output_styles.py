"""Output-style templates for Claude Code and the preferences that record them."""

from __future__ import annotations

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .config.store import ZcfConfigStore, get_default_store
from .constants import ZcfPaths

logger = logging.getLogger(__name__)

NO_OUTPUT_STYLE = "none"


@dataclass(frozen=True)
class OutputStyle:
    id: str
    is_custom: bool
    file_path: Optional[str] = None


OUTPUT_STYLES: Sequence[OutputStyle] = (
    # Custom styles ship a template file
    OutputStyle("engineer-professional", True, "engineer-professional.md"),
    OutputStyle("nekomata-engineer", True, "nekomata-engineer.md"),
    OutputStyle("laowang-engineer", True, "laowang-engineer.md"),
    OutputStyle("ojousama-engineer", True, "ojousama-engineer.md"),
    OutputStyle("rem-engineer", True, "rem-engineer.md"),
    OutputStyle("leibus-engineer", True, "leibus-engineer.md"),
    # Built into Claude Code
    OutputStyle("default", False),
    OutputStyle("explanatory", False),
    OutputStyle("learning", False),
)

# Personality files written by releases that predate output styles
LEGACY_FILES = (
    "personality.md",
    "rules.md",
    "technical-guides.md",
    "mcp.md",
    "language.md",
)


def get_available_output_styles() -> List[OutputStyle]:
    return list(OUTPUT_STYLES)


def _find_style(style_id: str) -> Optional[OutputStyle]:
    return next((style for style in OUTPUT_STYLES if style.id == style_id), None)


def copy_output_styles(
    selected_styles: Iterable[str], templates_dir: Path, claude_dir: Path
) -> List[Path]:
    """Copy the templates of the selected custom styles into ``claude_dir``.

    Built-in or unknown styles and missing templates are skipped.
    """
    output_dir = claude_dir / "output-styles"
    output_dir.mkdir(parents=True, exist_ok=True)

    copied: List[Path] = []
    for style_id in selected_styles:
        style = _find_style(style_id)
        if style is None or not style.is_custom or not style.file_path:
            continue
        source = templates_dir / style.file_path
        if not source.exists():
            logger.debug("No template for output style %s at %s", style_id, source)
            continue
        destination = output_dir / style.file_path
        shutil.copyfile(source, destination)
        copied.append(destination)
    return copied


def _read_settings(settings_file: Path) -> Dict[str, Any]:
    if not settings_file.exists():
        return {}
    try:
        data = json.loads(settings_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", settings_file, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _write_settings(settings_file: Path, settings: Dict[str, Any]) -> None:
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    settings_file.write_text(
        json.dumps(settings, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
    )


def set_global_default_output_style(style_id: str, settings_file: Path) -> None:
    settings = _read_settings(settings_file)
    settings["outputStyle"] = style_id
    _write_settings(settings_file, settings)


def clear_global_output_style(settings_file: Path) -> None:
    settings = _read_settings(settings_file)
    settings.pop("outputStyle", None)
    _write_settings(settings_file, settings)


def has_legacy_personality_files(claude_dir: Path) -> bool:
    return any((claude_dir / name).exists() for name in LEGACY_FILES)


def cleanup_legacy_personality_files(claude_dir: Path) -> List[Path]:
    removed: List[Path] = []
    for name in LEGACY_FILES:
        path = claude_dir / name
        try:
            if path.exists():
                path.unlink()
                removed.append(path)
        except OSError as exc:
            logger.warning("Failed to remove legacy file '%s': %s", path, exc)
    if removed:
        logger.info(
            "Removed legacy personality files: %s", ", ".join(str(p) for p in removed)
        )
    return removed


def apply_output_style_selection(
    selected_styles: Sequence[str],
    default_style: str,
    templates_dir: Optional[Path] = None,
    store: Optional[ZcfConfigStore] = None,
    paths: Optional[ZcfPaths] = None,
) -> None:
    """Install a chosen set of output styles and remember the choice.

    Templates are copied only when ``templates_dir`` is given.
    ``default_style == "none"`` with no selected styles clears the global
    output style instead.
    """
    store = store or get_default_store()
    paths = paths or store.paths

    if has_legacy_personality_files(paths.claude_dir):
        cleanup_legacy_personality_files(paths.claude_dir)

    if not selected_styles and default_style == NO_OUTPUT_STYLE:
        clear_global_output_style(paths.settings_file)
        store.update({"outputStyles": [], "defaultOutputStyle": NO_OUTPUT_STYLE})
        return

    if templates_dir is not None:
        copy_output_styles(selected_styles, templates_dir, paths.claude_dir)
    set_global_default_output_style(default_style, paths.settings_file)
    store.update(
        {"outputStyles": list(selected_styles), "defaultOutputStyle": default_style}
    )
    logger.info(
        "Output styles installed: %s (default: %s)",
        ", ".join(selected_styles) or "-",
        default_style,
    )


__all__ = [
    "NO_OUTPUT_STYLE",
    "OutputStyle",
    "OUTPUT_STYLES",
    "LEGACY_FILES",
    "get_available_output_styles",
    "copy_output_styles",
    "set_global_default_output_style",
    "clear_global_output_style",
    "has_legacy_personality_files",
    "cleanup_legacy_personality_files",
    "apply_output_style_selection",
]
