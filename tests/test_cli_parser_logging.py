import importlib
import json
import logging
import sys
from pathlib import Path
from types import ModuleType

import pytest

from zcf.cli.parser import parse_arguments
from zcf.config import ZcfConfigStore, set_default_store
from zcf.core.application import run
from zcf.utils.color_support import color_support


def reload_module(module_name: str) -> ModuleType:
    if module_name in sys.modules:
        del sys.modules[module_name]
    return importlib.import_module(module_name)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    set_default_store(None)

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    force_color = getattr(color_support, "_force_color", None)
    try:
        yield home_dir
    finally:
        for handler in set(root_logger.handlers) - set(handlers):
            handler.close()
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)
        color_support.set_force_color(force_color)
        set_default_store(None)


def test_cli_parser_import_does_not_clear_existing_root_handlers():
    root_logger = logging.getLogger()
    sentinel_handler = logging.NullHandler()
    root_logger.addHandler(sentinel_handler)
    try:
        before_handlers = list(root_logger.handlers)
        reload_module("zcf.cli.parser")
        after_handlers = list(root_logger.handlers)
        assert after_handlers == before_handlers
    finally:
        root_logger.removeHandler(sentinel_handler)


def test_parser_defaults_first_style_as_default():
    args = parse_arguments(["--output-styles", "nekomata-engineer", "default"])
    assert args.output_styles == ["nekomata-engineer", "default"]
    assert args.default_output_style == "nekomata-engineer"
    assert args.force_color is None


def test_parser_requires_default_for_empty_style_list():
    with pytest.raises(SystemExit):
        parse_arguments(["--output-styles"])


def test_parser_rejects_unknown_language():
    with pytest.raises(SystemExit):
        parse_arguments(["--lang", "fr"])


def test_show_prints_defaults_as_json(home, capsys):
    assert run(["--show", "--no-color"]) == 0

    shown = json.loads(capsys.readouterr().out)
    assert shown["general"]["preferredLang"] == "en"
    assert shown["codex"]["enabled"] is False


def test_preference_flags_update_config_dir(home, tmp_path, capsys):
    config_dir = tmp_path / "custom"

    exit_code = run(
        [
            "--config-dir",
            str(config_dir),
            "--lang",
            "zh-CN",
            "--code-type",
            "codex",
            "--show",
            "--no-color",
        ]
    )

    assert exit_code == 0
    shown = json.loads(capsys.readouterr().out)
    assert shown["general"]["preferredLang"] == "zh-CN"
    assert shown["general"]["currentTool"] == "codex"
    assert (config_dir / "config.toml").exists()
    assert not (home / ".ufomiao").exists()


def test_migrate_flag_moves_legacy_file(home):
    legacy = home / ".zcf.json"
    legacy.write_text(json.dumps({"preferredLang": "zh-CN"}), encoding="utf-8")

    assert run(["--migrate", "--no-color"]) == 0

    assert not legacy.exists()
    assert (home / ".ufomiao" / "zcf" / "config.toml").exists()


def test_output_style_flags(home):
    assert run(["--output-styles", "--default-output-style", "none", "--no-color"]) == 0

    config = ZcfConfigStore().read()
    assert config["claudeCode"]["outputStyles"] == []
    assert config["claudeCode"]["defaultOutputStyle"] == "none"
