# zcf/config/types.py

from typing import Any, Dict, List, TypedDict


class GeneralConfig(TypedDict, total=False):
    preferredLang: str
    templateLang: str
    aiOutputLang: str
    currentTool: str


class ClaudeCodeConfig(TypedDict, total=False):
    enabled: bool
    outputStyles: List[str]
    defaultOutputStyle: str
    installType: str
    currentProfile: str
    profiles: Dict[str, Any]
    version: str


class CodexConfig(TypedDict, total=False):
    enabled: bool
    systemPromptStyle: str


class ZcfTomlConfig(TypedDict, total=False):
    version: str
    lastUpdated: str
    general: GeneralConfig
    claudeCode: ClaudeCodeConfig
    codex: CodexConfig


class PartialZcfTomlConfig(TypedDict, total=False):
    version: str
    general: GeneralConfig
    claudeCode: ClaudeCodeConfig
    codex: CodexConfig


class ZcfConfig(TypedDict, total=False):
    """Flat record written by releases that predate the TOML file."""

    version: str
    preferredLang: str
    templateLang: str
    aiOutputLang: str
    outputStyles: List[str]
    defaultOutputStyle: str
    codeToolType: str
    lastUpdated: str
