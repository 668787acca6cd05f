"""zcf - zero-config workflow setup for Claude Code and Codex."""

__version__ = "1.0.0"
