"""Platform-conventional locations for the unified config, state and tool outputs."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ..models.config import ToolName

if TYPE_CHECKING:
    from collections.abc import Mapping

APP_DIR_NAME = "multi-agent-config"

_TOOL_RELATIVE_PATHS: dict[ToolName, tuple[str, ...]] = {
    ToolName.CURSOR: (
        "Cursor",
        "User",
        "globalStorage",
        "saoudrizwan.claude-dev",
        "settings",
        "mcp.json",
    ),
    ToolName.OPENCODE: ("opencode", "mcp.json"),
    ToolName.CODEX: ("codex", "mcp_config.toml"),
    ToolName.CLAUDE_CODE: ("claude", "mcp.json"),
}


def user_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Per-user configuration directory.

    XDG_CONFIG_HOME (or ~/.config) on Linux, ~/Library/Application Support on
    macOS, %APPDATA% on Windows.
    """
    env = os.environ if environ is None else environ
    home = Path.home()
    if sys.platform == "win32":
        return Path(env.get("APPDATA") or home / "AppData" / "Roaming")
    if sys.platform == "darwin":
        return home / "Library" / "Application Support"
    return Path(env.get("XDG_CONFIG_HOME") or home / ".config")


def default_config_path(config_dir: Path | None = None) -> Path:
    return (config_dir or user_config_dir()) / APP_DIR_NAME / "config.toml"


def default_state_path(config_dir: Path | None = None) -> Path:
    return (config_dir or user_config_dir()) / APP_DIR_NAME / "state" / "generated.json"


def default_output_path(tool: ToolName, config_dir: Path | None = None) -> Path:
    parts = _TOOL_RELATIVE_PATHS.get(tool)
    if parts is None:
        raise ValueError(f"No output path for {tool.value!r}")
    return (config_dir or user_config_dir()).joinpath(*parts)


def default_output_paths(config_dir: Path | None = None) -> dict[ToolName, Path]:
    base = config_dir or user_config_dir()
    return {tool: default_output_path(tool, base) for tool in ToolName.concrete_tools()}
