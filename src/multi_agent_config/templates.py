from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .errors import ConfigExistsError
from .files import create_backup, write_file_atomic

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger(__name__)

TEMPLATE_CONFIG = """\
# multi-agent-config: one MCP server list for every AI coding tool

[settings]
version = "1.0"
default_targets = ["cursor", "opencode", "codex"]

# Variables defined here can be referenced as {VAR_NAME}.
# Shell environment variables can be referenced as ${VAR_NAME}.
[env]
# GITHUB_TOKEN = "${GITHUB_PERSONAL_ACCESS_TOKEN}"
# API_BASE = "https://api.example.com"

# Each server targets specific tools or "all".

[mcp.servers.example-stdio]
command = "npx"
args = ["-y", "@modelcontextprotocol/server-example"]
enabled = true
targets = ["all"]

# [mcp.servers.example-stdio.env]
# API_KEY = "{GITHUB_TOKEN}"

# Cursor-specific server with auto-approve:
# [mcp.servers.cursor-specific]
# command = "npx"
# args = ["-y", "package"]
# targets = ["cursor"]
# disabled = false
# autoApprove = ["tool_name"]

# Codex-specific server with timeouts:
# [mcp.servers.codex-specific]
# command = "node"
# args = ["server.js"]
# targets = ["codex"]
# startup_timeout_sec = 30
# tool_timeout_sec = 60

# Remote HTTP server:
# [mcp.servers.remote-server]
# url = "https://api.example.com/mcp"
# bearer_token = "{API_TOKEN}"
# targets = ["opencode", "codex", "claude-code"]
"""


def init_config(path: Path, force: bool = False) -> Path | None:
    """Write the starter configuration to *path*.

    Returns the backup path when an existing file was replaced (force=True).

    Raises:
        ConfigExistsError: path exists and force is False.
    """
    backup = None
    if path.exists():
        if not force:
            raise ConfigExistsError(path)
        backup = create_backup(path)
        logger.info("config_backed_up", path=str(path), backup=str(backup))
    write_file_atomic(path, TEMPLATE_CONFIG)
    return backup
