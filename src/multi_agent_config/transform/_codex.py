from __future__ import annotations

from typing import TYPE_CHECKING

import tomli_w

from ..errors import TransformError
from ..models.config import HttpServerConfig, StdioServerConfig, ToolName
from ..models.targets import CodexConfig, CodexHttpServer, CodexStdioServer
from ._filter import filter_servers_for_tool

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..models.config import ServerConfig


def build_codex_config(servers: Mapping[str, ServerConfig]) -> CodexConfig:
    entries: dict[str, CodexStdioServer | CodexHttpServer] = {}
    for name, server in servers.items():
        if isinstance(server, StdioServerConfig):
            entries[name] = CodexStdioServer(
                command=server.command,
                args=list(server.args) or None,
                startup_timeout_sec=server.startup_timeout_sec,
                tool_timeout_sec=server.tool_timeout_sec,
                env=server.env,
            )
        elif isinstance(server, HttpServerConfig):
            # Codex takes the token as-is, no header translation.
            entries[name] = CodexHttpServer(url=server.url, bearer_token=server.bearer_token)
        else:
            raise TypeError(f"Unsupported server type: {type(server)}")
    return CodexConfig(mcp_servers=entries)


def transform_for_codex(
    servers: Mapping[str, ServerConfig], default_targets: Sequence[str]
) -> str:
    """Render Codex's TOML with one [mcp_servers.<name>] table per server."""
    filtered = filter_servers_for_tool(servers, ToolName.CODEX, default_targets)
    config = build_codex_config(filtered)
    try:
        return tomli_w.dumps(config.model_dump(exclude_none=True))
    except (TypeError, ValueError) as e:
        raise TransformError(ToolName.CODEX.value, f"TOML serialization error: {e}") from e
