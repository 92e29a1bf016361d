"""opencode and Claude Code JSON transformers (both read the same shape)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from ..errors import TransformError
from ..models.config import HttpServerConfig, StdioServerConfig, ToolName
from ..models.targets import OpencodeConfig, OpencodeLocalServer, OpencodeRemoteServer
from ._filter import filter_servers_for_tool

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..models.config import ServerConfig


def local_server(server: StdioServerConfig) -> OpencodeLocalServer:
    return OpencodeLocalServer(
        command=[server.command, *server.args],
        env=server.env,
        enabled=server.enabled,
    )


def remote_server(server: HttpServerConfig) -> OpencodeRemoteServer:
    headers = None
    if server.bearer_token is not None:
        headers = {"Authorization": f"Bearer {server.bearer_token}"}
    return OpencodeRemoteServer(url=server.url, headers=headers, enabled=server.enabled)


def build_opencode_config(servers: Mapping[str, ServerConfig]) -> OpencodeConfig:
    entries: dict[str, OpencodeLocalServer | OpencodeRemoteServer] = {}
    for name, server in servers.items():
        if isinstance(server, StdioServerConfig):
            entries[name] = local_server(server)
        elif isinstance(server, HttpServerConfig):
            entries[name] = remote_server(server)
        else:
            raise TypeError(f"Unsupported server type: {type(server)}")
    return OpencodeConfig(mcp=entries)


def transform_for_opencode(
    servers: Mapping[str, ServerConfig], default_targets: Sequence[str]
) -> str:
    return _render(servers, default_targets, ToolName.OPENCODE)


def transform_for_claude_code(
    servers: Mapping[str, ServerConfig], default_targets: Sequence[str]
) -> str:
    return _render(servers, default_targets, ToolName.CLAUDE_CODE)


def _render(
    servers: Mapping[str, ServerConfig], default_targets: Sequence[str], tool: ToolName
) -> str:
    filtered = filter_servers_for_tool(servers, tool, default_targets)
    config = build_opencode_config(filtered)
    try:
        return json.dumps(config.model_dump(exclude_none=True), indent=2) + "\n"
    except (TypeError, ValueError) as e:
        raise TransformError(tool.value, f"JSON serialization error: {e}") from e
