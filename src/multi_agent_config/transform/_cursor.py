from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from ..errors import TransformError
from ..models.config import HttpServerConfig, StdioServerConfig, ToolName
from ..models.targets import CursorConfig, CursorServer
from ._filter import filter_servers_for_tool

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..models.config import ServerConfig

logger = structlog.get_logger(__name__)


def build_cursor_config(servers: Mapping[str, ServerConfig]) -> CursorConfig:
    """Map already-filtered servers to Cursor's shape, dropping HTTP servers."""
    cursor_servers: dict[str, CursorServer] = {}
    for name, server in servers.items():
        if isinstance(server, HttpServerConfig):
            logger.debug("http_server_skipped", tool="cursor", server=name)
            continue
        if not isinstance(server, StdioServerConfig):
            raise TypeError(f"Unsupported server type: {type(server)}")
        cursor_servers[name] = CursorServer(
            command=server.command,
            args=list(server.args),
            env=server.env,
            disabled=server.disabled,
            auto_approve=server.auto_approve,
        )
    return CursorConfig(mcp_servers=cursor_servers)


def transform_for_cursor(
    servers: Mapping[str, ServerConfig], default_targets: Sequence[str]
) -> str:
    """Render Cursor's mcp.json for the servers targeting cursor."""
    filtered = filter_servers_for_tool(servers, ToolName.CURSOR, default_targets)
    config = build_cursor_config(filtered)
    try:
        return json.dumps(config.model_dump(by_alias=True, exclude_none=True), indent=2) + "\n"
    except (TypeError, ValueError) as e:
        raise TransformError(ToolName.CURSOR.value, f"JSON serialization error: {e}") from e
