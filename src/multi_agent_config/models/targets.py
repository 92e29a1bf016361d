"""Tool-native MCP server shapes written by the transformers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CursorServer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    command: str
    args: list[str] = []
    env: dict[str, str] | None = None
    disabled: bool | None = None
    auto_approve: list[str] | None = Field(None, alias="autoApprove")


class CursorConfig(BaseModel):
    """Cursor mcp.json. Cursor only knows local (stdio) servers."""

    model_config = ConfigDict(populate_by_name=True)
    mcp_servers: dict[str, CursorServer] = Field(default_factory=dict, alias="mcpServers")


class OpencodeLocalServer(BaseModel):
    type: Literal["local"] = "local"
    command: list[str]  # [executable, *args]
    env: dict[str, str] | None = None
    enabled: bool = True


class OpencodeRemoteServer(BaseModel):
    type: Literal["remote"] = "remote"
    url: str
    headers: dict[str, str] | None = None
    enabled: bool = True


class OpencodeConfig(BaseModel):
    """opencode mcp.json; Claude Code reads the same shape."""

    mcp: dict[str, OpencodeLocalServer | OpencodeRemoteServer] = {}


class CodexStdioServer(BaseModel):
    command: str
    args: list[str] | None = None
    startup_timeout_sec: int | None = None
    tool_timeout_sec: int | None = None
    env: dict[str, str] | None = None


class CodexHttpServer(BaseModel):
    url: str
    bearer_token: str | None = None


class CodexConfig(BaseModel):
    """Codex mcp_config.toml."""

    mcp_servers: dict[str, CodexStdioServer | CodexHttpServer] = {}
