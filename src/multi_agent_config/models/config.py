"""Unified configuration document: [settings], [env] and [mcp.servers]."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


class ToolName(str, Enum):
    CLAUDE_CODE = "claude-code"
    CURSOR = "cursor"
    OPENCODE = "opencode"
    CODEX = "codex"
    ALL = "all"

    @classmethod
    def concrete_tools(cls) -> list[ToolName]:
        """Every tool that can be compiled for (everything except the wildcard)."""
        return [cls.CLAUDE_CODE, cls.CURSOR, cls.OPENCODE, cls.CODEX]

    @classmethod
    def parse(cls, value: str) -> ToolName | None:
        try:
            return cls(value)
        except ValueError:
            return None

    def __str__(self) -> str:
        return self.value


VALID_TOOL_NAMES = tuple(t.value for t in ToolName)


def _default_targets() -> list[str]:
    return ["cursor", "opencode", "codex"]


class Settings(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    version: str
    default_targets: list[str] = Field(default_factory=_default_targets)


class StdioServerConfig(BaseModel):
    """A local MCP server launched as a subprocess."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    transport: Literal["stdio"] = Field("stdio", exclude=True)
    command: str
    args: list[str] = []
    enabled: bool = True
    targets: list[str] = ["all"]
    env: dict[str, str] | None = None
    # Tool-specific fields
    disabled: bool | None = None
    auto_approve: list[str] | None = Field(None, alias="autoApprove")
    startup_timeout_sec: int | None = None
    tool_timeout_sec: int | None = None


class HttpServerConfig(BaseModel):
    """A remote MCP server reached over HTTP(S)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    transport: Literal["http"] = Field("http", exclude=True)
    url: str
    bearer_token: str | None = None
    enabled: bool = True
    targets: list[str] = ["all"]


def _server_kind(value: Any) -> str | None:
    # TOML tables carry no tag; the shape decides.
    if isinstance(value, dict):
        if "command" in value:
            return "stdio"
        if "url" in value:
            return "http"
        return None
    return getattr(value, "transport", None)


ServerConfig = Annotated[
    Annotated[StdioServerConfig, Tag("stdio")] | Annotated[HttpServerConfig, Tag("http")],
    Discriminator(
        _server_kind,
        custom_error_type="server_kind",
        custom_error_message="server must define either 'command' (stdio) or 'url' (http)",
    ),
]


class McpSection(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    servers: dict[str, ServerConfig]


class MultiAgentConfig(BaseModel):
    """Root of the unified TOML document."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    settings: Settings | None = None
    env: dict[str, str] | None = None
    mcp: McpSection

    @property
    def default_targets(self) -> list[str]:
        """Document-wide default targets, empty when [settings] is absent."""
        if self.settings is None:
            return []
        return list(self.settings.default_targets)
