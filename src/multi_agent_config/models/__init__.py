from .config import (
    VALID_TOOL_NAMES,
    HttpServerConfig,
    McpSection,
    MultiAgentConfig,
    ServerConfig,
    Settings,
    StdioServerConfig,
    ToolName,
)
from .state import GeneratedFile, StateFile
from .targets import (
    CodexConfig,
    CodexHttpServer,
    CodexStdioServer,
    CursorConfig,
    CursorServer,
    OpencodeConfig,
    OpencodeLocalServer,
    OpencodeRemoteServer,
)

__all__ = [
    "VALID_TOOL_NAMES",
    "CodexConfig",
    "CodexHttpServer",
    "CodexStdioServer",
    "CursorConfig",
    "CursorServer",
    "GeneratedFile",
    "HttpServerConfig",
    "McpSection",
    "MultiAgentConfig",
    "OpencodeConfig",
    "OpencodeLocalServer",
    "OpencodeRemoteServer",
    "ServerConfig",
    "Settings",
    "StateFile",
    "StdioServerConfig",
    "ToolName",
]
