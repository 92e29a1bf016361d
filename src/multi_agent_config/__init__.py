"""Compile one unified MCP server configuration into tool-specific config files."""

from .compiler import (
    CompileReport,
    Compiler,
    StateTracker,
    ToolDiff,
    ToolOutput,
    make_compiler,
)
from .errors import (
    CircularReferenceError,
    ConfigExistsError,
    ConfigFileNotFoundError,
    ConfigPermissionError,
    ConfigValidationError,
    ExitCode,
    ExpansionError,
    FileOperationError,
    MaxDepthExceededError,
    MultiAgentConfigError,
    ParseError,
    PartialCompileError,
    TransformError,
    exit_code_for,
    suggestion_for,
)
from .expansion import MAX_EXPANSION_DEPTH, Expander, expand_config
from .files import (
    create_backup,
    generate_diff,
    generate_file_diff,
    hash_bytes,
    hash_file,
    write_file_atomic,
)
from .loaders import load_and_expand_config, load_config, parse_config
from .models import (
    GeneratedFile,
    HttpServerConfig,
    MultiAgentConfig,
    ServerConfig,
    Settings,
    StateFile,
    StdioServerConfig,
    ToolName,
)
from .templates import init_config
from .transform import (
    filter_servers_for_tool,
    transform_for_claude_code,
    transform_for_codex,
    transform_for_cursor,
    transform_for_opencode,
    transform_for_tool,
)
from .validation import ValidationIssue, ValidationResult, validate_config

__all__ = [
    "MAX_EXPANSION_DEPTH",
    "CircularReferenceError",
    "CompileReport",
    "Compiler",
    "ConfigExistsError",
    "ConfigFileNotFoundError",
    "ConfigPermissionError",
    "ConfigValidationError",
    "ExitCode",
    "Expander",
    "ExpansionError",
    "FileOperationError",
    "GeneratedFile",
    "HttpServerConfig",
    "MaxDepthExceededError",
    "MultiAgentConfig",
    "MultiAgentConfigError",
    "ParseError",
    "PartialCompileError",
    "ServerConfig",
    "Settings",
    "StateFile",
    "StateTracker",
    "StdioServerConfig",
    "ToolDiff",
    "ToolName",
    "ToolOutput",
    "TransformError",
    "ValidationIssue",
    "ValidationResult",
    "create_backup",
    "exit_code_for",
    "expand_config",
    "filter_servers_for_tool",
    "generate_diff",
    "generate_file_diff",
    "hash_bytes",
    "hash_file",
    "init_config",
    "load_and_expand_config",
    "load_config",
    "make_compiler",
    "parse_config",
    "suggestion_for",
    "transform_for_claude_code",
    "transform_for_codex",
    "transform_for_cursor",
    "transform_for_opencode",
    "transform_for_tool",
    "validate_config",
    "write_file_atomic",
]
