from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ..models.config import (
    VALID_TOOL_NAMES,
    HttpServerConfig,
    StdioServerConfig,
    ToolName,
)
from ._result import ValidationIssue, ValidationResult

if TYPE_CHECKING:
    from ..models.config import MultiAgentConfig, Settings

_VERSION = re.compile(r"\d+\.\d+(\.\d+)?")
SUPPORTED_VERSION_PREFIX = "1.0"
_URL_SCHEMES = ("http://", "https://")


def validate_config(config: MultiAgentConfig) -> ValidationResult:
    issues: list[ValidationIssue] = []

    if config.settings is not None:
        _validate_settings(config.settings, issues)

    servers = config.mcp.servers
    if not servers:
        issues.append(
            ValidationIssue(
                "error",
                "mcp.servers",
                "At least one MCP server must be defined in [mcp.servers]",
            )
        )

    for name, server in servers.items():
        ctx = f"mcp.servers.{name}"
        if isinstance(server, StdioServerConfig):
            if not server.command.strip():
                issues.append(ValidationIssue("error", ctx, "command cannot be empty"))
        elif isinstance(server, HttpServerConfig):
            if not server.url.startswith(_URL_SCHEMES):
                issues.append(
                    ValidationIssue(
                        "error",
                        ctx,
                        f"URL must start with 'http://' or 'https://', got '{server.url}'",
                    )
                )
            if ToolName.CURSOR.value in server.targets:
                issues.append(
                    ValidationIssue(
                        "warning",
                        f"{ctx}.targets",
                        "Cursor does not support HTTP servers; it will be skipped for cursor",
                    )
                )

        for target in server.targets:
            if target not in VALID_TOOL_NAMES:
                issues.append(
                    ValidationIssue("error", f"{ctx}.targets", _invalid_tool_message(target))
                )

        for key in server.model_extra or {}:
            issues.append(
                ValidationIssue("warning", f"{ctx}.{key}", f"Unknown field '{key}' is ignored")
            )

    return ValidationResult(issues=issues)


def _validate_settings(settings: Settings, issues: list[ValidationIssue]) -> None:
    version = settings.version
    if not _VERSION.fullmatch(version):
        issues.append(
            ValidationIssue(
                "error",
                "settings.version",
                f"Invalid version format '{version}', expected semver (e.g., '1.0' or '1.0.0')",
            )
        )
    if not version.startswith(SUPPORTED_VERSION_PREFIX):
        issues.append(
            ValidationIssue(
                "error",
                "settings.version",
                f"Unsupported version '{version}', only '{SUPPORTED_VERSION_PREFIX}' is currently supported",
            )
        )

    seen: set[str] = set()
    for target in settings.default_targets:
        if target not in VALID_TOOL_NAMES:
            issues.append(
                ValidationIssue(
                    "error", "settings.default_targets", _invalid_tool_message(target)
                )
            )
        if target in seen:
            issues.append(
                ValidationIssue(
                    "error", "settings.default_targets", f"Duplicate target '{target}'"
                )
            )
        seen.add(target)


def _invalid_tool_message(target: str) -> str:
    return f"Invalid tool name '{target}', must be one of: {', '.join(VALID_TOOL_NAMES)}"
