from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from pathlib import Path

    from .validation import ValidationIssue

FileOperation = Literal["io", "backup", "create_dir", "permission", "persist"]


class ExitCode(IntEnum):
    """Process exit codes, one per failure class."""

    SUCCESS = 0
    GENERAL = 1
    VALIDATION = 2
    FILE_SYSTEM = 3
    PARTIAL_FAILURE = 4


class MultiAgentConfigError(Exception):
    """Base class for every error raised by the compilation pipeline."""


class ConfigFileNotFoundError(MultiAgentConfigError):
    """Raised when the unified configuration file does not exist.

    Attributes:
        path: The configuration path that was looked up.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Configuration file not found: {path}")


class ConfigPermissionError(MultiAgentConfigError):
    """Raised when the configuration file exists but cannot be read."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Permission denied: {path}")


class ConfigExistsError(MultiAgentConfigError):
    """Raised by init when a configuration file is already present."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Configuration file already exists: {path}")


class ParseError(MultiAgentConfigError):
    """Raised when the TOML document is malformed or does not match the schema.

    Attributes:
        message: Parser message without location.
        line: 1-based line of the syntax error, or 0 when unknown.
    """

    def __init__(self, message: str, line: int = 0) -> None:
        self.message = message
        self.line = line
        super().__init__(f"Parse error at line {line}: {message}")


class ConfigValidationError(MultiAgentConfigError):
    """Raised when a document fails validation. Carries every error found."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(f"{len(issues)} validation error(s) found")


class ExpansionError(MultiAgentConfigError):
    """Base class for variable expansion failures."""


class CircularReferenceError(ExpansionError):
    def __init__(self, var_name: str, depth: int) -> None:
        self.var_name = var_name
        self.depth = depth
        super().__init__(
            f"Circular reference detected for variable '{var_name}' at depth {depth}"
        )


class MaxDepthExceededError(ExpansionError):
    def __init__(self, current_depth: int, max_depth: int) -> None:
        self.current_depth = current_depth
        self.max_depth = max_depth
        super().__init__(
            f"Maximum expansion depth exceeded: {current_depth} (max {max_depth})"
        )


class TransformError(MultiAgentConfigError):
    """Raised when a tool-native document cannot be produced or serialized."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        super().__init__(f"Failed to transform configuration for {tool}: {message}")


class FileOperationError(MultiAgentConfigError):
    """Raised when reading, backing up or writing an output file fails.

    Attributes:
        path: The file or directory involved.
        operation: Which step failed (io, backup, create_dir, permission, persist).
    """

    def __init__(
        self, message: str, path: Path | None = None, operation: FileOperation = "io"
    ) -> None:
        self.path = path
        self.operation = operation
        super().__init__(message)


class PartialCompileError(MultiAgentConfigError):
    """Raised when some tool outputs were written and others failed.

    Attributes:
        written: Tool names whose output was written.
        failures: Tool name -> error for every tool that failed.
    """

    def __init__(self, written: list[str], failures: dict[str, Exception]) -> None:
        self.written = written
        self.failures = failures
        failed = ", ".join(sorted(failures))
        super().__init__(
            f"Compiled {len(written)} configuration(s); failed for: {failed}"
        )


def exit_code_for(exc: BaseException) -> ExitCode:
    """Map an exception to the exit code a calling script can branch on."""
    if isinstance(exc, ConfigValidationError):
        return ExitCode.VALIDATION
    if isinstance(exc, PartialCompileError):
        return ExitCode.PARTIAL_FAILURE
    if isinstance(
        exc,
        (
            ConfigFileNotFoundError,
            ConfigPermissionError,
            ConfigExistsError,
            FileOperationError,
        ),
    ):
        return ExitCode.FILE_SYSTEM
    return ExitCode.GENERAL


def suggestion_for(exc: BaseException) -> str | None:
    """One actionable remediation line for a failure, or None."""
    if isinstance(exc, ConfigFileNotFoundError):
        return "Run 'multi-agent-config init' to create a configuration file, or pass --config."
    if isinstance(exc, ConfigPermissionError):
        return f"Check that the current user can read {exc.path}."
    if isinstance(exc, ConfigExistsError):
        return "Use --force to overwrite the existing file (a .backup copy is kept)."
    if isinstance(exc, ParseError):
        if exc.line:
            return f"Fix the TOML syntax near line {exc.line}."
        return "Check that [mcp.servers] is present and every field has the right type."
    if isinstance(exc, ConfigValidationError):
        return "Fix the listed problems, then run 'multi-agent-config validate' again."
    if isinstance(exc, CircularReferenceError):
        return f"Remove the cycle involving '{exc.var_name}' in the [env] section."
    if isinstance(exc, MaxDepthExceededError):
        return "Flatten nested {VAR} references in the [env] section."
    if isinstance(exc, TransformError):
        return "Check the server definitions for values the target format cannot represent."
    if isinstance(exc, PartialCompileError):
        return "Fix the failing destinations and run compile again; written files are up to date."
    if isinstance(exc, FileOperationError):
        if exc.operation in ("create_dir", "permission"):
            return "Check the permissions of the destination directory."
        return "Check free disk space and that the destination is writable."
    return None
