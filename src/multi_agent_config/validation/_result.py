from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass
class ValidationIssue:
    """One problem found in a unified configuration document.

    Errors stop a compile; warnings are reported and compilation continues.

    Attributes:
        level: "error" or "warning".
        path: Dotted location in the TOML document, e.g. "settings.version" or
            "mcp.servers.github.targets". Empty for document-wide findings.
        message: Human-readable description, printed after the path.
    """

    level: Literal["error", "warning"]
    path: str
    message: str

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


@dataclass
class ValidationResult:
    """Every issue from one validate_config run, in rule order.

    The document compiles when ``valid`` is true; ``errors`` become the issue
    list of a ConfigValidationError and ``warnings`` are logged.
    """

    issues: list[ValidationIssue]

    @property
    def valid(self) -> bool:
        return not any(i.level == "error" for i in self.issues)

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "warning"]

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.level == "error"]
