from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.config import MultiAgentConfig

from ._config import validate_config as _validate_config
from ._result import ValidationIssue, ValidationResult


def validate_config(config: MultiAgentConfig) -> ValidationResult:
    """Validate an expanded configuration document.

    Every rule runs; all errors and warnings are collected in one result.
    """
    return _validate_config(config)


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "validate_config",
]
