"""Compilation API: validate, compile and diff tool configurations."""

from __future__ import annotations

from pathlib import Path

from ..models.config import ToolName
from ._adapters import LocalFilesystemOutputAdapter, LocalFilesystemStateAdapter
from ._compiler import (
    CompileReport,
    Compiler,
    ToolDiff,
    ToolOutput,
    resolve_tools,
)
from ._in_memory import InMemoryOutputAdapter, InMemoryStateAdapter
from ._paths import (
    APP_DIR_NAME,
    default_config_path,
    default_output_path,
    default_output_paths,
    default_state_path,
    user_config_dir,
)
from ._protocols import OutputAdapter, StateAdapter, WriteResult
from ._state import StateTracker


def make_compiler(
    config_dir: Path | None = None,
    state_path: Path | None = None,
    output_paths: dict[ToolName, Path] | None = None,
) -> Compiler:
    """Build a Compiler with local filesystem adapters.

    config_dir: defaults to the platform configuration directory
    state_path: defaults to <config_dir>/multi-agent-config/state/generated.json
    output_paths: per-tool overrides of the default destinations
    """
    base = Path(config_dir) if config_dir is not None else user_config_dir()
    paths = default_output_paths(base)
    if output_paths:
        paths.update({tool: Path(p) for tool, p in output_paths.items()})
    return Compiler(
        outputs=LocalFilesystemOutputAdapter(),
        state=LocalFilesystemStateAdapter(state_path or default_state_path(base)),
        output_paths=paths,
    )


__all__ = [
    "APP_DIR_NAME",
    "CompileReport",
    "Compiler",
    "InMemoryOutputAdapter",
    "InMemoryStateAdapter",
    "LocalFilesystemOutputAdapter",
    "LocalFilesystemStateAdapter",
    "OutputAdapter",
    "StateAdapter",
    "StateTracker",
    "ToolDiff",
    "ToolOutput",
    "WriteResult",
    "default_config_path",
    "default_output_path",
    "default_output_paths",
    "default_state_path",
    "make_compiler",
    "resolve_tools",
    "user_config_dir",
]
