"""Transformation of the unified server set into tool-native documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.config import ToolName
from ._codex import build_codex_config, transform_for_codex
from ._cursor import build_cursor_config, transform_for_cursor
from ._filter import effective_targets, filter_servers_for_tool
from ._opencode import build_opencode_config, transform_for_claude_code, transform_for_opencode

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from ..models.config import ServerConfig

_TRANSFORMERS: dict[ToolName, Callable[[Mapping[str, ServerConfig], Sequence[str]], str]] = {
    ToolName.CLAUDE_CODE: transform_for_claude_code,
    ToolName.CURSOR: transform_for_cursor,
    ToolName.OPENCODE: transform_for_opencode,
    ToolName.CODEX: transform_for_codex,
}


def transform_for_tool(
    tool: ToolName,
    servers: Mapping[str, ServerConfig],
    default_targets: Sequence[str],
) -> str:
    """Filter and render the configuration file content for a single tool.

    Raises:
        ValueError: tool is the "all" wildcard, which is not a compile target.
        TransformError: serialization failed.
    """
    transformer = _TRANSFORMERS.get(tool)
    if transformer is None:
        raise ValueError(f"Cannot compile for {tool.value!r}; pick a concrete tool")
    return transformer(servers, default_targets)


__all__ = [
    "build_codex_config",
    "build_cursor_config",
    "build_opencode_config",
    "effective_targets",
    "filter_servers_for_tool",
    "transform_for_claude_code",
    "transform_for_codex",
    "transform_for_cursor",
    "transform_for_opencode",
    "transform_for_tool",
]
