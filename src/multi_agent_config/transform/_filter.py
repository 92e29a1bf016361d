from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.config import ToolName

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from ..models.config import ServerConfig


def filter_servers_for_tool(
    servers: Mapping[str, ServerConfig],
    tool: ToolName,
    default_targets: Sequence[str],
) -> dict[str, ServerConfig]:
    """Select the enabled servers that should be written for *tool*.

    A server whose targets are empty or exactly ["all"] follows the document's
    default targets (["all"] when there are none); an explicit list wins.
    """
    filtered: dict[str, ServerConfig] = {}
    for name, server in servers.items():
        if not server.enabled:
            continue
        if _targets_include(effective_targets(server.targets, default_targets), tool):
            filtered[name] = server
    return filtered


def effective_targets(targets: Sequence[str], default_targets: Sequence[str]) -> list[str]:
    if not targets or list(targets) == [ToolName.ALL.value]:
        return list(default_targets) if default_targets else [ToolName.ALL.value]
    return list(targets)


def _targets_include(targets: Sequence[str], tool: ToolName) -> bool:
    return ToolName.ALL.value in targets or tool.value in targets
