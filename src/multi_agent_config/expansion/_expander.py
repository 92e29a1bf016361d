"""Variable expansion for ${VAR} (process environment) and {VAR} ([env] section)."""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING

from ..errors import CircularReferenceError, MaxDepthExceededError
from ..models.config import HttpServerConfig, StdioServerConfig

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ..models.config import MultiAgentConfig

MAX_EXPANSION_DEPTH = 10

_SHELL_VAR = re.compile(r"\$\{([^}]+)\}")
# {NAME} not preceded by "$"; shell references are gone by the time this runs
# but a literal "$" before a brace must not be treated as config-local syntax.
_ENV_VAR = re.compile(r"(?<!\$)\{([^{}]+)\}")


class Expander:
    """Resolves variable references against two fixed lookup tables.

    The process environment is snapshotted when the expander is built, so every
    value expanded during one run sees the same environment.

        expander = Expander.from_environ(config.env or {})
        value = expander.expand("{API_BASE}/v1?key=${API_KEY}")
        expander.warnings  # undefined references, in encounter order
    """

    def __init__(self, env_section: Mapping[str, str], shell_env: Mapping[str, str]) -> None:
        self._env_section = dict(env_section)
        self._shell_env = dict(shell_env)
        self._warnings: list[str] = []

    @classmethod
    def from_environ(
        cls, env_section: Mapping[str, str], environ: Mapping[str, str] | None = None
    ) -> Expander:
        return cls(env_section, os.environ if environ is None else environ)

    @property
    def warnings(self) -> list[str]:
        return list(self._warnings)

    def clear_warnings(self) -> None:
        self._warnings.clear()

    def expand(self, value: str) -> str:
        """Shell pass first, then the config-local pass.

        An undefined name is reported once per call however often it appears.
        """
        warned: set[str] = set()
        return self.expand_env_vars(self.expand_shell_vars(value, warned), warned=warned)

    def expand_shell_vars(self, value: str, warned: set[str] | None = None) -> str:
        """Replace ${NAME} with process environment values. Never fails."""
        if warned is None:
            warned = set()

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in self._shell_env:
                return self._shell_env[name]
            self._warn(f"Shell variable '{name}' is undefined", warned)
            return ""

        return _SHELL_VAR.sub(replace, value)

    def expand_env_vars(
        self,
        value: str,
        depth: int = 0,
        visiting: set[str] | None = None,
        warned: set[str] | None = None,
    ) -> str:
        """Replace {NAME} with [env] values, resolving each value recursively.

        Raises:
            CircularReferenceError: A name is referenced from inside its own expansion.
            MaxDepthExceededError: Resolution nests MAX_EXPANSION_DEPTH levels deep.
        """
        if depth >= MAX_EXPANSION_DEPTH:
            raise MaxDepthExceededError(depth, MAX_EXPANSION_DEPTH)
        if visiting is None:
            visiting = set()
        if warned is None:
            warned = set()

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in visiting:
                raise CircularReferenceError(name, depth)
            if name not in self._env_section:
                self._warn(f"Config variable '{name}' is undefined", warned)
                return ""
            # Only names on the active resolution path are marked, so sibling
            # references to the same name stay legal.
            visiting.add(name)
            try:
                resolved = self.expand_shell_vars(self._env_section[name], warned)
                return self.expand_env_vars(resolved, depth + 1, visiting, warned)
            finally:
                visiting.discard(name)

        return _ENV_VAR.sub(replace, value)

    def _warn(self, message: str, warned: set[str]) -> None:
        if message not in warned:
            warned.add(message)
            self._warnings.append(message)


def expand_config(config: MultiAgentConfig, expander: Expander) -> MultiAgentConfig:
    """Return a copy of *config* with every substitutable server field expanded.

    Expanded fields: command, args, env values (stdio); url, bearer_token (http).
    """
    servers = {}
    for name, server in config.mcp.servers.items():
        if isinstance(server, StdioServerConfig):
            update: dict[str, object] = {
                "command": expander.expand(server.command),
                "args": [expander.expand(a) for a in server.args],
            }
            if server.env is not None:
                update["env"] = {k: expander.expand(v) for k, v in server.env.items()}
            servers[name] = server.model_copy(update=update)
        elif isinstance(server, HttpServerConfig):
            update = {"url": expander.expand(server.url)}
            if server.bearer_token is not None:
                update["bearer_token"] = expander.expand(server.bearer_token)
            servers[name] = server.model_copy(update=update)
        else:
            raise TypeError(f"Unsupported server type: {type(server)}")
    mcp = config.mcp.model_copy(update={"servers": servers})
    return config.model_copy(update={"mcp": mcp})
