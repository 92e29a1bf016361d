"""Protocols (ports) for the compiler."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..models.state import StateFile


@dataclass
class WriteResult:
    """Outcome of writing one tool configuration file."""

    path: Path
    backup_path: Path | None
    hash: str  # "sha256:<hex>" of the written content


class StateAdapter(Protocol):
    """Loads and saves the generated-files state document."""

    def load(self) -> StateFile: ...
    def save(self, state: StateFile) -> None: ...


class OutputAdapter(Protocol):
    """Reads existing tool configuration files and writes new ones safely."""

    def read(self, path: Path) -> str | None: ...
    def write(self, path: Path, content: str) -> WriteResult: ...
