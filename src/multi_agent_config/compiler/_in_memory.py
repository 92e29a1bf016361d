"""In-memory adapters for testing (no disk I/O)."""

from __future__ import annotations

from pathlib import Path

from ..files import backup_path_for, hash_bytes
from ..models.state import StateFile
from ._protocols import WriteResult


class InMemoryStateAdapter:
    def __init__(self, state: StateFile | None = None) -> None:
        self._state = state.model_copy(deep=True) if state is not None else None
        self.save_count = 0

    @property
    def state(self) -> StateFile | None:
        return self._state

    def load(self) -> StateFile:
        if self._state is None:
            return StateFile()
        return self._state.model_copy(deep=True)

    def save(self, state: StateFile) -> None:
        self._state = state.model_copy(deep=True)
        self.save_count += 1


class InMemoryOutputAdapter:
    def __init__(self, files: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = {Path(k): v for k, v in (files or {}).items()}
        self.backups: dict[Path, str] = {}

    def read(self, path: Path) -> str | None:
        return self.files.get(Path(path))

    def write(self, path: Path, content: str) -> WriteResult:
        path = Path(path)
        backup = None
        if path in self.files:
            backup = backup_path_for(path)
            self.backups[backup] = self.files[path]
        self.files[path] = content
        return WriteResult(path=path, backup_path=backup, hash=hash_bytes(content.encode("utf-8")))
