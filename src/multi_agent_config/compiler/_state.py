from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from ..models.state import GeneratedFile, StateFile


class StateTracker:
    """In-memory view of the state file for one compile run.

    Loaded once at the start of a run, updated after each successful write and
    handed back to a StateAdapter once at the end.
    """

    def __init__(self, state: StateFile | None = None) -> None:
        self._state = state if state is not None else StateFile()

    @property
    def state(self) -> StateFile:
        return self._state

    @property
    def records(self) -> list[GeneratedFile]:
        return list(self._state.generated_files)

    def record(self, tool: str, path: Path, hash: str) -> GeneratedFile:
        """Upsert the record for *path* and refresh the last-compile timestamp."""
        path = Path(path)
        now = datetime.now(timezone.utc)
        entry = GeneratedFile(tool=tool, path=path, timestamp=now, hash=hash)
        kept = [f for f in self._state.generated_files if f.path != path]
        kept.append(entry)
        self._state.generated_files = kept
        self._state.last_compile = now
        return entry

    def hash_for(self, path: Path) -> str | None:
        path = Path(path)
        for f in self._state.generated_files:
            if f.path == path:
                return f.hash
        return None
