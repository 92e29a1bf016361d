"""Concrete adapters for the local filesystem."""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import ValidationError

from ..errors import FileOperationError
from ..files import DEFAULT_FILE_MODE, create_backup, hash_file, write_file_atomic
from ..models.state import StateFile
from ._protocols import WriteResult

logger = structlog.get_logger(__name__)


class LocalFilesystemStateAdapter:
    """Reads/writes generated.json. A corrupt file is replaced by a fresh state."""

    def __init__(self, state_path: Path) -> None:
        self._path = Path(state_path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> StateFile:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return StateFile()
        except UnicodeDecodeError as e:
            return self._fresh_after_corruption(e)
        except OSError as e:
            raise FileOperationError(f"Failed to read state file {self._path}: {e}", path=self._path) from e
        try:
            return StateFile.model_validate_json(raw)
        except ValidationError as e:
            return self._fresh_after_corruption(e)

    def _fresh_after_corruption(self, error: Exception) -> StateFile:
        logger.warning(
            "state_file_corrupt",
            path=str(self._path),
            error=str(error),
            action="starting with a fresh state",
        )
        return StateFile()

    def save(self, state: StateFile) -> None:
        write_file_atomic(self._path, state.model_dump_json(indent=2) + "\n")


class LocalFilesystemOutputAdapter:
    """Backs up, atomically writes and hashes tool configuration files."""

    def __init__(self, mode: int | None = DEFAULT_FILE_MODE) -> None:
        self._mode = mode

    def read(self, path: Path) -> str | None:
        try:
            return Path(path).read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise FileOperationError(f"Failed to read {path}: {e}", path=Path(path)) from e

    def write(self, path: Path, content: str) -> WriteResult:
        path = Path(path)
        # The write is only attempted once the backup succeeded or was not needed.
        backup = create_backup(path)
        write_file_atomic(path, content, self._mode)
        try:
            digest = hash_file(path)
        except OSError as e:
            raise FileOperationError(f"Failed to hash {path}: {e}", path=path) from e
        return WriteResult(path=path, backup_path=backup, hash=digest)
