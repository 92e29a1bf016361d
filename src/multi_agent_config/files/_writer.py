from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from ..errors import FileOperationError

DEFAULT_FILE_MODE = 0o600


def write_file_atomic(path: Path, content: str, mode: int | None = DEFAULT_FILE_MODE) -> None:
    """Write *content* to *path* so readers see either the old file or the new one.

    The data goes to a temporary file in the destination directory which is then
    renamed over the destination. Missing parent directories are created. On
    POSIX the file gets *mode* (owner read/write by default); pass None to keep
    the temp file's default permissions.
    """
    path = Path(path)
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileOperationError(
            f"Failed to create parent directory {parent}: {e}", path=parent, operation="create_dir"
        ) from e

    try:
        fd, tmp_name = tempfile.mkstemp(dir=parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise FileOperationError(f"Failed to create temporary file in {parent}: {e}", path=path) from e
    tmp = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if mode is not None and os.name == "posix":
            try:
                tmp.chmod(mode)
            except OSError as e:
                raise FileOperationError(
                    f"Failed to set permissions on {path}: {e}", path=path, operation="permission"
                ) from e
        try:
            tmp.replace(path)
        except OSError as e:
            raise FileOperationError(
                f"Failed to persist {path}: {e}", path=path, operation="persist"
            ) from e
    except FileOperationError:
        _discard(tmp)
        raise
    except OSError as e:
        _discard(tmp)
        raise FileOperationError(f"Failed to write {path}: {e}", path=path) from e


def _discard(tmp: Path) -> None:
    with contextlib.suppress(FileNotFoundError):
        tmp.unlink()
