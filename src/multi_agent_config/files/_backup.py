from __future__ import annotations

import shutil
from pathlib import Path

from ..errors import FileOperationError

BACKUP_SUFFIX = ".backup"


def backup_path_for(path: Path) -> Path:
    return path.with_name(path.name + BACKUP_SUFFIX)


def create_backup(path: Path) -> Path | None:
    """Copy an existing file to <name>.backup, replacing any previous backup.

    Returns the backup path, or None when there was nothing to back up.
    """
    path = Path(path)
    if not path.exists():
        return None
    backup = backup_path_for(path)
    try:
        shutil.copy2(path, backup)
    except OSError as e:
        raise FileOperationError(
            f"Failed to back up {path}: {e}", path=path, operation="backup"
        ) from e
    return backup
