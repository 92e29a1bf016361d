"""File operations: backup, atomic write, content hashing and diff preview."""

from ._backup import BACKUP_SUFFIX, backup_path_for, create_backup
from ._diff import generate_diff, generate_file_diff
from ._hash import hash_bytes, hash_file
from ._writer import DEFAULT_FILE_MODE, write_file_atomic

__all__ = [
    "BACKUP_SUFFIX",
    "DEFAULT_FILE_MODE",
    "backup_path_for",
    "create_backup",
    "generate_diff",
    "generate_file_diff",
    "hash_bytes",
    "hash_file",
    "write_file_atomic",
]
