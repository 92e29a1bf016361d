from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

HASH_PREFIX = "sha256:"
_CHUNK_SIZE = 8192


def hash_file(path: Path) -> str:
    """SHA-256 of a file's bytes as "sha256:<hex>", read in fixed-size chunks."""
    digest = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            digest.update(chunk)
    return HASH_PREFIX + digest.hexdigest()


def hash_bytes(data: bytes) -> str:
    return HASH_PREFIX + hashlib.sha256(data).hexdigest()
