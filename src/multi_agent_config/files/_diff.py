from __future__ import annotations

import difflib
from pathlib import Path

from ..errors import FileOperationError

DIFF_CONTEXT_LINES = 3


def generate_diff(old_content: str, new_content: str, path: Path | str) -> str:
    """Unified diff of *old_content* -> *new_content* with a path header.

    The "--- path" / "+++ path (new)" header is always present, even when the
    contents are identical.
    """
    header = f"--- {path}\n+++ {path} (new)\n"
    lines = list(
        difflib.unified_diff(
            old_content.splitlines(keepends=True),
            new_content.splitlines(keepends=True),
            n=DIFF_CONTEXT_LINES,
        )
    )
    # Drop difflib's own "---"/"+++" pair; it is empty when nothing changed.
    body = [line if line.endswith("\n") else line + "\n" for line in lines[2:]]
    return header + "".join(body)


def generate_file_diff(path: Path, new_content: str) -> str:
    """Diff the file on disk against *new_content*; a missing file counts as empty."""
    path = Path(path)
    try:
        old_content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        old_content = ""
    except OSError as e:
        raise FileOperationError(f"Failed to read {path}: {e}", path=path) from e
    return generate_diff(old_content, new_content, path)
