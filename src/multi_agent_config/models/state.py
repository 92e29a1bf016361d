"""State file model for generated.json."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

STATE_VERSION = "1.0"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GeneratedFile(BaseModel):
    """Single generated tool configuration recorded in the state file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    tool: str
    path: Path
    timestamp: datetime
    hash: str  # "sha256:<hex>"


class StateFile(BaseModel):
    """Root of generated.json."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    version: str = STATE_VERSION
    last_compile: datetime = Field(default_factory=_utcnow)
    generated_files: list[GeneratedFile] = []
