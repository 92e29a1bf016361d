from __future__ import annotations

import re
import tomllib
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from ..errors import (
    ConfigFileNotFoundError,
    ConfigPermissionError,
    FileOperationError,
    ParseError,
)
from ..expansion import Expander, expand_config
from ..models.config import MultiAgentConfig

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

logger = structlog.get_logger(__name__)

# tomllib before 3.14 only reports the position inside the message.
_LOCATION_SUFFIX = re.compile(r"\s*\(at line (\d+), column \d+\)$")


def read_config_text(path: Path) -> str:
    """Read the configuration file as UTF-8 text.

    Missing files and permission problems raise their own error types so the
    caller can give specific advice; anything else is a FileOperationError.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigFileNotFoundError(path) from e
    except PermissionError as e:
        raise ConfigPermissionError(path) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"File is not valid UTF-8: {e}") from e
    except OSError as e:
        raise FileOperationError(f"Failed to read {path}: {e}", path=path) from e


def parse_config(data: bytes | str) -> MultiAgentConfig:
    """Parse a unified TOML document.

    Raises:
        ParseError: TOML syntax error (with its line) or a document that does not
            match the schema, e.g. a missing [mcp.servers] section.
    """
    if isinstance(data, bytes):
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"File is not valid UTF-8: {e}") from e
    else:
        text = data

    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        message, line = _describe_toml_error(e, text)
        raise ParseError(message, line) from e

    try:
        return MultiAgentConfig.model_validate(raw)
    except ValidationError as e:
        raise ParseError(_describe_validation_error(e)) from e


def load_config(path: Path) -> MultiAgentConfig:
    """Read and parse the unified configuration file at *path*."""
    config = parse_config(read_config_text(path))
    logger.debug("config_loaded", path=str(path), servers=len(config.mcp.servers))
    return config


def load_and_expand_config(
    path: Path, environ: Mapping[str, str] | None = None
) -> MultiAgentConfig:
    """Load the configuration and expand every variable reference.

    environ defaults to a snapshot of os.environ. Undefined references are logged
    as warnings; circular or too-deep references raise an ExpansionError.
    """
    config = load_config(path)
    expander = Expander.from_environ(config.env or {}, environ)
    expanded = expand_config(config, expander)
    for warning in expander.warnings:
        logger.warning("expansion_warning", message=warning)
    return expanded


def _describe_toml_error(e: tomllib.TOMLDecodeError, text: str) -> tuple[str, int]:
    pos = getattr(e, "pos", None)
    message = getattr(e, "msg", None) or str(e)
    match = _LOCATION_SUFFIX.search(message)
    if match:
        message = message[: match.start()]
    if isinstance(pos, int):
        return message, text.count("\n", 0, pos) + 1
    if match:
        return message, int(match.group(1))
    return message, 0


def _describe_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"])
        if err["type"] == "missing":
            parts.append(f"missing required field '{loc}'")
        else:
            parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)
