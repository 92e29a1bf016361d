"""Compiler: parse -> expand -> validate -> (filter -> transform) per tool -> write | diff."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from ..errors import ConfigValidationError, FileOperationError, PartialCompileError
from ..files import generate_diff, hash_bytes
from ..loaders.config import load_and_expand_config
from ..models.config import ToolName
from ..transform import transform_for_tool
from ..validation import ValidationResult, validate_config
from ._state import StateTracker

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from ..models.config import MultiAgentConfig
    from ._protocols import OutputAdapter, StateAdapter

logger = structlog.get_logger(__name__)


@dataclass
class ToolOutput:
    tool: ToolName
    path: Path
    content: str
    written: bool = False
    backup_path: Path | None = None
    hash: str | None = None
    # The file on disk no longer matches what the last compile wrote.
    modified_externally: bool = False


@dataclass
class ToolDiff:
    tool: ToolName
    path: Path
    diff: str


@dataclass
class CompileReport:
    outputs: list[ToolOutput]
    validation: ValidationResult
    dry_run: bool = False
    failures: dict[str, Exception] = field(default_factory=dict)

    @property
    def written(self) -> list[ToolOutput]:
        return [o for o in self.outputs if o.written]


def resolve_tools(tools: Iterable[ToolName | str] | None) -> list[ToolName]:
    """Concrete compile targets for a user selection; empty or "all" means every tool."""
    if not tools:
        return ToolName.concrete_tools()
    resolved: list[ToolName] = []
    for t in tools:
        tool = t if isinstance(t, ToolName) else ToolName.parse(t)
        if tool is None:
            raise ValueError(f"Unknown tool: {t!r}")
        expanded = ToolName.concrete_tools() if tool is ToolName.ALL else [tool]
        for item in expanded:
            if item not in resolved:
                resolved.append(item)
    return resolved


class Compiler:
    def __init__(
        self,
        outputs: OutputAdapter,
        state: StateAdapter,
        output_paths: Mapping[ToolName, Path],
    ) -> None:
        self._outputs = outputs
        self._state = state
        self._paths = dict(output_paths)

    def output_path(self, tool: ToolName) -> Path:
        path = self._paths.get(tool)
        if path is None:
            raise ValueError(f"No output path configured for {tool.value!r}")
        return path

    def validate(
        self, config_path: Path, environ: Mapping[str, str] | None = None
    ) -> ValidationResult:
        """Parse, expand and validate without raising for an invalid document."""
        config = load_and_expand_config(config_path, environ)
        return validate_config(config)

    def load(
        self, config_path: Path, environ: Mapping[str, str] | None = None
    ) -> tuple[MultiAgentConfig, ValidationResult]:
        """Parse, expand and validate.

        Raises:
            ConfigValidationError: with every validation error when the document is invalid.
        """
        config = load_and_expand_config(config_path, environ)
        result = validate_config(config)
        for issue in result.warnings:
            logger.warning("validation_warning", path=issue.path, message=issue.message)
        if not result.valid:
            raise ConfigValidationError(result.errors)
        return config, result

    def render(
        self, config: MultiAgentConfig, tools: Iterable[ToolName | str] | None = None
    ) -> list[ToolOutput]:
        """Transform *config* for each selected tool without touching any file."""
        outputs = []
        for tool in resolve_tools(tools):
            content = transform_for_tool(tool, config.mcp.servers, config.default_targets)
            outputs.append(ToolOutput(tool=tool, path=self.output_path(tool), content=content))
        return outputs

    def compile(
        self,
        config_path: Path,
        tools: Iterable[ToolName | str] | None = None,
        dry_run: bool = False,
        environ: Mapping[str, str] | None = None,
    ) -> CompileReport:
        """Compile the unified configuration into every selected tool's file.

        All outputs are rendered before the first write, so parse, expansion,
        validation and transform errors leave every destination untouched. A
        failed write does not stop the remaining tools; the state file is saved
        once for whatever was written.

        Raises:
            PartialCompileError: some tools were written and some failed.
            FileOperationError: every write failed.
        """
        config, validation = self.load(config_path, environ)
        outputs = self.render(config, tools)
        report = CompileReport(outputs=outputs, validation=validation, dry_run=dry_run)
        if dry_run:
            for out in outputs:
                logger.info("dry_run", tool=out.tool.value, path=str(out.path))
            return report

        tracker = StateTracker(self._state.load())
        for out in outputs:
            try:
                self._check_external_edit(out, tracker)
                result = self._outputs.write(out.path, out.content)
            except FileOperationError as e:
                logger.error("write_failed", tool=out.tool.value, path=str(out.path), error=str(e))
                report.failures[out.tool.value] = e
                continue
            out.written = True
            out.backup_path = result.backup_path
            out.hash = result.hash
            tracker.record(out.tool.value, result.path, result.hash)
            logger.info(
                "config_written",
                tool=out.tool.value,
                path=str(result.path),
                backup=str(result.backup_path) if result.backup_path else None,
            )

        if report.written:
            self._state.save(tracker.state)
        if report.failures:
            if report.written:
                raise PartialCompileError([o.tool.value for o in report.written], report.failures)
            raise next(iter(report.failures.values()))
        return report

    def diff(
        self,
        config_path: Path,
        tools: Iterable[ToolName | str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> list[ToolDiff]:
        """Unified diffs between each tool's current file and its compiled content."""
        config, _ = self.load(config_path, environ)
        diffs = []
        for out in self.render(config, tools):
            existing = self._outputs.read(out.path) or ""
            diffs.append(
                ToolDiff(tool=out.tool, path=out.path, diff=generate_diff(existing, out.content, out.path))
            )
        return diffs

    def _check_external_edit(self, out: ToolOutput, tracker: StateTracker) -> None:
        recorded = tracker.hash_for(out.path)
        if recorded is None:
            return
        current = self._outputs.read(out.path)
        if current is None:
            return
        if hash_bytes(current.encode("utf-8")) != recorded:
            out.modified_externally = True
            logger.warning(
                "external_edit_detected",
                tool=out.tool.value,
                path=str(out.path),
                action="overwriting; previous content kept as backup",
            )
