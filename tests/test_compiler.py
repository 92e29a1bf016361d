"""Tests for the compile pipeline (in-memory and on disk)."""

import json
import tomllib
from pathlib import Path

import pytest

from multi_agent_config.compiler import (
    Compiler,
    InMemoryOutputAdapter,
    InMemoryStateAdapter,
    default_output_paths,
    make_compiler,
    resolve_tools,
)
from multi_agent_config.errors import (
    CircularReferenceError,
    ConfigValidationError,
    FileOperationError,
    ParseError,
    PartialCompileError,
)
from multi_agent_config.models import ToolName

FIXTURES = Path(__file__).resolve().parent / "fixtures"
ENVIRON = {"HOME": "/home/dev", "GITHUB_PERSONAL_ACCESS_TOKEN": "ghp_x"}
BASE = Path("/cfg")


class FailingOutputAdapter(InMemoryOutputAdapter):
    def __init__(self, fail_for):
        super().__init__()
        self.fail_for = set(fail_for)

    def write(self, path, content):
        if Path(path) in self.fail_for:
            raise FileOperationError(f"Failed to persist {path}", path=Path(path), operation="persist")
        return super().write(path, content)


def _compiler(outputs=None, state=None):
    return Compiler(
        outputs=outputs if outputs is not None else InMemoryOutputAdapter(),
        state=state if state is not None else InMemoryStateAdapter(),
        output_paths=default_output_paths(BASE),
    )


def test_resolve_tools():
    assert resolve_tools(None) == ToolName.concrete_tools()
    assert resolve_tools([]) == ToolName.concrete_tools()
    assert resolve_tools(["all"]) == ToolName.concrete_tools()
    assert resolve_tools(["codex", ToolName.CODEX, "cursor"]) == [ToolName.CODEX, ToolName.CURSOR]
    with pytest.raises(ValueError):
        resolve_tools(["vim"])


def test_compile_writes_every_tool():
    outputs = InMemoryOutputAdapter()
    state = InMemoryStateAdapter()
    report = _compiler(outputs, state).compile(FIXTURES / "basic.toml", environ=ENVIRON)

    assert len(report.written) == 4
    assert report.failures == {}
    paths = default_output_paths(BASE)
    cursor = json.loads(outputs.files[paths[ToolName.CURSOR]])
    assert set(cursor["mcpServers"]) == {"filesystem", "github"}
    codex = tomllib.loads(outputs.files[paths[ToolName.CODEX]])
    assert codex["mcp_servers"]["remote"]["bearer_token"] == "ghp_x"

    assert state.save_count == 1
    recorded = {f.tool: f for f in state.state.generated_files}
    assert set(recorded) == {"claude-code", "cursor", "opencode", "codex"}
    assert recorded["cursor"].hash == report.outputs[1].hash


def test_compile_selected_tool_only():
    outputs = InMemoryOutputAdapter()
    report = _compiler(outputs).compile(FIXTURES / "basic.toml", tools=["codex"], environ=ENVIRON)
    assert [o.tool for o in report.written] == [ToolName.CODEX]
    assert list(outputs.files) == [default_output_paths(BASE)[ToolName.CODEX]]


def test_dry_run_writes_nothing():
    outputs = InMemoryOutputAdapter()
    state = InMemoryStateAdapter()
    report = _compiler(outputs, state).compile(FIXTURES / "basic.toml", dry_run=True, environ=ENVIRON)
    assert report.dry_run
    assert len(report.outputs) == 4
    assert report.written == []
    assert outputs.files == {}
    assert state.save_count == 0


def test_circular_reference_writes_nothing():
    outputs = InMemoryOutputAdapter()
    state = InMemoryStateAdapter()
    with pytest.raises(CircularReferenceError):
        _compiler(outputs, state).compile(FIXTURES / "circular.toml", environ={})
    assert outputs.files == {}
    assert state.save_count == 0


def test_invalid_config_writes_nothing():
    outputs = InMemoryOutputAdapter()
    with pytest.raises(ConfigValidationError) as exc_info:
        _compiler(outputs).compile(FIXTURES / "invalid.toml", environ={})
    assert len(exc_info.value.issues) == 7
    assert outputs.files == {}


def test_syntax_error_propagates():
    with pytest.raises(ParseError):
        _compiler().compile(FIXTURES / "syntax_error.toml", environ={})


def test_validate_does_not_raise_for_invalid_document():
    result = _compiler().validate(FIXTURES / "invalid.toml", environ={})
    assert not result.valid


def test_partial_failure_keeps_successful_writes():
    paths = default_output_paths(BASE)
    outputs = FailingOutputAdapter([paths[ToolName.CODEX]])
    state = InMemoryStateAdapter()
    with pytest.raises(PartialCompileError) as exc_info:
        _compiler(outputs, state).compile(FIXTURES / "basic.toml", environ=ENVIRON)

    err = exc_info.value
    assert set(err.failures) == {"codex"}
    assert set(err.written) == {"claude-code", "cursor", "opencode"}
    assert paths[ToolName.CODEX] not in outputs.files
    assert state.save_count == 1
    assert {f.tool for f in state.state.generated_files} == {"claude-code", "cursor", "opencode"}


def test_total_failure_raises_file_error():
    outputs = FailingOutputAdapter(default_output_paths(BASE).values())
    state = InMemoryStateAdapter()
    with pytest.raises(FileOperationError):
        _compiler(outputs, state).compile(FIXTURES / "basic.toml", environ=ENVIRON)
    assert state.save_count == 0


def test_recompile_backs_up_previous_output():
    outputs = InMemoryOutputAdapter()
    state = InMemoryStateAdapter()
    compiler = _compiler(outputs, state)
    compiler.compile(FIXTURES / "basic.toml", tools=["cursor"], environ=ENVIRON)
    report = compiler.compile(FIXTURES / "basic.toml", tools=["cursor"], environ=ENVIRON)
    out = report.written[0]
    assert out.backup_path is not None
    assert outputs.backups[out.backup_path] == out.content
    assert out.modified_externally is False
    assert len(state.state.generated_files) == 1


def test_external_edit_is_flagged_and_overwritten():
    outputs = InMemoryOutputAdapter()
    state = InMemoryStateAdapter()
    compiler = _compiler(outputs, state)
    first = compiler.compile(FIXTURES / "basic.toml", tools=["opencode"], environ=ENVIRON)
    path = first.written[0].path
    outputs.files[path] = '{"mcp": {"hand-edited": {}}}\n'

    report = compiler.compile(FIXTURES / "basic.toml", tools=["opencode"], environ=ENVIRON)
    out = report.written[0]
    assert out.modified_externally is True
    assert outputs.files[path] == first.written[0].content
    assert outputs.backups[out.backup_path] == '{"mcp": {"hand-edited": {}}}\n'


def test_diff_against_missing_and_existing_files():
    outputs = InMemoryOutputAdapter()
    compiler = _compiler(outputs)
    diffs = compiler.diff(FIXTURES / "basic.toml", tools=["cursor"], environ=ENVIRON)
    assert len(diffs) == 1
    assert '+  "mcpServers": {\n' in diffs[0].diff
    assert outputs.files == {}

    compiler.compile(FIXTURES / "basic.toml", tools=["cursor"], environ=ENVIRON)
    diffs = compiler.diff(FIXTURES / "basic.toml", tools=["cursor"], environ=ENVIRON)
    path = diffs[0].path
    assert diffs[0].diff == f"--- {path}\n+++ {path} (new)\n"


def test_make_compiler_on_disk(tmp_path):
    compiler = make_compiler(config_dir=tmp_path)
    report = compiler.compile(FIXTURES / "basic.toml", environ=ENVIRON)

    cursor_path = (
        tmp_path / "Cursor" / "User" / "globalStorage" / "saoudrizwan.claude-dev" / "settings" / "mcp.json"
    )
    assert cursor_path.exists()
    assert (tmp_path / "opencode" / "mcp.json").exists()
    assert (tmp_path / "codex" / "mcp_config.toml").exists()
    assert (tmp_path / "claude" / "mcp.json").exists()

    state_path = tmp_path / "multi-agent-config" / "state" / "generated.json"
    state = json.loads(state_path.read_text())
    assert len(state["generated_files"]) == 4
    hashes = {Path(f["path"]): f["hash"] for f in state["generated_files"]}
    assert hashes[cursor_path] == next(o.hash for o in report.written if o.tool is ToolName.CURSOR)


def test_make_compiler_output_override(tmp_path):
    custom = tmp_path / "custom" / "codex.toml"
    compiler = make_compiler(config_dir=tmp_path, output_paths={ToolName.CODEX: custom})
    compiler.compile(FIXTURES / "basic.toml", tools=["codex"], environ=ENVIRON)
    assert custom.exists()
    assert not (tmp_path / "codex").exists()
