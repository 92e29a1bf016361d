from pathlib import Path

import pytest

from multi_agent_config.errors import (
    CircularReferenceError,
    ConfigExistsError,
    ConfigFileNotFoundError,
    ConfigPermissionError,
    ConfigValidationError,
    ExitCode,
    ExpansionError,
    FileOperationError,
    MaxDepthExceededError,
    MultiAgentConfigError,
    ParseError,
    PartialCompileError,
    TransformError,
    exit_code_for,
    suggestion_for,
)
from multi_agent_config.validation import ValidationIssue


def test_parse_error_message_and_line():
    err = ParseError("Expected '='", line=3)
    assert str(err) == "Parse error at line 3: Expected '='"
    assert err.line == 3
    assert err.message == "Expected '='"


def test_file_not_found_keeps_path():
    p = Path("/some/config.toml")
    err = ConfigFileNotFoundError(p)
    assert err.path == p
    assert "not found" in str(err)


def test_expansion_errors_share_base():
    assert issubclass(CircularReferenceError, ExpansionError)
    assert issubclass(MaxDepthExceededError, ExpansionError)
    with pytest.raises(MultiAgentConfigError):
        raise CircularReferenceError("A", 2)


def test_circular_reference_attributes():
    err = CircularReferenceError("A", 2)
    assert err.var_name == "A"
    assert err.depth == 2
    assert "'A'" in str(err)


def test_max_depth_attributes():
    err = MaxDepthExceededError(10, 10)
    assert err.current_depth == 10
    assert err.max_depth == 10


def test_file_operation_error_defaults_to_io():
    err = FileOperationError("disk full")
    assert err.operation == "io"
    assert err.path is None


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (ConfigValidationError([ValidationIssue("error", "x", "bad")]), ExitCode.VALIDATION),
        (ConfigFileNotFoundError(Path("c.toml")), ExitCode.FILE_SYSTEM),
        (ConfigPermissionError(Path("c.toml")), ExitCode.FILE_SYSTEM),
        (ConfigExistsError(Path("c.toml")), ExitCode.FILE_SYSTEM),
        (FileOperationError("boom", operation="persist"), ExitCode.FILE_SYSTEM),
        (PartialCompileError(["cursor"], {"codex": OSError("x")}), ExitCode.PARTIAL_FAILURE),
        (ParseError("bad", 1), ExitCode.GENERAL),
        (CircularReferenceError("A", 1), ExitCode.GENERAL),
        (TransformError("codex", "bad"), ExitCode.GENERAL),
    ],
)
def test_exit_code_for(exc, code):
    assert exit_code_for(exc) == code


def test_exit_codes_are_distinct():
    codes = [ExitCode.VALIDATION, ExitCode.FILE_SYSTEM, ExitCode.PARTIAL_FAILURE, ExitCode.GENERAL]
    assert len(set(codes)) == len(codes)
    assert ExitCode.SUCCESS == 0


def test_every_error_kind_has_a_suggestion():
    errors = [
        ConfigFileNotFoundError(Path("c.toml")),
        ConfigPermissionError(Path("c.toml")),
        ConfigExistsError(Path("c.toml")),
        ParseError("bad", 4),
        ParseError("missing field", 0),
        ConfigValidationError([]),
        CircularReferenceError("A", 1),
        MaxDepthExceededError(10, 10),
        TransformError("codex", "bad"),
        PartialCompileError(["cursor"], {"codex": OSError("x")}),
        FileOperationError("boom", operation="create_dir"),
        FileOperationError("boom", operation="persist"),
    ]
    for err in errors:
        assert suggestion_for(err), type(err).__name__


def test_parse_error_suggestion_mentions_line():
    assert "line 4" in suggestion_for(ParseError("bad", 4))


def test_unknown_exception_has_no_suggestion():
    assert suggestion_for(RuntimeError("x")) is None
    assert exit_code_for(RuntimeError("x")) == ExitCode.GENERAL
