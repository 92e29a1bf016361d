"""Tests for ${VAR} / {VAR} expansion."""

import pytest

from multi_agent_config.errors import CircularReferenceError, MaxDepthExceededError
from multi_agent_config.expansion import MAX_EXPANSION_DEPTH, Expander, expand_config
from multi_agent_config.loaders import parse_config
from multi_agent_config.models import HttpServerConfig, StdioServerConfig


def _chain(length: int) -> dict[str, str]:
    """V0 -> V1 -> ... -> V{length-1} = "end"."""
    env = {f"V{i}": f"{{V{i + 1}}}" for i in range(length - 1)}
    env[f"V{length - 1}"] = "end"
    return env


def test_shell_var_from_environment():
    expander = Expander({}, {"HOME": "/home/dev"})
    assert expander.expand("${HOME}/projects") == "/home/dev/projects"
    assert expander.warnings == []


def test_env_section_var():
    expander = Expander({"API_BASE": "https://api.example.com"}, {})
    assert expander.expand("{API_BASE}/v1") == "https://api.example.com/v1"


def test_env_section_value_may_use_shell_vars():
    expander = Expander({"TOKEN": "${SECRET}"}, {"SECRET": "s3cr3t"})
    assert expander.expand("Bearer {TOKEN}") == "Bearer s3cr3t"


def test_nested_env_section_vars():
    expander = Expander({"HOST": "example.com", "URL": "https://{HOST}/mcp"}, {})
    assert expander.expand("{URL}") == "https://example.com/mcp"


def test_undefined_shell_var_is_empty_with_warning():
    expander = Expander({}, {})
    assert expander.expand("a${MISSING}b") == "ab"
    assert expander.warnings == ["Shell variable 'MISSING' is undefined"]


def test_undefined_config_var_is_empty_with_warning():
    expander = Expander({}, {})
    assert expander.expand("{NOPE}") == ""
    assert expander.warnings == ["Config variable 'NOPE' is undefined"]


def test_clear_warnings():
    expander = Expander({}, {})
    expander.expand("${X}")
    expander.clear_warnings()
    assert expander.warnings == []


def test_plain_text_unchanged():
    expander = Expander({"A": "x"}, {"A": "y"})
    assert expander.expand("no references here") == "no references here"
    assert expander.expand("") == ""


def test_same_name_twice_in_one_value_is_not_circular():
    expander = Expander({"X": "v", "Y": "{X}/{X}"}, {})
    assert expander.expand("{X}-{X}") == "v-v"
    assert expander.expand("{Y}") == "v/v"


def test_circular_reference_detected():
    expander = Expander({"A": "{B}", "B": "{A}"}, {})
    with pytest.raises(CircularReferenceError) as exc_info:
        expander.expand("{A}")
    assert exc_info.value.var_name == "A"
    assert exc_info.value.depth == 2


def test_self_reference_detected():
    expander = Expander({"A": "prefix-{A}"}, {})
    with pytest.raises(CircularReferenceError):
        expander.expand("{A}")


def test_chain_below_max_depth_resolves():
    expander = Expander(_chain(MAX_EXPANSION_DEPTH - 1), {})
    assert expander.expand("{V0}") == "end"


def test_chain_at_max_depth_fails():
    expander = Expander(_chain(MAX_EXPANSION_DEPTH), {})
    with pytest.raises(MaxDepthExceededError) as exc_info:
        expander.expand("{V0}")
    assert exc_info.value.max_depth == MAX_EXPANSION_DEPTH


def test_expansion_is_idempotent_once_resolved():
    expander = Expander({"A": "x"}, {"H": "/h"})
    once = expander.expand("${H}/{A}")
    assert expander.expand(once) == once


def test_from_environ_uses_given_mapping():
    expander = Expander.from_environ({}, {"ONLY": "here"})
    assert expander.expand("${ONLY}") == "here"


def test_from_environ_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("MAC_TEST_VALUE", "from-os")
    expander = Expander.from_environ({})
    assert expander.expand("${MAC_TEST_VALUE}") == "from-os"


def test_expand_config_expands_server_fields():
    config = parse_config(
        """
[env]
ROOT = "${HOME}/work"
TOKEN = "${GH}"

[mcp.servers.fs]
command = "{ROOT}/bin/server"
args = ["--root", "{ROOT}"]
env = { GITHUB_TOKEN = "{TOKEN}" }

[mcp.servers.remote]
url = "https://{HOST}/mcp"
bearer_token = "{TOKEN}"
"""
    )
    expander = Expander(config.env or {}, {"HOME": "/home/dev", "GH": "ghp_1"})
    expanded = expand_config(config, expander)

    fs = expanded.mcp.servers["fs"]
    assert isinstance(fs, StdioServerConfig)
    assert fs.command == "/home/dev/work/bin/server"
    assert fs.args == ["--root", "/home/dev/work"]
    assert fs.env == {"GITHUB_TOKEN": "ghp_1"}

    remote = expanded.mcp.servers["remote"]
    assert isinstance(remote, HttpServerConfig)
    assert remote.url == "https:///mcp"
    assert remote.bearer_token == "ghp_1"
    assert expander.warnings == ["Config variable 'HOST' is undefined"]


def test_expand_config_leaves_original_untouched():
    config = parse_config('[mcp.servers.a]\ncommand = "${BIN}"\n')
    expand_config(config, Expander({}, {"BIN": "node"}))
    assert config.mcp.servers["a"].command == "${BIN}"


def test_repeated_undefined_shell_var_warns_once():
    expander = Expander({}, {})
    assert expander.expand("${X}-${X}") == "-"
    assert expander.warnings == ["Shell variable 'X' is undefined"]


def test_repeated_undefined_config_var_warns_once():
    expander = Expander({"A": "{MISSING}", "B": "{MISSING}"}, {})
    assert expander.expand("{MISSING}/{A}/{B}") == "//"
    assert expander.warnings == ["Config variable 'MISSING' is undefined"]


def test_each_expand_call_reports_its_own_undefined_vars():
    expander = Expander({}, {})
    expander.expand("${X}")
    expander.expand("${X}")
    assert expander.warnings == ["Shell variable 'X' is undefined"] * 2
