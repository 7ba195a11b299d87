"""Tests for the rule-finder command line."""

import sys
from pathlib import Path
from typing import Any, Optional

import pytest

from rule_finder import __main__ as main_module
from rule_finder.__main__ import cli, main
from rule_finder.errors import ConfigResolutionError, PluginLoadError
from rule_finder.models import (
    EffectiveConfig,
    FinderOptions,
    RuleDetailRow,
    RuleQuery,
    RuleReport,
    Severity,
)


DEFAULT_REPORTS = {
    RuleQuery.CURRENT: ["current", "rules"],
    RuleQuery.PLUGIN: ["plugin", "rules"],
    RuleQuery.ALL_AVAILABLE: ["all", "available"],
    RuleQuery.UNUSED: ["unused", "rules"],
    RuleQuery.DEPRECATED: ["deprecated", "rules"],
}


class StubFinder:
    def __init__(self, target: Path, options: FinderOptions, state: dict[str, Any]) -> None:
        self.target = Path(target)
        self.options = options
        self.state = state
        self.calls: list[RuleQuery] = []
        self.detail_calls: list[list[str]] = []
        self.config = EffectiveConfig(
            rules={"current": Severity.ERROR}, plugins=("plugin-a",), config_path=None
        )

    def run(self, query: RuleQuery) -> RuleReport:
        self.calls.append(query)
        return RuleReport(
            rules=list(self.state["reports"].get(query, [])),
            errors=list(self.state["errors"]),
        )

    def rule_details(self, rules: list[str]) -> list[RuleDetailRow]:
        self.detail_calls.append(list(rules))
        return [
            RuleDetailRow(rule=rule, source="core", severity=Severity.ERROR, deprecated=False)
            for rule in rules
        ]


@pytest.fixture
def stub_state(monkeypatch) -> dict[str, Any]:
    state: dict[str, Any] = {
        "reports": dict(DEFAULT_REPORTS),
        "errors": [],
        "raise": None,
        "finder": None,
    }

    async def fake_create_rule_finder(target: Any, options: Optional[FinderOptions] = None, **_: Any):
        if state["raise"] is not None:
            raise state["raise"]
        finder = StubFinder(target, options or FinderOptions(), state)
        state["finder"] = finder
        return finder

    monkeypatch.setattr(main_module, "create_rule_finder", fake_create_rule_finder)
    return state


def test_no_option(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 2
    assert "No option provided" in result.output
    assert stub_state["finder"] is None


@pytest.mark.parametrize(
    ("args", "query"),
    [
        (["-c"], RuleQuery.CURRENT),
        (["--current"], RuleQuery.CURRENT),
        (["-p"], RuleQuery.PLUGIN),
        (["--plugin"], RuleQuery.PLUGIN),
        (["-a"], RuleQuery.ALL_AVAILABLE),
        (["--all-available"], RuleQuery.ALL_AVAILABLE),
    ],
)
def test_listing_options_exit_zero(stub_state, cli_runner, args: list[str], query: RuleQuery) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert stub_state["finder"].calls == [query]
    assert "rules found" in result.output


def test_all_available_with_ext(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-a", "--ext", ".json"])
    assert result.exit_code == 0
    assert stub_state["finder"].options.extensions == (".json",)


def test_all_available_with_multiple_ext(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-a", "--ext", ".js", "--ext", "json,ts"])
    assert result.exit_code == 0
    assert stub_state["finder"].options.extensions == (".js", ".json", ".ts")


def test_invalid_ext_is_a_usage_error(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-a", "--ext", "a/b"])
    assert result.exit_code == 2
    assert stub_state["finder"] is None


@pytest.mark.parametrize("flag", ["-u", "--unused", "-d", "--deprecated"])
def test_findings_exit_one(stub_state, cli_runner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag])
    assert result.exit_code == 1


@pytest.mark.parametrize("flag", ["-u", "-d"])
def test_no_findings_exit_zero(stub_state, cli_runner, flag: str) -> None:
    stub_state["reports"] = {RuleQuery.UNUSED: [], RuleQuery.DEPRECATED: []}
    result = cli_runner.invoke(cli, [flag])
    assert result.exit_code == 0
    assert "0 rules found" in result.output


@pytest.mark.parametrize("flag", ["-u", "-d"])
@pytest.mark.parametrize("no_error", ["-n", "--no-error"])
def test_no_error_flag_keeps_exit_zero(stub_state, cli_runner, flag: str, no_error: str) -> None:
    result = cli_runner.invoke(cli, [flag, no_error])
    assert result.exit_code == 0


def test_multiple_queries_run_in_order(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-u", "-c"])
    assert result.exit_code == 1
    assert stub_state["finder"].calls == [RuleQuery.CURRENT, RuleQuery.UNUSED]


def test_core_rules_included_by_default(stub_state, cli_runner) -> None:
    cli_runner.invoke(cli, ["-c"])
    assert stub_state["finder"].options.omit_core is False


def test_no_core_omits_core_rules(stub_state, cli_runner) -> None:
    cli_runner.invoke(cli, ["-c", "--no-core"])
    assert stub_state["finder"].options.omit_core is True


def test_deprecated_excluded_by_default(stub_state, cli_runner) -> None:
    cli_runner.invoke(cli, ["-a"])
    assert stub_state["finder"].options.include_deprecated is False


@pytest.mark.parametrize("args", [["--include=deprecated"], ["-i", "deprecated"]])
def test_include_deprecated(stub_state, cli_runner, args: list[str]) -> None:
    result = cli_runner.invoke(cli, ["-a", *args])
    assert result.exit_code == 0
    assert stub_state["finder"].options.include_deprecated is True


def test_unknown_include_value_is_rejected(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-a", "-i", "everything"])
    assert result.exit_code == 2


def test_verbose_renders_provenance(stub_state, cli_runner) -> None:
    result = cli_runner.invoke(cli, ["-c", "-v"])
    assert result.exit_code == 0
    assert stub_state["finder"].detail_calls == [["current", "rules"]]
    assert stub_state["finder"].options.verbose is True
    assert "plugin-a" in result.output


def test_file_argument_is_forwarded(stub_state, cli_runner, tmp_path: Path) -> None:
    cli_runner.invoke(cli, ["-c", str(tmp_path)])
    assert stub_state["finder"].target == tmp_path


def test_plugin_errors_are_reported_and_fail(stub_state, cli_runner) -> None:
    stub_state["errors"] = [PluginLoadError("plugin-broken", "not installed")]
    result = cli_runner.invoke(cli, ["-a"])
    assert result.exit_code == 1
    assert "plugin-broken" in result.output


def test_config_resolution_error_is_fatal(stub_state, cli_runner) -> None:
    stub_state["raise"] = ConfigResolutionError(Path("/nowhere"), "No lint config found for target")
    result = cli_runner.invoke(cli, ["-c"])
    assert result.exit_code == 2
    assert "Error: No lint config found for target" in result.output
    assert "Fatal" not in result.output


def test_main_returns_exit_codes(stub_state, monkeypatch) -> None:
    monkeypatch.setattr(sys, "argv", ["rule-finder", "-c"])
    assert main() == 0
    monkeypatch.setattr(sys, "argv", ["rule-finder", "-u"])
    assert main() == 1
    monkeypatch.setattr(sys, "argv", ["rule-finder"])
    assert main() == 2


def test_end_to_end_unused_rules(cli_runner, tmp_path: Path, write_json) -> None:
    project = tmp_path / "project"
    write_json(project / ".lintrc.json", {"rules": {"no-console": "error"}})

    result = cli_runner.invoke(cli, ["-u", str(project)])

    assert result.exit_code == 1
    assert "unused rules" in result.output
    assert "eqeqeq" in result.output


def test_end_to_end_missing_plugin(cli_runner, tmp_path: Path, write_json) -> None:
    project = tmp_path / "project"
    write_json(
        project / ".lintrc.json",
        {"plugins": ["plugin-not-installed-here"], "rules": {"no-console": 2}},
    )

    result = cli_runner.invoke(cli, ["-c", "-p", "-n", str(project)])

    assert result.exit_code == 1
    assert "plugin-not-installed-here" in result.output


def test_end_to_end_missing_config(cli_runner, tmp_path: Path) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    result = cli_runner.invoke(cli, ["-c", str(empty)])
    assert result.exit_code == 2
    assert "No lint config found" in result.output


def test_current_rules_report_missing_plugin(cli_runner, tmp_path: Path, write_json) -> None:
    project = tmp_path / "project"
    write_json(
        project / ".lintrc.json",
        {"plugins": ["plugin-missing-xyz"], "rules": {"eqeqeq": 2}},
    )

    result = cli_runner.invoke(cli, ["-c", str(project)])

    assert result.exit_code == 1
    assert "eqeqeq" in result.output
    assert "plugin-missing-xyz" in result.output
