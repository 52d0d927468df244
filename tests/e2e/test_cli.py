"""End-to-end CLI coverage for the commands exposed by lib_context_log."""

from __future__ import annotations

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_context_log import cli


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_levels_lists_severity_order() -> None:
    result = _runner().invoke(cli.cli, ["levels"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["0 Fatal", "1 Error", "2 Warn", "3 Info", "4 Debug", "5 Trace"]


def test_cli_emit_renders_fields_and_context() -> None:
    result = _runner().invoke(
        cli.cli,
        [
            "emit",
            "--level",
            "warn",
            "--field",
            "user=ada",
            "--context",
            "request_id=r-1",
            "--logger",
            "tests.cli.emit",
            "disk low",
        ],
        env={"LIB_CONTEXT_LOG_FIELDS__SERVICE": "api"},
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "request_id=r-1 service=api user=ada WARN: disk low"


def test_cli_emit_respects_threshold() -> None:
    result = _runner().invoke(
        cli.cli,
        ["emit", "--level", "debug", "--logger", "tests.cli.threshold", "noise"],
        env={"LIB_CONTEXT_LOG_LEVEL": "info"},
    )
    assert result.exit_code == 0
    assert result.output == ""


def test_cli_emit_fatal_exits_with_one() -> None:
    result = _runner().invoke(cli.cli, ["emit", "--level", "fatal", "--logger", "tests.cli.fatal", "goodbye"])
    assert result.exit_code == 1
    assert "FATAL: goodbye" in result.output


def test_cli_emit_rejects_malformed_field() -> None:
    result = _runner().invoke(cli.cli, ["emit", "--field", "novalue", "msg"])
    assert result.exit_code != 0
    assert "name=value" in result.output


def test_cli_emit_rejects_invalid_env_level() -> None:
    result = _runner().invoke(cli.cli, ["emit", "msg"], env={"LIB_CONTEXT_LOG_LEVEL": "loud"})
    assert result.exit_code != 0


def test_cli_info_runs() -> None:
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "lib_context_log" in result.output


def test_cli_fail_surfaces_error() -> None:
    result = _runner().invoke(cli.cli, ["fail"])
    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)


def test_main_restores_traceback_flag() -> None:
    previous = lib_cli_exit_tools.config.traceback
    exit_code = cli.main(["--traceback", "levels"])
    assert exit_code == 0
    assert lib_cli_exit_tools.config.traceback == previous


def test_main_returns_non_zero_for_failures() -> None:
    assert cli.main(["fail"]) != 0
