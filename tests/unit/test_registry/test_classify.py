# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for reg.exe result classification and CLI exit codes."""
from __future__ import annotations

import pytest

from regtool.core.exceptions import (
    ConfigError,
    RegistryCommandError,
    RegistryTimeoutError,
    RegistryValidationError,
    ToolUnavailableError,
)
from regtool.registry.commands import RegCommand
from regtool.registry.errors import NOT_FOUND_EXIT_CODE, Outcome, RegExitCode, classify, exit_code_for
from regtool.registry.invoker import ProcessResult

NOT_FOUND = ProcessResult(
    stderr="ERROR: The system was unable to find the specified registry key or value.",
    exit_code=NOT_FOUND_EXIT_CODE,
)


@pytest.mark.unit
class TestClassify:
    def test_success(self):
        assert classify(RegCommand.QUERY, ProcessResult(stdout="x")) is Outcome.OK
        assert classify("ADD", ProcessResult()) is Outcome.OK

    def test_not_started_is_tool_unavailable(self):
        for cmd in RegCommand:
            with pytest.raises(ToolUnavailableError):
                classify(cmd, ProcessResult(stderr="[Errno 2] No such file", exit_code=-1, started=False))

    def test_query_not_found_is_benign(self):
        assert classify(RegCommand.QUERY, NOT_FOUND) is Outcome.ABSENT

    @pytest.mark.parametrize("cmd", [RegCommand.ADD, RegCommand.DELETE])
    def test_not_found_is_hard_for_writes(self, cmd):
        with pytest.raises(RegistryCommandError) as ei:
            classify(cmd, NOT_FOUND)
        assert ei.value.exit_code == 1
        assert ei.value.command == cmd.value

    def test_other_query_failures_are_hard(self):
        with pytest.raises(RegistryCommandError) as ei:
            classify(RegCommand.QUERY, ProcessResult(stdout="", stderr="ERROR: Access is denied.", exit_code=5))
        err = ei.value
        assert err.exit_code == 5
        assert err.stderr == "ERROR: Access is denied."
        assert err.code == RegExitCode.COMMAND_FAILED

    def test_diagnostic_message_has_everything(self):
        with pytest.raises(RegistryCommandError) as ei:
            classify("DELETE", ProcessResult(stdout="partial out", stderr="ERROR: boom", exit_code=1))
        msg = str(ei.value)
        assert msg.startswith("DELETE command exited with code 1:")
        assert "partial out" in msg
        assert "ERROR: boom" in msg


@pytest.mark.unit
class TestExitCodes:
    @pytest.mark.parametrize(
        "exc,expected",
        [
            (RegistryValidationError(msg="bad hive"), RegExitCode.USAGE),
            (ConfigError(msg="bad yaml"), RegExitCode.USAGE),
            (ToolUnavailableError(msg="no reg.exe"), RegExitCode.TOOL_MISSING),
            (RegistryCommandError(command="ADD", exit_code=5), RegExitCode.COMMAND_FAILED),
            (RegistryTimeoutError(command="QUERY", exit_code=-1, msg="timed out"), RegExitCode.TIMEOUT),
            (KeyboardInterrupt(), RegExitCode.INTERRUPTED),
            (ValueError("x"), RegExitCode.UNKNOWN),
        ],
    )
    def test_mapping(self, exc, expected):
        assert exit_code_for(exc) is expected

    def test_single_exit_code_table(self):
        from regtool.core import exceptions

        assert RegExitCode is exceptions.RegExitCode

    def test_raised_errors_carry_their_exit_code(self, monkeypatch, tmp_path):
        from regtool.core.config import ENV_REG_EXE, load_config
        from regtool.core.exceptions import wrap_validation
        from regtool.registry import invoker

        raised = []
        for fn in (
            lambda: classify(RegCommand.QUERY, ProcessResult(exit_code=-1, started=False)),
            lambda: classify(RegCommand.ADD, ProcessResult(exit_code=5)),
        ):
            with pytest.raises(Exception) as ei:
                fn()
            raised.append(ei.value)

        monkeypatch.delenv(ENV_REG_EXE, raising=False)
        monkeypatch.setattr(invoker.sys, "platform", "darwin")
        monkeypatch.setattr(invoker, "is_wsl", lambda: False)
        with pytest.raises(ToolUnavailableError) as ei:
            invoker.locate_reg_exe()
        raised.append(ei.value)

        bad = tmp_path / "bad.yaml"
        bad.write_text("- x\n", encoding="utf-8")
        with pytest.raises(ConfigError) as ei:
            load_config([bad], env={})
        raised.append(ei.value)

        raised.append(wrap_validation("illegal key specified: 'a.b'"))

        for err in raised:
            assert err.code == exit_code_for(err), type(err).__name__
