# SPDX-License-Identifier: LGPL-3.0-or-later
# regtool/registry/errors.py
# -*- coding: utf-8 -*-
"""Classification of reg.exe results and exit code handling for the CLI"""
from __future__ import annotations

from enum import Enum
from typing import Union

from ..core.exceptions import (
    ConfigError,
    RegExitCode,
    RegistryCommandError,
    RegistryTimeoutError,
    RegistryValidationError,
    ToolUnavailableError,
)
from .commands import RegCommand
from .invoker import ProcessResult

# reg.exe reports "unable to find the specified registry key or value" with 1.
NOT_FOUND_EXIT_CODE = 1


class Outcome(Enum):
    OK = "ok"
    ABSENT = "absent"


def classify(command: Union[RegCommand, str], result: ProcessResult) -> Outcome:
    """
    Map one reg.exe invocation to OK / ABSENT, or raise.

    ABSENT only exists for QUERY: a missing target on ADD or DELETE is a
    real failure the caller has to see.
    """
    cmd = RegCommand(str(command).upper())

    if not result.started:
        raise ToolUnavailableError(
            code=RegExitCode.TOOL_MISSING,
            msg=f"cannot launch reg.exe for {cmd.value}: {result.stderr or 'not started'}",
        )

    if result.exit_code != 0:
        if cmd is RegCommand.QUERY and result.exit_code == NOT_FOUND_EXIT_CODE:
            return Outcome.ABSENT
        raise RegistryCommandError(
            code=RegExitCode.COMMAND_FAILED,
            command=cmd.value,
            exit_code=result.exit_code,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    return Outcome.OK


def exit_code_for(e: BaseException) -> RegExitCode:
    if isinstance(e, KeyboardInterrupt):
        return RegExitCode.INTERRUPTED
    if isinstance(e, (RegistryValidationError, ConfigError)):
        return RegExitCode.USAGE
    if isinstance(e, ToolUnavailableError):
        return RegExitCode.TOOL_MISSING
    if isinstance(e, RegistryTimeoutError):
        return RegExitCode.TIMEOUT
    if isinstance(e, RegistryCommandError):
        return RegExitCode.COMMAND_FAILED
    return RegExitCode.UNKNOWN
