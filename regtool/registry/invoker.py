# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/registry/invoker.py
"""
reg.exe process execution.

One call = one child process. The only await is the process itself, so any
number of invocations can run concurrently. Launch failures are reported as
`ProcessResult(started=False)` rather than raised; classifying them is the
caller's job (see errors.classify).
"""
from __future__ import annotations

import asyncio
import locale
import os
import platform
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.config import ENV_REG_EXE, RegConfig
from ..core.exceptions import RegExitCode, RegistryTimeoutError, ToolUnavailableError
from ..core.logger import get_logger

logger = get_logger("invoker")


@dataclass(frozen=True)
class ProcessResult:
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    started: bool = True


def is_wsl() -> bool:
    if not sys.platform.startswith("linux"):
        return False
    return "microsoft" in platform.uname().release.lower()


def _windir() -> Path:
    return Path(os.environ.get("windir") or os.environ.get("SystemRoot") or r"C:\Windows")


def locate_reg_exe(override: Optional[str] = None) -> str:
    """
    Resolve the reg.exe to run.

    - explicit override / REGTOOL_REG_EXE
    - native Windows: %windir%\\system32\\reg.exe (not whatever reg.exe is first on PATH)
    - WSL: reg.exe through interop
    """
    if override:
        return override
    env_override = os.environ.get(ENV_REG_EXE)
    if env_override:
        return env_override
    if sys.platform == "win32":
        return str(_windir() / "system32" / "reg.exe")
    if is_wsl():
        return "reg.exe"
    raise ToolUnavailableError(
        code=RegExitCode.TOOL_MISSING,
        msg=f"reg.exe is not available on this platform ({sys.platform})",
    )


def _chcp_path() -> str:
    return str(_windir() / "system32" / "chcp.com")


def _unquote(a: str) -> str:
    if len(a) >= 2 and a[0] == '"' and a[-1] == '"':
        return a[1:-1]
    return a


def plain_args(args: Sequence[str]) -> List[str]:
    """argv as reg.exe must receive it; only the key path (args[1]) arrives pre-quoted."""
    argv = list(args)
    if len(argv) >= 2:
        argv[1] = _unquote(argv[1])
    return argv


# Special to cmd.exe; '%' even inside double quotes.
_CMD_META = frozenset('()%!^"<>&|')


def cmd_escape(a: str) -> str:
    """
    One argument for a cmd.exe command line that reaches the program verbatim.

    CRT quoting first (spaces, embedded quotes), then a caret before every cmd
    metacharacter, quotes included. cmd then stays out of quote mode and takes
    '&' and '%VAR%' as plain text; it removes the carets before running reg.exe.
    """
    quoted = subprocess.list2cmdline([a])
    return "".join("^" + ch if ch in _CMD_META else ch for ch in quoted)


def shell_line(exe: str, args: Sequence[str]) -> str:
    """`chcp 65001 >NUL & reg.exe ...` with every word escaped for cmd.exe."""
    words = [exe] + plain_args(args)
    return f"{cmd_escape(_chcp_path())} 65001 >NUL & " + " ".join(cmd_escape(w) for w in words)


def pretty_cmd(exe: str, args: Sequence[str]) -> str:
    return subprocess.list2cmdline([exe] + plain_args(args))


class ProcessInvoker:
    """
    Runs reg.exe and captures both streams.

    utf8=True on native Windows goes through cmd.exe so the console code page
    can be switched to 65001 first; output is then decoded as UTF-8.
    """

    def __init__(
        self,
        config: Optional[RegConfig] = None,
        *,
        reg_exe: Optional[str] = None,
        timeout_s: Optional[float] = None,
    ):
        cfg = config or RegConfig()
        self.reg_exe = reg_exe or cfg.reg_exe
        self.timeout_s = timeout_s if timeout_s is not None else cfg.timeout_s

    def _encoding(self, utf8: bool) -> str:
        return "utf-8" if utf8 else (locale.getpreferredencoding(False) or "utf-8")

    async def _spawn(self, exe: str, args: List[str], utf8: bool) -> asyncio.subprocess.Process:
        if utf8 and sys.platform == "win32":
            return await asyncio.create_subprocess_shell(
                shell_line(exe, args),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        return await asyncio.create_subprocess_exec(
            exe,
            *plain_args(args),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )

    async def run(self, args: Sequence[str], *, utf8: bool = False) -> ProcessResult:
        argv = list(args)
        try:
            exe = locate_reg_exe(self.reg_exe)
        except ToolUnavailableError as e:
            return ProcessResult(stderr=e.msg, exit_code=-1, started=False)

        logger.debug("reg: %s", pretty_cmd(exe, argv))

        try:
            proc = await self._spawn(exe, argv, utf8)
        except OSError as e:
            logger.debug("reg: launch failed: %s", e)
            return ProcessResult(stderr=str(e), exit_code=-1, started=False)

        try:
            out_b, err_b = await asyncio.wait_for(proc.communicate(), timeout=self.timeout_s)
        except asyncio.TimeoutError:
            await self._kill(proc)
            raise RegistryTimeoutError(
                code=RegExitCode.TIMEOUT,
                msg=f"{argv[0] if argv else 'reg'} timed out after {self.timeout_s}s",
                command=argv[0] if argv else "",
                exit_code=proc.returncode if proc.returncode is not None else -1,
            )
        except asyncio.CancelledError:
            await self._kill(proc)
            raise

        enc = self._encoding(utf8)
        result = ProcessResult(
            stdout=(out_b or b"").decode(enc, errors="replace"),
            stderr=(err_b or b"").decode(enc, errors="replace"),
            exit_code=proc.returncode if proc.returncode is not None else -1,
        )
        logger.trace(  # type: ignore[attr-defined]
            "reg exit=%s\nstdout:\n%s\nstderr:\n%s", result.exit_code, result.stdout, result.stderr
        )
        return result

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
