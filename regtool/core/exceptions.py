# SPDX-License-Identifier: LGPL-3.0-or-later
# regtool/core/exceptions.py
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class RegExitCode(IntEnum):
    """Process exit status of the regtool CLI, carried by every error as `code`."""
    OK = 0
    UNKNOWN = 1
    USAGE = 2

    NOT_FOUND = 11
    TOOL_MISSING = 13

    COMMAND_FAILED = 20
    TIMEOUT = 21

    INTERRUPTED = 130


def _safe_int(x: Any, default: int = 1) -> int:
    try:
        return int(x)
    except Exception:
        return default


def _clamp_exit_code(code: int) -> int:
    # Process exit codes are 0..255.
    if code < 0:
        return 1
    if code > 255:
        return 255
    return code


def _one_line(s: str, limit: int = 600) -> str:
    s = (s or "").strip().replace("\r", " ").replace("\n", " ")
    s = " ".join(s.split())
    return s if len(s) <= limit else (s[: limit - 3] + "...")


_SECRET_KEY_PARTS = (
    "pass",
    "password",
    "secret",
    "token",
    "credential",
    "auth",
)

REDACTED = "***REDACTED***"


def _is_secret_key(k: str) -> bool:
    ks = (k or "").lower()
    return any(p in ks for p in _SECRET_KEY_PARTS)


def _redact(ctx: Dict[str, Any]) -> Dict[str, Any]:
    return {k: (REDACTED if _is_secret_key(str(k)) else v) for k, v in ctx.items()}


def _format_context_compact(ctx: Dict[str, Any]) -> str:
    # Stable order, redaction, single-line.
    parts = []
    for k in sorted(ctx.keys(), key=str):
        if _is_secret_key(str(k)):
            parts.append(f"{k}=<redacted>")
        else:
            parts.append(f"{k}={ctx[k]!r}")
    return ", ".join(parts)


@dataclass(eq=False)
class RegToolError(Exception):
    """
    Base project error with:
      - stable fields for reporting/JSON
      - readable __str__ (what users see)
      - `code` is the process exit status the CLI should use
    """
    code: int = 1
    msg: str = "error"
    cause: Optional[BaseException] = None
    context: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        self.code = _clamp_exit_code(_safe_int(self.code, default=1))
        self.msg = _one_line(self.msg) or self.__class__.__name__
        if self.context is None:
            self.context = {}
        super().__init__(self.msg)
        self.args = (self.msg,)

    def with_context(self, **ctx: Any) -> "RegToolError":
        self.context.update(ctx)
        return self

    def user_message(self, *, include_context: bool = False, include_cause: bool = False) -> str:
        """Human-friendly message for CLI output/logs."""
        parts = [self.msg or self.__class__.__name__]

        if include_context and self.context:
            parts.append(f"[{_one_line(_format_context_compact(self.context), limit=600)}]")

        if include_cause and self.cause is not None:
            parts.append(f"(cause: {type(self.cause).__name__}: {_one_line(str(self.cause))})")

        return " ".join(parts)

    def __str__(self) -> str:
        return self.user_message(include_context=False, include_cause=False)

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "code": self.code,
            "message": self.msg,
            "context": _redact(self.context or {}),
        }
        if include_cause and self.cause is not None:
            d["cause"] = {"type": type(self.cause).__name__, "message": _one_line(str(self.cause))}
        return d


class RegistryValidationError(RegToolError):
    """
    Invalid hive, key path, architecture or value type.
    Raised synchronously while building a handle or a command, never from a coroutine's I/O.
    """
    pass


class ToolUnavailableError(RegToolError):
    """reg.exe could not be launched (missing on this platform, not executable, ...)."""
    pass


class ConfigError(RegToolError):
    """Configuration file could not be read or has the wrong shape."""
    pass


@dataclass(eq=False)
class RegistryCommandError(RegToolError):
    """
    reg.exe ran and exited non-zero where that is not a benign "not found".

    `exit_code` is the tool's own status; `code` stays the CLI exit status.
    """
    command: str = ""
    exit_code: int = 1
    stdout: str = ""
    stderr: str = ""

    def __post_init__(self) -> None:
        if self.msg == "error":
            self.msg = mk_error_msg(self.command, self.exit_code, self.stdout, self.stderr)
        super().__post_init__()

    def to_dict(self, *, include_cause: bool = False) -> Dict[str, Any]:
        d = super().to_dict(include_cause=include_cause)
        d.update(
            {
                "command": self.command,
                "exit_code": self.exit_code,
                "stdout": self.stdout,
                "stderr": self.stderr,
            }
        )
        return d


class RegistryTimeoutError(RegistryCommandError):
    """reg.exe was killed after exceeding the configured timeout."""
    pass


def mk_error_msg(command: str, exit_code: Any, stdout: str, stderr: str) -> str:
    return f"{command} command exited with code {exit_code}:\n{(stdout or '').strip()}\n{(stderr or '').strip()}"


def wrap_validation(msg: str, exc: Optional[BaseException] = None, **context: Any) -> RegistryValidationError:
    return RegistryValidationError(code=RegExitCode.USAGE, msg=msg, cause=exc, context=context or None)


def format_exception_for_cli(e: BaseException, *, verbose: int = 0) -> str:
    """
    One-liner output for CLI.

    verbose=0: just message
    verbose=1: message + compact context (if any)
    verbose>=2: message + context + cause
    """
    if isinstance(e, RegToolError):
        return e.user_message(
            include_context=(verbose >= 1),
            include_cause=(verbose >= 2),
        )

    if verbose >= 2:
        return f"{type(e).__name__}: {_one_line(str(e))}"
    return _one_line(str(e)) or type(e).__name__
