# SPDX-License-Identifier: LGPL-3.0-or-later
# regtool/core/__init__.py
from .config import RegConfig, load_config
from .exceptions import (
    ConfigError,
    RegExitCode,
    RegistryCommandError,
    RegistryTimeoutError,
    RegistryValidationError,
    RegToolError,
    ToolUnavailableError,
)

__all__ = [
    "RegConfig",
    "load_config",
    "RegExitCode",
    "RegToolError",
    "RegistryValidationError",
    "ToolUnavailableError",
    "RegistryCommandError",
    "RegistryTimeoutError",
    "ConfigError",
]
