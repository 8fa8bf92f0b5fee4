# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/__init__.py
"""
regtool - Windows registry access through reg.exe

Usage as a library:

    import asyncio
    from regtool import RegistryKey, Hive, ValueType

    async def main():
        key = RegistryKey(Hive.HKCU, r"\\Software\\ExampleApp")
        await key.set("Mode", ValueType.REG_SZ, "debug")
        item = await key.get("Mode")
        print(item.value)

    asyncio.run(main())

Works on Windows and under WSL; on any other platform every operation
raises ToolUnavailableError.
"""

__version__ = "0.1.0"

from .core import (
    ConfigError,
    RegConfig,
    RegistryCommandError,
    RegistryTimeoutError,
    RegistryValidationError,
    RegToolError,
    ToolUnavailableError,
    load_config,
)
from .registry import DEFAULT_VALUE, Arch, Hive, RegistryItem, RegistryKey, ValueType

__all__ = [
    "__version__",

    # Handles and records
    "RegistryKey",
    "RegistryItem",
    "Hive",
    "ValueType",
    "Arch",
    "DEFAULT_VALUE",

    # Configuration
    "RegConfig",
    "load_config",

    # Errors
    "RegToolError",
    "RegistryValidationError",
    "ToolUnavailableError",
    "RegistryCommandError",
    "RegistryTimeoutError",
    "ConfigError",
]
