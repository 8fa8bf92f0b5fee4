#!/usr/bin/env python3
# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Example: Managing per-user application settings with the regtool library.

This example demonstrates:
- Creating a key and writing values of different types
- Reading a single value and listing all values
- Walking subkeys concurrently
- Cleaning up

Usage (Windows or WSL):
    python library_app_settings.py [--arch x64]
"""

import argparse
import asyncio
import sys

from regtool import Hive, RegistryKey, RegToolError, ValueType
from regtool.core.logger import Log

logger = Log.setup(verbose=1)


async def demo(arch):
    app = RegistryKey(Hive.HKCU, r"\Software\ExampleApp", arch=arch)

    await app.create()
    await app.set("Mode", ValueType.REG_SZ, "debug")
    await app.set("Retries", ValueType.REG_DWORD, "3")
    await app.subkey("Plugins").create()
    await app.subkey("Cache").set("Size", ValueType.REG_QWORD, "0x100000")

    mode = await app.get("Mode")
    logger.info("Mode = %s (%s)", mode.value, mode.type.value)

    for item in await app.values():
        logger.info("  %s %s %s", item.name or "(Default)", item.type.value, item.value)

    children = await app.keys()
    counts = await asyncio.gather(*(child.values() for child in children))
    for child, values in zip(children, counts):
        logger.info("  %s: %d value(s)", child.path, len(values))

    await app.destroy()
    Log.ok(logger, "cleaned up", key=app.path)


def main():
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--arch", choices=["x86", "x64"], default=None)
    args = parser.parse_args()

    try:
        asyncio.run(demo(args.arch))
    except RegToolError as e:
        Log.fail(logger, e.user_message(include_context=True))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
