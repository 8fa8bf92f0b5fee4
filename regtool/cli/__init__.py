# SPDX-License-Identifier: LGPL-3.0-or-later
# regtool/cli/__init__.py
"""
Command-line interface.

- args: argparse parser + config/logging bootstrap
- main: command dispatch and output
"""

from .main import main

__all__ = ["main"]
