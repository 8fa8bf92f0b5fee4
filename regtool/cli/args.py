# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/cli/args.py
from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence, Tuple

from ..core.config import RegConfig, load_config
from ..core.logger import Log, c
from ..registry.types import REG_TYPES

EPILOG = """\
examples:
  regtool values 'HKCU\\Software\\ExampleApp'
  regtool set 'HKCU\\Software\\ExampleApp' Mode REG_SZ debug
  regtool get 'HKCU\\Software\\ExampleApp' Mode --json
  regtool --arch x86 keys 'HKLM\\Software'
  regtool --host fileserver exists 'HKLM\\Software\\ExampleApp'

config (YAML or JSON, repeat --config to layer files):
  reg_exe: C:\\Windows\\System32\\reg.exe
  arch: x64
  utf8: true
  timeout_s: 30
"""


class HelpFormatter(argparse.RawDescriptionHelpFormatter, argparse.ArgumentDefaultsHelpFormatter):
    """Combines raw description formatting with default value display in help."""


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    from .. import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv (commands), -vvv (raw output)")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Only log errors.")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit logs as NDJSON.")
    p.add_argument("--json", dest="json", action="store_true", help="Print results as JSON only.")


def _add_registry_knobs(p: argparse.ArgumentParser) -> None:
    p.add_argument("--host", default=None, help="Remote machine name (default: local machine).")
    p.add_argument("--arch", default=None, choices=["x86", "x64"], help="Registry view (default: process native).")
    p.add_argument("--utf8", dest="utf8", action="store_true", default=None, help="Decode reg.exe output as UTF-8.")
    p.add_argument("--reg-exe", dest="reg_exe", default=None, help="Path to reg.exe (default: auto-detect).")
    p.add_argument("--timeout", dest="timeout_s", type=float, default=None, help="Kill reg.exe after N seconds.")


def _add_subcommands(p: argparse.ArgumentParser) -> None:
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    def _cmd(name: str, help_text: str, *, value_name: Optional[str] = None) -> argparse.ArgumentParser:
        sp = sub.add_parser(name, help=help_text, formatter_class=HelpFormatter)
        sp.add_argument("path", help="Key path, e.g. HKCU\\Software\\ExampleApp")
        if value_name == "optional":
            sp.add_argument("name", nargs="?", default="", help="Value name ('' = default value).")
        elif value_name == "required":
            sp.add_argument("name", help="Value name ('' = default value).")
        return sp

    _cmd("values", "List the values of a key.")
    _cmd("keys", "List the direct subkeys of a key.")
    _cmd("get", "Show one value.", value_name="optional")
    sp = _cmd("set", "Create or overwrite a value.", value_name="required")
    sp.add_argument("type", type=str.upper, choices=[t.value for t in REG_TYPES], help="Value type.")
    sp.add_argument("data", help="Value data, as reg.exe expects it.")
    _cmd("remove", "Delete one value.", value_name="optional")
    _cmd("clear", "Delete every value of a key.")
    _cmd("destroy", "Delete a key and all its subkeys.")
    _cmd("create", "Create a key (no-op if it exists).")
    _cmd("exists", "Check whether a key exists.")
    _cmd("value-exists", "Check whether a value exists.", value_name="optional")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="regtool",
        description=c("regtool: Windows registry access through reg.exe", "green", ["bold"]),
        formatter_class=HelpFormatter,
        epilog=EPILOG,
    )
    _add_global_config_logging(p)
    _add_registry_knobs(p)
    _add_subcommands(p)
    return p


def parse_args_with_config(
    argv: Optional[Sequence[str]] = None,
) -> Tuple[argparse.Namespace, RegConfig, logging.Logger]:
    """
    Parse CLI flags, set up logging, then layer config files / env / flags.
    Config errors are raised after logging is ready so they get reported once.
    """
    args = build_parser().parse_args(argv)
    logger = Log.setup(
        verbose=args.verbose,
        log_file=args.log_file,
        quiet=args.quiet,
        json_logs=args.json_logs,
    )
    conf = load_config(
        args.config,
        overrides={
            "reg_exe": args.reg_exe,
            "host": args.host,
            "arch": args.arch,
            "utf8": args.utf8,
            "timeout_s": args.timeout_s,
        },
    )
    logger.debug("config: %s", conf.to_dict())
    return args, conf, logger
