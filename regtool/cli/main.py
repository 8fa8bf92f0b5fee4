# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/cli/main.py
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import traceback
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.config import RegConfig
from ..core.exceptions import RegExitCode, RegToolError, format_exception_for_cli
from ..registry.errors import exit_code_for
from ..registry.invoker import ProcessInvoker
from ..registry.item import RegistryItem
from ..registry.key import RegistryKey
from .args import parse_args_with_config


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def json_dump(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, default=str)


def _items_table(items: List[RegistryItem], title: str) -> Table:
    t = Table(title=escape(title), title_justify="left")
    t.add_column("Name", style="cyan", no_wrap=True)
    t.add_column("Type", style="magenta")
    t.add_column("Value")
    for it in items:
        t.add_row(escape(it.name or "(Default)"), it.type.value, escape(it.value))
    return t


class _Emitter:
    """
    Exactly one output style per command:
      - --json => JSON payload only on stdout
      - otherwise => rich rendering on stdout
    """

    def __init__(self, args: argparse.Namespace, console: Console):
        self.json = bool(getattr(args, "json", False))
        self.console = console

    def items(self, items: List[RegistryItem], title: str) -> None:
        if self.json:
            print(json_dump([it.to_dict() for it in items]))
        elif items:
            self.console.print(_items_table(items, title))
        else:
            self.console.print(f"[dim]no values in {escape(title)}[/dim]")

    def keys(self, keys: List[RegistryKey]) -> None:
        if self.json:
            print(json_dump([k.path for k in keys]))
            return
        for k in keys:
            self.console.print(escape(k.path), highlight=False)

    def flag(self, value: bool) -> None:
        if self.json:
            print(json_dump(value))
        else:
            self.console.print("[green]yes[/green]" if value else "[yellow]no[/yellow]")

    def done(self, what: str, path: str) -> None:
        if self.json:
            print(json_dump({"ok": True, "action": what, "path": path}))
        else:
            self.console.print(f"[green]{what}[/green] {escape(path)}", highlight=False)


def make_key(args: argparse.Namespace, conf: RegConfig) -> RegistryKey:
    return RegistryKey.from_path(
        args.path,
        host=conf.host or None,
        arch=conf.arch,
        utf8=conf.utf8,
        invoker=ProcessInvoker(conf),
    )


async def run_command(args: argparse.Namespace, conf: RegConfig, out: _Emitter) -> int:
    key = make_key(args, conf)
    cmd = args.command

    if cmd == "values":
        out.items(await key.values(), key.path)
    elif cmd == "keys":
        out.keys(await key.keys())
    elif cmd == "get":
        item = await key.get(args.name)
        if item is None:
            if out.json:
                print(json_dump(None))
            else:
                out.console.print(f"[yellow]value not found:[/yellow] {escape(args.name or '(Default)')}")
            return int(RegExitCode.NOT_FOUND)
        out.items([item], key.path)
    elif cmd == "set":
        await key.set(args.name, args.type, args.data)
        out.done("set", f"{key.path} {args.name or '(Default)'}")
    elif cmd == "remove":
        await key.remove(args.name)
        out.done("removed", f"{key.path} {args.name or '(Default)'}")
    elif cmd == "clear":
        await key.clear()
        out.done("cleared", key.path)
    elif cmd == "destroy":
        await key.destroy()
        out.done("destroyed", key.path)
    elif cmd == "create":
        await key.create()
        out.done("created", key.path)
    elif cmd == "exists":
        found = await key.key_exists()
        out.flag(found)
        return int(RegExitCode.OK if found else RegExitCode.NOT_FOUND)
    elif cmd == "value-exists":
        found = await key.value_exists(args.name)
        out.flag(found)
        return int(RegExitCode.OK if found else RegExitCode.NOT_FOUND)
    else:  # pragma: no cover - argparse restricts choices
        raise ValueError(f"unknown command: {cmd}")
    return int(RegExitCode.OK)


def main(argv: Optional[Sequence[str]] = None, *, console: Optional[Console] = None) -> int:
    logger: Optional[logging.Logger] = None
    verbose = 0
    try:
        args, conf, logger = parse_args_with_config(argv)
        verbose = args.verbose
        return asyncio.run(run_command(args, conf, _Emitter(args, console or Console())))
    except RegToolError as e:
        msg = format_exception_for_cli(e, verbose=verbose)
        if logger is not None:
            logger.error("%s", msg)
        else:
            _print_stderr(f"💥 ERROR    {msg}")
        return int(exit_code_for(e))
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        return int(RegExitCode.INTERRUPTED)
    except Exception as e:
        # Unexpected: keep it to one line unless debug logging is on.
        if logger is not None:
            logger.error("💥 UNHANDLED %s: %s", type(e).__name__, e)
            logger.debug("%s", traceback.format_exc())
        else:
            _print_stderr(f"💥 UNHANDLED {type(e).__name__}: {e}")
        return int(RegExitCode.UNKNOWN)
