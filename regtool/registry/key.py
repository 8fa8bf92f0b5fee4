# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/registry/key.py
"""
RegistryKey: a validated handle on one registry key plus the operations on it.

    key = RegistryKey(Hive.HKCU, r"\\Software\\ExampleApp", arch=Arch.X64)
    await key.create()
    await key.set("Mode", ValueType.REG_SZ, "debug")
    item = await key.get("Mode")          # RegistryItem or None
    for child in await key.keys():
        ...

Each coroutine runs reg.exe exactly once: build args -> invoke -> classify -> parse.
"""
from __future__ import annotations

import re
import warnings
from typing import Any, Awaitable, List, Optional, Protocol, Sequence, Tuple, Union

from ..core.exceptions import wrap_validation
from ..core.logger import get_logger
from . import commands, parser
from .errors import Outcome, classify
from .invoker import ProcessInvoker, ProcessResult
from .item import RegistryItem
from .types import Arch, Hive, ValueType, validate_key

logger = get_logger("key")

_FULL_PATH_RE = re.compile(r"^(?:\\\\(?P<host>[^\\]+)\\)?(?P<hive>[^\\]+)(?P<key>(?:\\.*)?)$")


class Invoker(Protocol):
    async def run(self, args: Sequence[str], *, utf8: bool = False) -> ProcessResult: ...


class RegistryKey:
    __slots__ = ("_host", "_hive", "_key", "_arch", "_utf8", "_invoker")

    def __init__(
        self,
        hive: Union[Hive, str] = Hive.HKLM,
        key: Optional[str] = "",
        *,
        host: Optional[str] = "",
        arch: Union[Arch, str, None] = None,
        utf8: bool = False,
        invoker: Optional[Invoker] = None,
    ):
        self._host = str(host or "")
        self._hive = Hive.parse(hive)
        self._key = validate_key(key)
        self._arch = Arch.parse(arch)
        self._utf8 = bool(utf8)
        self._invoker = invoker if invoker is not None else ProcessInvoker()

    @classmethod
    def from_path(cls, path: str, **kwargs: Any) -> "RegistryKey":
        """Build a handle from '\\\\host\\HKCU\\Software\\X', 'HKEY_CURRENT_USER\\Software' and the like."""
        m = _FULL_PATH_RE.match(str(path or "").strip())
        if not m:
            raise wrap_validation(f"illegal registry path: {path!r}", path=path)
        if m.group("host") and not kwargs.get("host"):
            kwargs["host"] = m.group("host")
        return cls(m.group("hive"), m.group("key").rstrip("\\"), **kwargs)

    # ------------------------------------------------------------------
    # Value-object surface
    # ------------------------------------------------------------------

    @property
    def host(self) -> str:
        return self._host

    @property
    def hive(self) -> Hive:
        return self._hive

    @property
    def key(self) -> str:
        return self._key

    @property
    def arch(self) -> Optional[Arch]:
        return self._arch

    @property
    def utf8(self) -> bool:
        return self._utf8

    @property
    def path(self) -> str:
        return commands.full_path(self._host, self._hive.value, self._key)

    @property
    def parent(self) -> "RegistryKey":
        """The key one level up; the parent of a hive root is that root again."""
        i = self._key.rfind("\\")
        return self.with_key("" if i == -1 else self._key[:i])

    def with_key(self, key: str) -> "RegistryKey":
        return RegistryKey(
            self._hive,
            key,
            host=self._host,
            arch=self._arch,
            utf8=self._utf8,
            invoker=self._invoker,
        )

    def subkey(self, name: str) -> "RegistryKey":
        segment = str(name).strip("\\")
        return self.with_key(self._key + "\\" + segment)

    def _ident(self) -> Tuple[Any, ...]:
        # The registry is case-insensitive.
        return (self._host.lower(), self._hive, self._key.lower(), self._arch, self._utf8)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegistryKey):
            return NotImplemented
        return self._ident() == other._ident()

    def __hash__(self) -> int:
        return hash(self._ident())

    def __repr__(self) -> str:
        arch = f", arch={self._arch.value!r}" if self._arch else ""
        return f"RegistryKey({self.path!r}{arch})"

    # ------------------------------------------------------------------
    # reg.exe round trip
    # ------------------------------------------------------------------

    async def _execute(self, args: List[str]) -> Tuple[Outcome, ProcessResult]:
        result = await self._invoker.run(args, utf8=self._utf8)
        outcome = classify(args[0], result)
        if outcome is Outcome.ABSENT:
            logger.debug("%s %s: not found", args[0], self.path)
        return outcome, result

    async def _run(self, args: List[str]) -> None:
        await self._execute(args)

    async def _query(self) -> Tuple[Outcome, ProcessResult]:
        return await self._execute(commands.query_args(self))

    async def values(self) -> List[RegistryItem]:
        """All values of this key, in reg.exe's order. [] if the key does not exist."""
        outcome, result = await self._query()
        if outcome is Outcome.ABSENT:
            return []
        return parser.parse_values(self, result.stdout)

    async def keys(self) -> List["RegistryKey"]:
        """Direct subkeys of this key. [] if the key does not exist."""
        outcome, result = await self._query()
        if outcome is Outcome.ABSENT:
            return []
        return parser.parse_subkeys(self, result.stdout)

    async def get(self, name: str = "") -> Optional[RegistryItem]:
        """A single value; "" is the default value. None if it does not exist."""
        outcome, result = await self._execute(commands.get_args(self, name))
        if outcome is Outcome.ABSENT:
            return None
        return parser.parse_value(self, name, result.stdout)

    def set(self, name: str, value_type: Union[ValueType, str], value: str) -> Awaitable[None]:
        """
        Create or overwrite a value. The key is created if needed.

        The argv is built before the awaitable is returned, so an unknown
        value type raises RegistryValidationError at the call itself.
        """
        return self._run(commands.set_args(self, name, value_type, value))

    async def remove(self, name: str = "") -> None:
        """Delete one value; "" deletes the default value. Missing values raise."""
        await self._execute(commands.remove_args(self, name))

    async def clear(self) -> None:
        """Delete every value in this key (subkeys stay)."""
        await self._execute(commands.clear_args(self))

    async def erase(self) -> None:
        warnings.warn("RegistryKey.erase() is deprecated, use clear() or destroy()", DeprecationWarning, stacklevel=2)
        await self.clear()

    async def destroy(self) -> None:
        """Delete this key and everything below it."""
        await self._execute(commands.destroy_args(self))

    async def create(self) -> None:
        """Create this key; no-op if it already exists."""
        await self._execute(commands.create_args(self))

    async def key_exists(self) -> bool:
        outcome, _ = await self._query()
        return outcome is Outcome.OK

    async def value_exists(self, name: str = "") -> bool:
        return (await self.get(name)) is not None
