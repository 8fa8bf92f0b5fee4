# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/registry/types.py
"""Hive, value type and architecture tags plus the patterns reg.exe output is matched against."""
from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Union

from ..core.exceptions import wrap_validation


class Hive(str, Enum):
    HKLM = "HKLM"
    HKCU = "HKCU"
    HKCR = "HKCR"
    HKU = "HKU"
    HKCC = "HKCC"

    # Aliases
    LOCAL_MACHINE = "HKLM"
    CURRENT_USER = "HKCU"
    CLASSES_ROOT = "HKCR"
    USERS = "HKU"
    CURRENT_CONFIG = "HKCC"

    @property
    def long_name(self) -> str:
        """The name reg.exe prints in its output, e.g. HKEY_CURRENT_USER."""
        return _LONG_NAMES[self]

    @classmethod
    def parse(cls, value: Union["Hive", str]) -> "Hive":
        """Accept Hive, 'HKCU', 'current_user' or 'HKEY_CURRENT_USER' (any case)."""
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().upper()
        if s in cls.__members__:
            return cls.__members__[s]
        for hive, long_name in _LONG_NAMES.items():
            if s == long_name:
                return hive
        raise wrap_validation(f"illegal hive specified: {value!r}", hive=value)

    def __str__(self) -> str:
        return self.value


_LONG_NAMES = {
    Hive.HKLM: "HKEY_LOCAL_MACHINE",
    Hive.HKCU: "HKEY_CURRENT_USER",
    Hive.HKCR: "HKEY_CLASSES_ROOT",
    Hive.HKU: "HKEY_USERS",
    Hive.HKCC: "HKEY_CURRENT_CONFIG",
}


class ValueType(str, Enum):
    REG_SZ = "REG_SZ"
    REG_MULTI_SZ = "REG_MULTI_SZ"
    REG_EXPAND_SZ = "REG_EXPAND_SZ"
    REG_DWORD = "REG_DWORD"
    REG_QWORD = "REG_QWORD"
    REG_BINARY = "REG_BINARY"
    REG_NONE = "REG_NONE"

    # Aliases
    STRING = "REG_SZ"
    MULTI_STRING = "REG_MULTI_SZ"
    EXPANDABLE_STRING = "REG_EXPAND_SZ"
    DWORD = "REG_DWORD"
    QWORD = "REG_QWORD"
    BINARY = "REG_BINARY"
    NONE = "REG_NONE"

    @classmethod
    def parse(cls, value: Union["ValueType", str]) -> "ValueType":
        if isinstance(value, cls):
            return value
        s = str(value or "").strip().upper()
        if s in cls.__members__:
            return cls.__members__[s]
        raise wrap_validation(f"illegal type specified: {value!r}", type=value)

    def __str__(self) -> str:
        return self.value


class Arch(str, Enum):
    X86 = "x86"
    X64 = "x64"

    @property
    def reg_flag(self) -> str:
        return "/reg:32" if self is Arch.X86 else "/reg:64"

    @classmethod
    def parse(cls, value: Union["Arch", str, None]) -> Optional["Arch"]:
        """None/'' means process-native; anything but x86/x64 is rejected."""
        if value is None or value == "":
            return None
        if isinstance(value, cls):
            return value
        s = str(value).strip().lower()
        for arch in cls:
            if s == arch.value:
                return arch
        raise wrap_validation(f"illegal architecture specified (use x86 or x64): {value!r}", arch=value)

    def __str__(self) -> str:
        return self.value


DEFAULT_VALUE = ""

HIVES = tuple(Hive.__members__[n] for n in ("HKLM", "HKCU", "HKCR", "HKU", "HKCC"))
REG_TYPES = tuple(
    ValueType.__members__[n]
    for n in ("REG_SZ", "REG_MULTI_SZ", "REG_EXPAND_SZ", "REG_DWORD", "REG_QWORD", "REG_BINARY", "REG_NONE")
)
ARCHS = (Arch.X86, Arch.X64)

_TYPE_ALT = "|".join(t.value for t in REG_TYPES)
_HIVE_ALT = "|".join(_LONG_NAMES[h] for h in HIVES)

KEY_PATTERN = re.compile(r"(\\[a-zA-Z0-9_\s]+)*")
# Optional \\host\ prefix shows up when querying a remote machine.
PATH_PATTERN = re.compile(r"^(?:\\\\[^\\]+\\)?(" + _HIVE_ALT + r")(.*)$")
# name, type, value. reg.exe separates them with exactly four spaces, so a type
# token inside a name or inside the data is never taken for the type.
ITEM_PATTERN = re.compile(r"^(.*?) {4}(" + _TYPE_ALT + r")(?: {4}(.*))?$")


def validate_key(key: Optional[str]) -> str:
    """Return the key path if every segment is legal, raise RegistryValidationError otherwise."""
    k = "" if key is None else str(key)
    if not KEY_PATTERN.fullmatch(k):
        raise wrap_validation(f"illegal key specified: {k!r}", key=k)
    return k
