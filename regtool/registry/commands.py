# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/registry/commands.py
"""
reg.exe argument lists.

Every builder is a pure function of the handle and its arguments and
returns the full argv tail (sub-command first), e.g.:

    QUERY HKCU\\Software\\ExampleApp /v Mode /reg:64
    ADD HKCU\\Software\\ExampleApp /v Mode /t REG_SZ /d debug /f
    DELETE HKCU\\Software\\ExampleApp /f /va
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Union

from .types import Arch, ValueType

if TYPE_CHECKING:  # pragma: no cover
    from .key import RegistryKey


class RegCommand(str, Enum):
    QUERY = "QUERY"
    ADD = "ADD"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


def full_path(host: str, hive: str, key: str) -> str:
    return (f"\\\\{host}\\" if host else "") + str(hive) + key


def path_arg(key: "RegistryKey") -> str:
    # Quoted so the utf8 shell pipeline keeps paths with spaces in one argument.
    return f'"{key.path}"' if key.utf8 else key.path


def _name_args(name: str) -> List[str]:
    return ["/ve"] if name == "" else ["/v", name]


def _push_arch(args: List[str], arch: Optional[Arch]) -> List[str]:
    if arch is not None:
        args.append(Arch.parse(arch).reg_flag)
    return args


def query_args(key: "RegistryKey") -> List[str]:
    return _push_arch([RegCommand.QUERY.value, path_arg(key)], key.arch)


def get_args(key: "RegistryKey", name: str) -> List[str]:
    return _push_arch([RegCommand.QUERY.value, path_arg(key)] + _name_args(name), key.arch)


def set_args(key: "RegistryKey", name: str, value_type: Union[ValueType, str], data: str) -> List[str]:
    vt = ValueType.parse(value_type)
    args = [RegCommand.ADD.value, path_arg(key)] + _name_args(name)
    args += ["/t", vt.value, "/d", str(data), "/f"]
    return _push_arch(args, key.arch)


def remove_args(key: "RegistryKey", name: str) -> List[str]:
    return _push_arch([RegCommand.DELETE.value, path_arg(key), "/f"] + _name_args(name), key.arch)


def clear_args(key: "RegistryKey") -> List[str]:
    return _push_arch([RegCommand.DELETE.value, path_arg(key), "/f", "/va"], key.arch)


def destroy_args(key: "RegistryKey") -> List[str]:
    return _push_arch([RegCommand.DELETE.value, path_arg(key), "/f"], key.arch)


def create_args(key: "RegistryKey") -> List[str]:
    return _push_arch([RegCommand.ADD.value, path_arg(key), "/f"], key.arch)
