# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/registry/__init__.py
"""
reg.exe backed registry access.

- types: hive / value type / architecture tags and output patterns
- commands: reg.exe argument lists
- invoker: process execution and reg.exe discovery
- errors: exit status classification
- parser: reg QUERY output parsing
- key: RegistryKey facade
"""

from .item import RegistryItem
from .key import RegistryKey
from .types import ARCHS, DEFAULT_VALUE, HIVES, REG_TYPES, Arch, Hive, ValueType

__all__ = [
    "RegistryKey",
    "RegistryItem",
    "Hive",
    "ValueType",
    "Arch",
    "DEFAULT_VALUE",
    "HIVES",
    "REG_TYPES",
    "ARCHS",
]
