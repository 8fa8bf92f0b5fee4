# SPDX-License-Identifier: LGPL-3.0-or-later
# regtool/registry/item.py
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .types import Arch, Hive, ValueType


@dataclass(frozen=True)
class RegistryItem:
    """
    One value as reg.exe printed it.

    `name` is "" for the key's default value. `value` is the tool's text
    rendering (e.g. "0x1f" for a REG_DWORD); nothing is decoded.
    """
    host: str
    hive: Hive
    key: str
    name: str
    type: ValueType
    value: str
    arch: Optional[Arch] = None

    @property
    def is_default(self) -> bool:
        return self.name == ""

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["hive"] = self.hive.value
        d["type"] = self.type.value
        d["arch"] = self.arch.value if self.arch else None
        return d
