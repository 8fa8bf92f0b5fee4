# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/registry/parser.py
"""
Parsing of `reg QUERY` output.

Typical output of `reg query HKCU\\Software\\ExampleApp`:

    HKEY_CURRENT_USER\\Software\\ExampleApp
        (Default)    REG_SZ    (value not set)
        Mode    REG_SZ    debug
        Retries    REG_DWORD    0x3

    HKEY_CURRENT_USER\\Software\\ExampleApp\\Cache
    HKEY_CURRENT_USER\\Software\\ExampleApp\\Plugins

Value lines match ITEM_PATTERN, subkey lines match PATH_PATTERN. Anything
else (headers, blank lines, "End of search" trailers) is dropped; parsing
never raises.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ..core.exceptions import RegistryValidationError
from ..core.logger import get_logger
from .item import RegistryItem
from .types import ITEM_PATTERN, PATH_PATTERN, ValueType

if TYPE_CHECKING:  # pragma: no cover
    from .key import RegistryKey

logger = get_logger("parser")

# reg.exe's label for the unnamed value in enumerations.
DEFAULT_VALUE_LABEL = "(Default)"


def significant_lines(text: str) -> List[str]:
    out: List[str] = []
    for raw in (text or "").splitlines():
        line = raw.strip()
        if len(line) > 1:
            out.append(line)
    return out


def _match_item(key: "RegistryKey", line: str, name: Optional[str] = None) -> Optional[RegistryItem]:
    m = ITEM_PATTERN.match(line)
    if not m:
        return None
    parsed_name = m.group(1).strip()
    if name is None:
        name = "" if parsed_name == DEFAULT_VALUE_LABEL else parsed_name
    return RegistryItem(
        host=key.host,
        hive=key.hive,
        key=key.key,
        name=name,
        type=ValueType(m.group(2).strip()),
        value=m.group(3) or "",
        arch=key.arch,
    )


def parse_values(key: "RegistryKey", text: str) -> List[RegistryItem]:
    items: List[RegistryItem] = []
    for line in significant_lines(text):
        item = _match_item(key, line)
        if item is not None:
            items.append(item)
    return items


def parse_subkeys(key: "RegistryKey", text: str) -> List["RegistryKey"]:
    children: List["RegistryKey"] = []
    own = key.key.lower()
    for line in significant_lines(text):
        m = PATH_PATTERN.match(line)
        if not m:
            continue
        sub = m.group(2)
        if not sub or sub.lower() == own:
            continue
        try:
            children.append(key.with_key(sub))
        except RegistryValidationError:
            logger.warning("skipping subkey with unsupported characters: %s", line)
    return children


def parse_value(key: "RegistryKey", name: str, text: str) -> Optional[RegistryItem]:
    """
    Match only the last line: some Windows versions print an extra header
    before the single result. None means "no such value".
    """
    lines = significant_lines(text)
    if not lines:
        return None
    return _match_item(key, lines[-1], name=name)
