# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for hive/type/arch tags and key handle validation."""
from __future__ import annotations

import pytest

from fakes.fake_reg import ScriptedReg
from regtool.core.exceptions import RegistryValidationError
from regtool.registry.key import RegistryKey
from regtool.registry.types import (
    HIVES,
    ITEM_PATTERN,
    PATH_PATTERN,
    REG_TYPES,
    Arch,
    Hive,
    ValueType,
    validate_key,
)


@pytest.mark.unit
class TestHive:
    def test_closed_set(self):
        assert [h.value for h in HIVES] == ["HKLM", "HKCU", "HKCR", "HKU", "HKCC"]

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("HKCU", Hive.HKCU),
            ("hkcu", Hive.HKCU),
            ("HKEY_CURRENT_USER", Hive.HKCU),
            ("current_user", Hive.HKCU),
            (Hive.LOCAL_MACHINE, Hive.HKLM),
            ("HKEY_CURRENT_CONFIG", Hive.HKCC),
        ],
    )
    def test_parse(self, raw, expected):
        assert Hive.parse(raw) is expected

    def test_aliases_are_the_same_member(self):
        assert Hive.CURRENT_USER is Hive.HKCU
        assert Hive.HKU.long_name == "HKEY_USERS"

    @pytest.mark.parametrize("raw", ["", "HKXX", "HKEY_PERFORMANCE_DATA", None])
    def test_parse_rejects(self, raw):
        with pytest.raises(RegistryValidationError):
            Hive.parse(raw)


@pytest.mark.unit
class TestValueTypeAndArch:
    def test_seven_types(self):
        assert len(REG_TYPES) == 7
        assert ValueType.parse("reg_dword") is ValueType.REG_DWORD
        assert ValueType.STRING is ValueType.REG_SZ

    def test_bad_type(self):
        with pytest.raises(RegistryValidationError):
            ValueType.parse("REG_LINK")

    def test_arch_flags(self):
        assert Arch.X86.reg_flag == "/reg:32"
        assert Arch.X64.reg_flag == "/reg:64"
        assert Arch.parse(None) is None
        assert Arch.parse("") is None
        assert Arch.parse("X64") is Arch.X64

    @pytest.mark.parametrize("raw", ["amd64", "32", "arm64"])
    def test_bad_arch(self, raw):
        with pytest.raises(RegistryValidationError):
            Arch.parse(raw)


@pytest.mark.unit
class TestKeyValidation:
    @pytest.mark.parametrize("key", ["", "\\Software", "\\Software\\Example App\\v2_0", "\\A\\B\\C"])
    def test_valid(self, key):
        assert validate_key(key) == key

    @pytest.mark.parametrize("key", ["Software", "\\Software\\", "\\Soft.ware", "\\a\\\\b", "\\x/y"])
    def test_invalid(self, key):
        with pytest.raises(RegistryValidationError):
            validate_key(key)

    def test_handle_construction_validates_everything(self):
        inv = ScriptedReg()
        RegistryKey(Hive.HKCU, "\\Software\\ExampleApp", arch="x86", invoker=inv)
        with pytest.raises(RegistryValidationError):
            RegistryKey("HKXX", "\\Software", invoker=inv)
        with pytest.raises(RegistryValidationError):
            RegistryKey(Hive.HKCU, "\\Soft-ware", invoker=inv)
        with pytest.raises(RegistryValidationError):
            RegistryKey(Hive.HKCU, "\\Software", arch="ia64", invoker=inv)


@pytest.mark.unit
class TestPatterns:
    def test_item_pattern(self):
        m = ITEM_PATTERN.match("Install Path    REG_EXPAND_SZ    %ProgramFiles%\\Example App")
        assert m.group(1) == "Install Path"
        assert m.group(2) == "REG_EXPAND_SZ"
        assert m.group(3) == "%ProgramFiles%\\Example App"

    def test_item_pattern_first_type_token_wins(self):
        m = ITEM_PATTERN.match("Note    REG_SZ    see REG_DWORD docs")
        assert m.group(2) == "REG_SZ"
        assert m.group(3) == "see REG_DWORD docs"

    def test_item_pattern_empty_data(self):
        m = ITEM_PATTERN.match("Empty    REG_SZ")
        assert m.group(1) == "Empty"
        assert m.group(3) is None

    def test_item_pattern_rejects_header(self):
        assert ITEM_PATTERN.match("HKEY_CURRENT_USER\\Software\\ExampleApp") is None

    def test_path_pattern(self):
        m = PATH_PATTERN.match("HKEY_LOCAL_MACHINE\\Software\\Foo")
        assert m.group(1) == "HKEY_LOCAL_MACHINE"
        assert m.group(2) == "\\Software\\Foo"
        m = PATH_PATTERN.match("\\\\fileserver\\HKEY_USERS\\S_1_5")
        assert m.group(2) == "\\S_1_5"
        assert PATH_PATTERN.match("    Mode    REG_SZ    debug".strip()) is None
