# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# regtool/core/config.py
"""
Configuration for regtool.

Precedence (lowest to highest):
  - dataclass defaults
  - config files (YAML or JSON, later files override earlier ones)
  - environment (REGTOOL_REG_EXE, REGTOOL_TIMEOUT)
  - explicit overrides (CLI flags)

Example YAML:

    reg_exe: C:\\Windows\\System32\\reg.exe
    arch: x64
    utf8: true
    timeout_s: 30
"""
from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

import yaml

from .exceptions import ConfigError, RegExitCode

ENV_REG_EXE = "REGTOOL_REG_EXE"
ENV_TIMEOUT = "REGTOOL_TIMEOUT"


@dataclass
class RegConfig:
    reg_exe: Optional[str] = None  # override platform detection
    host: str = ""
    arch: Optional[str] = None
    utf8: bool = False
    timeout_s: Optional[float] = None  # None = wait forever

    def merged(self, overrides: Mapping[str, Any]) -> "RegConfig":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        data = asdict(self)
        for k, v in overrides.items():
            if k in known and v is not None:
                data[k] = v
        return _coerce(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _flag(data: Dict[str, Any], name: str) -> bool:
    # "false" in a file is a string, and bool("false") is True.
    v = data.get(name)
    if v is None:
        return False
    if not isinstance(v, bool):
        raise ConfigError(
            code=RegExitCode.USAGE,
            msg=f"invalid configuration value: {name} must be true or false, got {v!r}",
        )
    return v


def _coerce(data: Dict[str, Any]) -> RegConfig:
    utf8 = _flag(data, "utf8")
    try:
        timeout = data.get("timeout_s")
        return RegConfig(
            reg_exe=str(data["reg_exe"]) if data.get("reg_exe") else None,
            host=str(data.get("host") or ""),
            arch=str(data["arch"]) if data.get("arch") else None,
            utf8=utf8,
            timeout_s=float(timeout) if timeout not in (None, "") else None,
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(code=RegExitCode.USAGE, msg=f"invalid configuration value: {e}", cause=e) from e


def _read_structured_file(path: Path) -> Dict[str, Any]:
    """
    Read a JSON/YAML file into a dict.

    *.json is parsed as JSON; everything else goes through yaml.safe_load
    (YAML is a superset of JSON, so suffix-less JSON files work too).
    """
    try:
        raw = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ConfigError(code=RegExitCode.USAGE, msg=f"cannot read config file: {path}", cause=e) from e

    try:
        if path.suffix.lower() == ".json":
            parsed = json.loads(raw)
        else:
            parsed = yaml.safe_load(raw)
    except (ValueError, yaml.YAMLError) as e:
        raise ConfigError(code=RegExitCode.USAGE, msg=f"cannot parse config file: {path}", cause=e) from e

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigError(code=RegExitCode.USAGE, msg=f"top-level config must be a mapping: {path}")
    return parsed


def _env_overrides(env: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if env.get(ENV_REG_EXE):
        out["reg_exe"] = env[ENV_REG_EXE]
    if env.get(ENV_TIMEOUT):
        out["timeout_s"] = env[ENV_TIMEOUT]
    return out


def load_config(
    paths: Iterable[Union[str, Path]] = (),
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> RegConfig:
    merged: Dict[str, Any] = {}
    for p in paths:
        merged.update(_read_structured_file(Path(p).expanduser()))

    merged.update(_env_overrides(os.environ if env is None else env))

    cfg = _coerce(merged)
    return cfg.merged(overrides or {})
