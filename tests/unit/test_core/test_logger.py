# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for logging setup, the TRACE level and the formatters."""
from __future__ import annotations

import json
import logging

import pytest

from regtool.core.logger import (
    LOGGER_NAME,
    TRACE,
    EmojiFormatter,
    JsonFormatter,
    Log,
    LogStyle,
    get_logger,
)


def _record(msg="hello %s", args=("world",), level=logging.INFO, ctx=None):
    rec = logging.LogRecord("regtool.test", level, __file__, 42, msg, args, None)
    if ctx is not None:
        rec.ctx = ctx
    return rec


@pytest.mark.unit
class TestLevels:
    @pytest.mark.parametrize(
        "verbose,quiet,expected",
        [
            (0, 0, logging.WARNING),
            (1, 0, logging.INFO),
            (2, 0, logging.DEBUG),
            (3, 0, TRACE),
            (5, 0, TRACE),
            (2, 1, logging.ERROR),
        ],
    )
    def test_level_from_flags(self, verbose, quiet, expected):
        assert Log._level_from_flags(verbose, quiet) == expected

    def test_trace_level_registered(self):
        assert logging.getLevelName(TRACE) == "TRACE"
        assert hasattr(logging.getLogger("x"), "trace")


@pytest.mark.unit
class TestGetLogger:
    def test_namespaced(self):
        assert get_logger().name == LOGGER_NAME
        assert get_logger("invoker").name == "regtool.invoker"

    def test_library_adds_no_handlers(self):
        assert get_logger("parser").handlers == []


@pytest.mark.unit
class TestFormatters:
    def test_emoji_formatter_plain(self):
        out = EmojiFormatter(LogStyle(color=False)).format(_record(ctx={"hive": "HKCU"}))
        assert "INFO" in out
        assert "hello world" in out
        assert out.endswith("hive=HKCU")

    def test_emoji_formatter_ascii_fallback(self):
        out = EmojiFormatter(LogStyle(color=False, unicode=False)).format(_record())
        assert "·" in out
        assert "✅" not in out

    def test_json_formatter(self):
        obj = json.loads(JsonFormatter().format(_record(ctx={"exit_code": 1})))
        assert obj["level"] == "INFO"
        assert obj["logger"] == "regtool.test"
        assert obj["msg"] == "hello world"
        assert obj["ctx"] == {"exit_code": "1"}
        assert obj["lineno"] == 42


@pytest.mark.unit
class TestSetup:
    def test_setup_configures_one_stream_handler(self):
        lg = Log.setup(verbose=2)
        assert lg.name == LOGGER_NAME
        assert lg.level == logging.DEBUG
        assert lg.propagate is False
        assert len(lg.handlers) == 1
        Log.setup(verbose=0)
        assert len(lg.handlers) == 1

    def test_json_logs_to_stderr(self, capsys):
        lg = Log.setup(verbose=1, json_logs=True)
        get_logger("cli").info("querying %s", "HKCU")
        err = capsys.readouterr().err.strip().splitlines()
        obj = json.loads(err[-1])
        assert obj["msg"] == "querying HKCU"
        assert obj["logger"] == "regtool.cli"
        assert lg.level == logging.INFO

    def test_log_file(self, tmp_path):
        path = tmp_path / "logs" / "regtool.log"
        lg = Log.setup(verbose=1, log_file=str(path), color=False)
        Log.ok(lg, "created", key="\\Software\\ExampleApp")
        for h in lg.handlers:
            h.flush()
        text = path.read_text(encoding="utf-8")
        assert "created" in text
        assert "key=\\Software\\ExampleApp" in text

    def test_bound_adapter_merges_context(self, caplog):
        base = get_logger("key")
        log = Log.bind(base, hive="HKCU").bind(key="\\A")
        with caplog.at_level(TRACE, logger="regtool.key"):
            log.trace("raw output", extra={"ctx": {"exit_code": 0}})
        rec = caplog.records[-1]
        assert rec.levelno == TRACE
        assert rec.ctx == {"hive": "HKCU", "key": "\\A", "exit_code": 0}
