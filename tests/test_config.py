#!/usr/bin/env python3
"""Tests for config loading and logger configuration."""

import json

from utilities.config import DEFAULT_CONFIG, apply_logging, load_config, resolve_platform
from utilities.logger import BlockLogger, LogLevel


def test_missing_file_returns_defaults(tmp_path):
    config = load_config(str(tmp_path / "config.json"))
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG, "Callers must get their own copy"


def test_file_values_override_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"log_level": "DEBUG", "platform": "win32", "extra": 1}), encoding="utf-8")
    config = load_config(str(path))
    assert config["log_level"] == "DEBUG"
    assert config["platform"] == "win32"
    assert config["board"] == "arduinoEsp32"
    assert config["extra"] == 1


def test_invalid_json_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_non_object_json_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_resolve_platform():
    assert resolve_platform({"platform": "darwin"}) == "darwin"
    assert resolve_platform({"platform": None})


def test_apply_logging(tmp_path):
    log_file = tmp_path / "blocks.log"
    apply_logging({
        "log_level": "warning",
        "console_colors": False,
        "log_to_file": True,
        "log_file_path": str(log_file),
    })
    assert BlockLogger.LEVEL == LogLevel.WARNING
    assert BlockLogger.USE_COLORS is False
    assert BlockLogger.WRITE_TO_FILE is True

    BlockLogger.info("CONF", "hidden")
    BlockLogger.warning("CONF", "written")
    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert "[WARN]" in lines[0] and "[CONF]" in lines[0] and lines[0].endswith("written")


def test_log_format():
    line = BlockLogger.format(LogLevel.INFO, "DISP", "hello", "TEST")
    assert line.endswith("[INFO][TEST][DISP] hello")
    assert line.startswith("[")


def test_level_names():
    assert LogLevel.from_name("debug") == LogLevel.DEBUG
    assert LogLevel.from_name("nope") == LogLevel.INFO
    assert LogLevel.from_name(None, LogLevel.ERROR) == LogLevel.ERROR
    assert LogLevel.from_name(LogLevel.NOTE) == LogLevel.NOTE


def test_exception_logs_traceback(tmp_path):
    log_file = tmp_path / "blocks.log"
    BlockLogger.set_level("DEBUG")
    BlockLogger.enable_file_logging(True, str(log_file))
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        BlockLogger.exception("INTR", "body failed", e)
    text = log_file.read_text(encoding="utf-8")
    assert "body failed: RuntimeError('boom')" in text
    assert "Traceback" in text
