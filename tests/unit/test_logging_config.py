"""Unit tests for statesync logging configuration."""

from __future__ import annotations

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from unittest import mock

import statesync
from statesync.logging_config import (
    LOGGER_NAME,
    JsonFormatter,
    _clear_handlers,
    _get_level,
    _get_logger,
)


class TestSilentByDefault:
    """Tests that the library is silent by default."""

    def test_import_produces_no_log_output(self, capfd):
        import importlib

        importlib.reload(statesync)

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


class TestEnableConsoleLogging:
    """Tests for enable_console_logging."""

    def test_sets_level(self):
        statesync.enable_console_logging(level="DEBUG")
        assert _get_logger().level == logging.DEBUG

    def test_outputs_to_stderr(self, capfd):
        statesync.enable_console_logging(level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("test message")

        assert "test message" in capfd.readouterr().err

    def test_custom_format(self, capfd):
        statesync.enable_console_logging(level="INFO", format="[CUSTOM] %(message)s")
        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")

        assert "[CUSTOM] hello" in capfd.readouterr().err

    def test_json_output(self, capfd):
        statesync.enable_console_logging(level="INFO", json=True)
        logging.getLogger(f"{LOGGER_NAME}.test").info("json test")

        data = json.loads(capfd.readouterr().err.strip())
        assert data["message"] == "json test"
        assert data["level"] == "INFO"
        assert data["logger"] == f"{LOGGER_NAME}.test"
        assert "timestamp" in data

    def test_gset_debug_logs_reach_console(self, capfd):
        statesync.enable_console_logging(level="DEBUG")
        statesync.GSet().add("a").get_and_reset_delta()

        assert "GSet delta harvested" in capfd.readouterr().err


class TestEnableFileLogging:
    """Tests for enable_file_logging."""

    def test_creates_parent_directories(self, tmp_path):
        log_file = tmp_path / "nested" / "dir" / "replica.log"
        statesync.enable_file_logging(log_file)
        assert log_file.parent.exists()

    def test_writes_to_file(self, tmp_path):
        log_file = tmp_path / "replica.log"
        statesync.enable_file_logging(log_file, level="INFO")
        logging.getLogger(f"{LOGGER_NAME}.test").info("file test message")

        for handler in _get_logger().handlers:
            handler.flush()
        assert "file test message" in log_file.read_text()

    def test_respects_rotation_settings(self, tmp_path):
        handler = statesync.enable_file_logging(
            tmp_path / "replica.log", max_bytes=1024, backup_count=3
        )
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 3

    def test_writes_json_lines(self, tmp_path):
        log_file = tmp_path / "replica.json"
        statesync.enable_file_logging(log_file, level="INFO", json=True)
        logging.getLogger(f"{LOGGER_NAME}.test").info("json file test")

        for handler in _get_logger().handlers:
            handler.flush()
        assert json.loads(log_file.read_text().strip())["message"] == "json file test"


class TestConfigureFromEnv:
    """Tests for configure_from_env."""

    def test_respects_level_env(self):
        with mock.patch.dict(os.environ, {"STATESYNC_LOGGING": "DEBUG"}, clear=False):
            statesync.configure_from_env()
        assert _get_logger().level == logging.DEBUG

    def test_respects_log_file_env(self, tmp_path):
        log_file = tmp_path / "env.log"
        with mock.patch.dict(
            os.environ,
            {"STATESYNC_LOGGING": "INFO", "STATESYNC_LOG_FILE": str(log_file)},
            clear=False,
        ):
            statesync.configure_from_env()

        assert any(isinstance(h, RotatingFileHandler) for h in _get_logger().handlers)

    def test_respects_json_env(self, capfd):
        with mock.patch.dict(
            os.environ, {"STATESYNC_LOGGING": "INFO", "STATESYNC_LOG_JSON": "1"}, clear=False
        ):
            statesync.configure_from_env()

        logging.getLogger(f"{LOGGER_NAME}.test").info("json env test")
        assert json.loads(capfd.readouterr().err.strip())["message"] == "json env test"

    def test_does_nothing_when_no_env_vars(self):
        initial_count = len(_get_logger().handlers)
        with mock.patch.dict(os.environ, {}, clear=True):
            statesync.configure_from_env()
        assert len(_get_logger().handlers) == initial_count


class TestLevels:
    """Tests for set_level, set_module_level and disable_logging."""

    def test_set_level_by_string(self):
        statesync.set_level("WARNING")
        assert _get_logger().level == logging.WARNING

    def test_set_level_by_int(self):
        statesync.set_level(logging.ERROR)
        assert _get_logger().level == logging.ERROR

    def test_set_module_level(self):
        statesync.set_module_level("crdt.gset", "DEBUG")
        assert logging.getLogger(f"{LOGGER_NAME}.crdt.gset").level == logging.DEBUG
        logging.getLogger(f"{LOGGER_NAME}.crdt.gset").setLevel(logging.NOTSET)

    def test_disable_logging_silences_output(self, capfd):
        statesync.enable_console_logging(level="DEBUG")
        statesync.disable_logging()
        logging.getLogger(f"{LOGGER_NAME}.test").critical("this should not appear")

        assert "this should not appear" not in capfd.readouterr().err
        assert all(isinstance(h, logging.NullHandler) for h in _get_logger().handlers)


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format_with_exception(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            import sys

            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="test.logger",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="error occurred",
            args=(),
            exc_info=exc_info,
        )
        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "error occurred"
        assert "RuntimeError" in data["exception"]


class TestHelperFunctions:
    """Tests for internal helpers."""

    def test_get_level(self):
        assert _get_level("debug") == logging.DEBUG
        assert _get_level(logging.ERROR) == logging.ERROR
        assert _get_level("INVALID") == logging.INFO

    def test_clear_handlers_keeps_null_handler(self):
        logger = _get_logger()
        logger.addHandler(logging.StreamHandler())
        _clear_handlers()
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert logger.handlers
