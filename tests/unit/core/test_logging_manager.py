"""
Tests for logging_manager module.

Tests CountdownLogger file output, the safe_logger function and NullLogger
class that provide null-safe logging throughout the engine, and the
handle_cli_error exit helper.
"""
import pytest
from unittest.mock import MagicMock

import click

from countdown.core.logging_manager import (
    CountdownLogger,
    NullLogger,
    handle_cli_error,
    safe_logger,
)


class TestCountdownLogger:
    """Tests for CountdownLogger file output."""

    def test_creates_component_and_error_logs(self, tmp_path):
        log_dir = tmp_path / "logs"
        logger = CountdownLogger(log_dir, "board")
        logger.log_info("refresh started")
        logger.log_error(ValueError("bad"), {"operation": "refresh"})

        assert (log_dir / "board.log").is_file()
        assert (log_dir / "errors.log").is_file()

    def test_operation_details_written_as_json(self, tmp_path):
        logger = CountdownLogger(tmp_path, "board")
        logger.log_operation("merge", {"source": "local", "dynamic": 2})
        for handler in logger.main_logger.handlers:
            handler.flush()

        content = (tmp_path / "board.log").read_text(encoding="utf-8")
        assert 'OPERATION - merge: {"source": "local", "dynamic": 2}' in content

    def test_error_context_in_errors_log(self, tmp_path):
        logger = CountdownLogger(tmp_path, "store")
        logger.log_error(RuntimeError("disk full"), {"operation": "store_write"})
        for handler in logger.error_logger.handlers:
            handler.flush()

        content = (tmp_path / "errors.log").read_text(encoding="utf-8")
        assert "RuntimeError: disk full" in content
        assert "operation=store_write" in content

    def test_loggers_do_not_propagate(self, tmp_path):
        logger = CountdownLogger(tmp_path, "cli")
        assert logger.main_logger.propagate is False
        assert logger.error_logger.propagate is False

    def test_recreating_does_not_duplicate_handlers(self, tmp_path):
        first = CountdownLogger(tmp_path, "cli")
        second = CountdownLogger(tmp_path, "cli")
        assert first.main_logger is second.main_logger
        assert len(second.main_logger.handlers) == 2

    def test_log_cli_error_message(self, tmp_path):
        logger = CountdownLogger(tmp_path, "cli")
        message = logger.log_cli_error(ValueError("no such tag"))
        assert message == "❌ ValueError: no such tag"

    def test_log_cli_error_with_traceback(self, tmp_path):
        logger = CountdownLogger(tmp_path, "cli")
        try:
            raise ValueError("boom")
        except ValueError as e:
            message = logger.log_cli_error(e, show_traceback=True)
        assert "Traceback" in message


class TestNullLogger:
    """Tests for NullLogger class."""

    def test_null_logger_methods_are_no_ops(self):
        """NullLogger should accept every logging call silently."""
        logger = NullLogger()
        logger.log_operation("merge", {"key": "value"})
        logger.log_error(ValueError("test error"), {"context": "test"})
        logger.log_debug("debug message", {"key": "value"})
        logger.log_info("info message", {"key": "value"})
        logger.log_warning("warning message", {"key": "value"})

    def test_null_logger_log_cli_error_returns_formatted(self):
        """NullLogger.log_cli_error should return formatted error string."""
        result = NullLogger().log_cli_error(ValueError("test error"), {"context": "test"})
        assert "ValueError" in result
        assert "test error" in result


class TestSafeLogger:
    """Tests for safe_logger function."""

    def test_safe_logger_returns_logger_when_provided(self):
        """safe_logger should return the same logger when not None."""
        mock_logger = MagicMock(spec=CountdownLogger)
        assert safe_logger(mock_logger) is mock_logger

    def test_safe_logger_returns_null_logger_when_none(self):
        """safe_logger should return NullLogger when logger is None."""
        assert isinstance(safe_logger(None), NullLogger)

    def test_safe_logger_null_logger_is_singleton(self):
        """safe_logger should return the same NullLogger instance."""
        assert safe_logger(None) is safe_logger(None)

    def test_works_with_log_details(self):
        """safe_logger should forward calls with details dict."""
        mock_logger = MagicMock(spec=CountdownLogger)
        details = {"source": "remote", "records": 3}

        safe_logger(mock_logger).log_operation("remote_fetch", details)
        mock_logger.log_operation.assert_called_once_with("remote_fetch", details)

        safe_logger(None).log_operation("remote_fetch", details)


class TestHandleCliError:
    """Tests for handle_cli_error."""

    def test_exits_with_code_and_logs(self, tmp_path, capsys):
        logger = MagicMock(spec=CountdownLogger)
        logger.log_cli_error.return_value = "❌ ConfigError: missing"
        ctx = click.Context(click.Command("show"), obj={"logger": logger, "verbose": False})

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_error(ctx, ValueError("missing"), "show", {"path": "x.yml"}, exit_code=2)

        assert exc_info.value.code == 2
        error, context = logger.log_cli_error.call_args[0]
        assert isinstance(error, ValueError)
        assert context == {"operation": "show", "path": "x.yml"}
        assert "❌ ConfigError: missing" in capsys.readouterr().err

    def test_without_logger(self, capsys):
        ctx = click.Context(click.Command("show"), obj={})
        with pytest.raises(SystemExit):
            handle_cli_error(ctx, ValueError("oops"), "show")
        assert "ValueError: oops" in capsys.readouterr().err
