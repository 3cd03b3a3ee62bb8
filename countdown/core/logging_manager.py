#!/usr/bin/env python3
"""
logging_manager.py
--------------------
Centralized logging for countdown render cycles and CLI commands.

Each component (board, store, cli) gets its own rotating log file, and all
errors are mirrored to a shared errors.log for quick scanning. Engine code
receives an optional logger and wraps it with safe_logger() so that it never
has to check for None.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import logging
import sys
import traceback
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# --- Third party imports ---
import click


FILE_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - [%(funcName)s:%(lineno)d] - %(message)s"
)
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class CountdownLogger:
    """
    Rotating, per-component logger.

    Attributes:
        log_dir: Directory for log files
        component_name: Name of the component using this logger
        main_logger: Logger receiving every message of the component
        error_logger: Logger receiving errors only (errors.log)
    """

    def __init__(
        self,
        log_dir: Path,
        component_name: str = "countdown",
        max_bytes: int = 5 * 1024 * 1024,
        backup_count: int = 3,
        console_level: int = logging.WARNING,
    ) -> None:
        """
        Initialize the component logger.

        Args:
            log_dir: Directory for log files
            component_name: Component identifier (e.g. 'board', 'store', 'cli')
            max_bytes: Maximum log file size before rotation (default: 5MB)
            backup_count: Number of rotated files to keep (default: 3)
            console_level: Minimum level echoed to stderr (default: WARNING)
        """
        self.log_dir = Path(log_dir)
        self.component_name = component_name
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.console_level = console_level
        self._setup_loggers()

    def _setup_loggers(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.main_logger = logging.getLogger(f"countdown.{self.component_name}")
        self.main_logger.setLevel(logging.DEBUG)
        self.main_logger.propagate = False
        # Reset only this logger's handlers (not global logger state)
        self.main_logger.handlers = []

        self.error_logger = logging.getLogger(f"countdown.{self.component_name}.errors")
        self.error_logger.setLevel(logging.ERROR)
        self.error_logger.propagate = False
        self.error_logger.handlers = []

        self._add_file_handler(
            self.main_logger, self.log_dir / f"{self.component_name}.log", logging.DEBUG
        )
        self._add_file_handler(
            self.error_logger, self.log_dir / "errors.log", logging.ERROR
        )

        console_handler = logging.StreamHandler()
        console_handler.setLevel(self.console_level)
        console_handler.setFormatter(
            logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S")
        )
        self.main_logger.addHandler(console_handler)

    def _add_file_handler(
        self, logger: logging.Logger, file_path: Path, level: int
    ) -> None:
        handler = RotatingFileHandler(
            file_path,
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(handler)

    @staticmethod
    def _with_details(prefix: str, message: str, details: Optional[Dict[str, Any]]) -> str:
        if details:
            return f"{prefix} - {message}: {json.dumps(details, default=str)}"
        return f"{prefix} - {message}"

    def log_operation(
        self, operation: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log a completed engine step (normalize, fetch, merge, order).

        Args:
            operation: Name of the operation
            details: Optional counters or identifiers for the operation
        """
        self.main_logger.info(
            f"OPERATION - {operation}: {json.dumps(details or {}, default=str)}"
        )

    def log_error(
        self, error: Exception, context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log an error with context and traceback to errors.log.

        Args:
            error: Exception that occurred
            context: Optional context information dictionary
        """
        self.error_logger.error(f"ERROR - {type(error).__name__}: {error}")
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            self.error_logger.error(f"Context: {context_str}")
        self.error_logger.error(f"Traceback:\n{traceback.format_exc()}")

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.debug(self._with_details("DEBUG", message, details))

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.main_logger.info(self._with_details("INFO", message, details))

    def log_warning(
        self, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.main_logger.warning(self._with_details("WARNING", message, details))

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        """
        Log full error details to file and return a short message for the terminal.

        Args:
            error: Exception to log
            context: Optional context about where the error occurred
            show_traceback: Include the traceback in the returned message

        Returns:
            Formatted error message suitable for CLI display
        """
        self.log_error(error, context or {"source": "cli"})
        message = f"❌ {type(error).__name__}: {error}"
        if show_traceback:
            return f"{message}\n\n{traceback.format_exc()}"
        return message


def handle_cli_error(
    ctx: "click.Context",
    error: Exception,
    operation: str,
    additional_context: Optional[Dict[str, Any]] = None,
    exit_code: int = 1,
) -> None:
    """
    Standardized error exit for CLI commands.

    Logs the error through the logger stored on the Click context, echoes a
    one-line message to stderr and exits. Never returns.

    Args:
        ctx: Click context object containing logger and verbose flag
        error: Exception that occurred
        operation: Name of the command that failed (e.g. 'show', 'toggle')
        additional_context: Optional extra context (paths, tag names)
        exit_code: Exit code for sys.exit() (default: 1)
    """
    obj = ctx.obj or {}
    logger: Optional[CountdownLogger] = obj.get("logger")
    verbose: bool = obj.get("verbose", False)

    context = {"operation": operation}
    if additional_context:
        context.update(additional_context)

    click.echo(
        safe_logger(logger).log_cli_error(error, context, show_traceback=verbose),
        err=True,
    )
    sys.exit(exit_code)


class NullLogger:
    """
    No-op logger with the CountdownLogger interface.

    Lets library code call logger methods unconditionally.
    """

    def log_operation(self, operation: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_error(self, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_debug(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_info(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_warning(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        pass

    def log_cli_error(
        self,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        show_traceback: bool = False,
    ) -> str:
        return f"❌ {type(error).__name__}: {error}"


_null_logger = NullLogger()


def safe_logger(logger: Optional[CountdownLogger]) -> CountdownLogger:
    """
    Return the provided logger or the shared NullLogger if None.

    Instead of:
        if logger:
            logger.log_info("message")

    Use:
        safe_logger(logger).log_info("message")
    """
    return logger if logger is not None else _null_logger  # type: ignore[return-value]
