"""Structured logging for vector field runs.

Core functions (image building, homing) only use module loggers.  The
structured logger is written to by the code that drives a run: the field
driver (skipped cells, per-cell checks, summary), the renderer and the
CLI session.

This module provides:
- LogCategory: what part of a run an entry belongs to
- StructuredLogger: category-prefixed entries on stderr and/or a text file
- SessionLogger: per-run ``main.log`` and ``main.jsonl`` under a run folder
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, TextIO


class LogCategory(str, Enum):
    """Log categories of a run."""
    FIELD = "FIELD"          # Grid iteration and aggregation
    RENDER = "RENDER"        # PNG output
    INVARIANT = "INVARIANT"  # Per-cell checks
    SYSTEM = "SYSTEM"        # Session start / end


class LogLevel(str, Enum):
    """Log levels for filtering."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


_LEVEL_MAP = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


class LogEntry:
    """One entry: category, level, message, optional grid cell and extras."""

    def __init__(
        self,
        category: LogCategory,
        level: LogLevel,
        message: str,
        viewpoint: tuple[int, int] | None = None,
        extras: dict[str, Any] | None = None,
    ):
        self.timestamp = datetime.now()
        self.category = category
        self.level = level
        self.message = message
        self.viewpoint = viewpoint
        self.extras = extras or {}

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "category": self.category.value,
            "level": self.level.value,
            "message": self.message,
        }
        if self.viewpoint is not None:
            d["viewpoint"] = list(self.viewpoint)
        if self.extras:
            d["extras"] = self.extras
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def format_console(self) -> str:
        ts = self.timestamp.strftime("%H:%M:%S.%f")[:-3]
        prefix = f"[{self.category.value}]"
        at = f" (at=({self.viewpoint[0]}, {self.viewpoint[1]}))" if self.viewpoint is not None else ""
        return f"{ts} {prefix:12} {self.message}{at}"


class StructuredLogger:
    """Category-prefixed logger with a minimum level.

    Entries below the level are created (and returned) but not written.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.WARNING,
        console_output: bool = True,
        file_output: TextIO | None = None,
    ):
        """Initialize the structured logger.

        Args:
            level: Minimum log level
            console_output: Whether to write entries to stderr
            file_output: Optional text stream for console-format lines
        """
        self._level = level
        self._console_output = console_output
        self._file_output = file_output

    def log(self, category: LogCategory, level: LogLevel, message: str, **kwargs: Any) -> LogEntry:
        entry = LogEntry(category, level, message, **kwargs)
        if _LEVEL_MAP[level] < _LEVEL_MAP[self._level]:
            return entry
        if self._console_output:
            print(entry.format_console(), file=sys.stderr)
        self._write_file(entry)
        return entry

    def _write_file(self, entry: LogEntry) -> None:
        if self._file_output is not None:
            self._file_output.write(entry.format_console() + "\n")
            self._file_output.flush()

    def field(self, message: str, level: LogLevel = LogLevel.INFO, **kwargs: Any) -> LogEntry:
        return self.log(LogCategory.FIELD, level, message, **kwargs)

    def render(self, message: str, level: LogLevel = LogLevel.INFO, **kwargs: Any) -> LogEntry:
        return self.log(LogCategory.RENDER, level, message, **kwargs)

    def system(self, message: str, level: LogLevel = LogLevel.INFO, **kwargs: Any) -> LogEntry:
        return self.log(LogCategory.SYSTEM, level, message, **kwargs)

    def check_invariant(self, condition: bool, invariant_name: str, message: str, **kwargs: Any) -> bool:
        """Log a check: passes at DEBUG, failures at ERROR.

        Returns:
            The condition, so callers can branch on it.
        """
        extras = {"invariant": invariant_name, "result": "pass" if condition else "fail"}
        if condition:
            self.log(LogCategory.INVARIANT, LogLevel.DEBUG, f"PASS: {invariant_name} - {message}",
                     extras=extras, **kwargs)
        else:
            self.log(LogCategory.INVARIANT, LogLevel.ERROR, f"FAIL: {invariant_name} - {message}",
                     extras=extras, **kwargs)
        return condition


class SessionLogger(StructuredLogger):
    """Structured logger that also writes to a session directory.

    Creates ``<runs_dir>/<session_id>/logs/main.log`` (console format) and
    ``main.jsonl`` (one JSON entry per line).
    """

    def __init__(
        self,
        session_id: str,
        runs_dir: str | Path = "runs",
        console_output: bool = True,
        level: LogLevel = LogLevel.INFO,
    ):
        self._session_id = session_id
        self._session_dir = Path(runs_dir) / session_id
        self._logs_dir = self._session_dir / "logs"
        self._logs_dir.mkdir(parents=True, exist_ok=True)

        self._json_log_file = open(self._logs_dir / "main.jsonl", "a", encoding="utf-8")
        super().__init__(
            level=level,
            console_output=console_output,
            file_output=open(self._logs_dir / "main.log", "a", encoding="utf-8"),
        )
        self.system(f"Session started: {session_id}")

    def _write_file(self, entry: LogEntry) -> None:
        super()._write_file(entry)
        self._json_log_file.write(entry.to_json() + "\n")
        self._json_log_file.flush()

    def close(self) -> None:
        """Close log files."""
        self.system(f"Session ended: {self._session_id}")
        assert self._file_output is not None
        self._file_output.close()
        self._json_log_file.close()

    @property
    def session_dir(self) -> Path:
        return self._session_dir


# =============================================================================
# GLOBAL LOGGER INSTANCE
# =============================================================================

_global_logger: StructuredLogger | None = None


def get_logger() -> StructuredLogger:
    """Get the global logger instance."""
    global _global_logger
    if _global_logger is None:
        _global_logger = StructuredLogger()
    return _global_logger


def set_logger(logger: StructuredLogger | None) -> None:
    """Set the global logger instance (None restores the default)."""
    global _global_logger
    _global_logger = logger


def create_session_logger(
    session_id: str | None = None,
    runs_dir: str | Path = "runs",
    console_output: bool = True,
    level: LogLevel = LogLevel.INFO,
) -> SessionLogger:
    """Create a session logger and make it the global logger.

    Args:
        session_id: Session ID (timestamp if not provided)
        runs_dir: Base directory for runs
        console_output: Whether to output to console
        level: Minimum log level
    """
    if session_id is None:
        session_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    logger = SessionLogger(session_id=session_id, runs_dir=runs_dir, console_output=console_output, level=level)
    set_logger(logger)
    return logger


__all__ = [
    "LogCategory",
    "LogLevel",
    "LogEntry",
    "StructuredLogger",
    "SessionLogger",
    "get_logger",
    "set_logger",
    "create_session_logger",
]
