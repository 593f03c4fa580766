"""Leveled logging for site-index runs.

Messages go to stderr with a fixed prefix. When a log file is configured,
every message is also appended to it as one JSON object per line.
"""

from __future__ import annotations

import json
import os
import sys
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

LOG_PREFIX = "[site-index]"

LOG_FILE_ENV = "SITE_INDEX_LOG_FILE"


@dataclass
class LogContext:
    """Logging settings for the current run."""

    quiet: bool = False
    log_file: Optional[str] = None
    command: Optional[str] = None


_log_context: ContextVar[LogContext] = ContextVar(
    "site_index_log_context",
    default=LogContext(log_file=os.environ.get(LOG_FILE_ENV)),
)


def get_context() -> LogContext:
    """Get the current logging context."""
    return _log_context.get()


def init_context(
    quiet: bool = False,
    log_file: Optional[str] = None,
    command: Optional[str] = None,
) -> LogContext:
    """Initialize logging for a run.

    Args:
        quiet: Suppress info and success messages on stderr.
        log_file: Path to a JSON-lines log file, or None to use SITE_INDEX_LOG_FILE.
        command: Name of the CLI command being run, recorded in log entries.

    Returns:
        The initialized context.
    """
    ctx = LogContext(
        quiet=quiet,
        log_file=log_file if log_file is not None else os.environ.get(LOG_FILE_ENV),
        command=command,
    )
    _log_context.set(ctx)
    return ctx


def _write_to_log_file(entry: dict) -> None:
    """Write a structured log entry to the log file if configured."""
    ctx = get_context()
    if not ctx.log_file:
        return
    try:
        with open(ctx.log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except (IOError, OSError) as e:
        print(f"{LOG_PREFIX} Log write failed: {e}", file=sys.stderr)


def _make_log_entry(level: str, message: str, **extra) -> dict:
    """Create a structured log entry."""
    ctx = get_context()
    entry = {
        "timestamp": datetime.now().isoformat(),
        "level": level,
        "message": message,
    }
    if ctx.command:
        entry["command"] = ctx.command
    entry.update(extra)
    return entry


def log_info(message: str, **extra) -> None:
    """Log an info message to stderr (unless quiet) and optionally to log file."""
    if not get_context().quiet:
        print(f"{LOG_PREFIX} {message}", file=sys.stderr)
    _write_to_log_file(_make_log_entry("INFO", message, **extra))


def log_success(message: str, **extra) -> None:
    """Log a completed step."""
    if not get_context().quiet:
        print(f"{LOG_PREFIX} OK: {message}", file=sys.stderr)
    _write_to_log_file(_make_log_entry("SUCCESS", message, **extra))


def log_warning(message: str, **extra) -> None:
    """Log a warning message to stderr and optionally to log file."""
    print(f"{LOG_PREFIX} WARNING: {message}", file=sys.stderr)
    _write_to_log_file(_make_log_entry("WARNING", message, **extra))


def log_error(message: str, **extra) -> None:
    """Log an error message to stderr and optionally to log file."""
    print(f"{LOG_PREFIX} ERROR: {message}", file=sys.stderr)
    _write_to_log_file(_make_log_entry("ERROR", message, **extra))
