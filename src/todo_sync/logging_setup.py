# src/todo_sync/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

LOG_FILE_NAME = "todo_sync.log"
PROJECT_LOGGER_PREFIX = "todo_sync."

# HTTP client libraries log every request at INFO/DEBUG.
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")


class _ProjectOnlyFilter(logging.Filter):
    """Console shows our own records; everything else only from ERROR up."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_LOGGER_PREFIX):
            return True
        return record.levelno >= logging.ERROR


def _line_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo_sync",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    quiet_loggers: Iterable[str] = HTTP_CLIENT_LOGGERS,
) -> Path:
    """
    Install the stderr console handler and the per-data-dir file log.

    The console stays readable while a command prompt is open; the file
    under ``log_dir`` keeps the full record. ``quiet_loggers`` are held at
    WARNING so request lines do not flood either sink. Returns the log file
    path. Call once, before the first log record.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.setLevel(min(console_level, file_level))

    formatter = _line_formatter()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ProjectOnlyFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(file_handler)

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Python warnings arrive as "py.warnings" records and go through the filter.
    logging.captureWarnings(True)
    return log_file
