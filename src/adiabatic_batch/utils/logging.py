"""Structured logging for adiabatic-batch."""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

_run_id: ContextVar[str | None] = ContextVar("run_id", default=None)


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = _run_id.get()
        if run_id is not None:
            log_entry["run_id"] = run_id

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key in ("run_id", "extra"):
            if hasattr(record, key) and key not in log_entry:
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


class RunTracer:
    """Context manager that attaches a run_id to all log records.

    Used by :func:`adiabatic_batch.simulation.simulate` so that every message
    emitted while integrating one batch history can be grouped together.

    Usage::

        with RunTracer() as tracer:
            logger.info("Integrating")  # includes run_id
        # run_id cleared after exit
    """

    def __init__(self, run_id: str | None = None):
        self.run_id = run_id or uuid.uuid4().hex[:12]
        self._token = None

    def __enter__(self) -> RunTracer:
        self._token = _run_id.set(self.run_id)
        return self

    def __exit__(self, *exc: Any) -> None:
        if self._token is not None:
            _run_id.reset(self._token)


class _RunIDFilter(logging.Filter):
    """Injects run_id from context var into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        run_id = _run_id.get()
        if run_id is not None:
            record.run_id = run_id  # type: ignore[attr-defined]
        return True


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    module_levels: dict[str, str] | None = None,
) -> None:
    """Configure adiabatic-batch logging.

    Args:
        level: Root log level (e.g. 'DEBUG', 'INFO', 'WARNING').
        log_format: 'text' for human-readable or 'json' for structured output.
        log_file: Optional file path to write logs to.
        module_levels: Per-module log levels (e.g. {'adiabatic_batch.closure': 'DEBUG'}).
    """
    root_logger = logging.getLogger("adiabatic_batch")
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    if log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    console.addFilter(_RunIDFilter())
    root_logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.addFilter(_RunIDFilter())
        root_logger.addHandler(file_handler)

    if module_levels:
        for module, mod_level in module_levels.items():
            logging.getLogger(module).setLevel(getattr(logging, mod_level.upper(), logging.INFO))

    root_logger.debug(f"Logging configured: level={level}, format={log_format}")


__all__ = ["JSONFormatter", "RunTracer", "setup_logging"]
