#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2anf/logging_utils.py
"""Logging setup and warning capture for html2anf.

Library modules log under the ``html2anf`` package logger. The command line
sets that logger to the requested level while keeping the HTTP client's
per-request logs at WARNING, so ``--log-level INFO`` shows conversion
progress without one line per image probe. Use ``trace_mode`` to see those
as well.

:func:`collect_warnings` captures the warnings emitted during a conversion
(skipped nodes, divergent layouts, conflicting bundle names) so they can be
returned to the caller along with the fragments.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional

PACKAGE_LOGGER = "html2anf"
HTTP_CLIENT_LOGGERS = ("httpx", "httpcore")


def _resolve_level(log_level: int | str) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Configure handlers and per-package levels for command line use.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO") for html2anf.
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        Emit timestamps and logger names, and let the HTTP client log at
        ``log_level`` too.

    Returns
    -------
    logging.Logger
        The ``html2anf`` package logger.

    """
    resolved_level = _resolve_level(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved_level)

    client_level = resolved_level if trace_mode else max(resolved_level, logging.WARNING)
    for name in HTTP_CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S" if trace_mode else None
    formatter = logging.Formatter(format_str, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            package_logger.warning(f"Could not create log file {log_file}: {exc}")
        else:
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            package_logger.info(f"Logging to file: {log_file}")

    return package_logger


class WarningCollector(logging.Handler):
    """Handler that keeps the messages of WARNING and higher records."""

    def __init__(self) -> None:
        super().__init__(level=logging.WARNING)
        self.messages: list[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())


@contextmanager
def collect_warnings(logger_name: str = PACKAGE_LOGGER) -> Iterator[WarningCollector]:
    """Capture warnings logged under ``logger_name`` while the block runs.

    Records still propagate to any configured handlers.
    """
    collector = WarningCollector()
    target = logging.getLogger(logger_name)
    target.addHandler(collector)
    try:
        yield collector
    finally:
        target.removeHandler(collector)


__all__ = ["PACKAGE_LOGGER", "WarningCollector", "collect_warnings", "configure_logging"]
