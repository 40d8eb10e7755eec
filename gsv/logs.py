"""structlog configuration."""

import logging
import sys
from pathlib import Path
from typing import TextIO

import structlog


def configure_logging(
    debug: bool = False, log_file: Path | None = None, console: bool = True
) -> TextIO | None:
    """Route gsv logs to ``log_file``, else stderr, else nowhere.

    With ``console`` false and no log file every event is dropped; the TUI owns
    the terminal. Returns the log file stream opened here, which the caller
    closes.
    """
    processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    if log_file is None and not console:
        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL + 10),
            logger_factory=structlog.ReturnLoggerFactory(),
            cache_logger_on_first_use=False,
        )
        return None

    level = logging.DEBUG if debug else logging.INFO if log_file else logging.WARNING
    stream: TextIO | None = log_file.open("a", encoding="utf-8") if log_file else None

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )
    return stream
