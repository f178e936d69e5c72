"""
structlog setup for conceptdb.

Only :func:`conceptdb.init_conceptdb` calls :func:`setup_logging`; table
operations never reconfigure structlog, so a host application's own
configuration stays in place unless it opts in.
"""

from __future__ import annotations

import logging
import sys

import structlog

PACKAGE = "conceptdb"


def setup_logging(level: str = "warning") -> None:
    """JSON lines on stderr, filtered at ``level``."""
    log_level = getattr(logging, level.upper(), logging.WARNING)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Logger for one conceptdb module, e.g. ``get_logger("store")``."""
    return structlog.get_logger(package=PACKAGE, component=component)  # type: ignore[return-value]
