"""structlog configuration for repostress.

Everything goes to stderr, as a coloured console or as JSON lines
(``--log-json``). Stress runs log from a pool of worker threads at once,
so events emitted off the main thread carry the emitting thread's name.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any

import structlog

# Third-party loggers that flood a concurrent run at DEBUG.
_QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "pluggy")


def add_thread_name(_logger: Any, _method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag events from worker threads with ``thread``; main-thread events stay untagged."""
    thread = threading.current_thread()
    if thread is not threading.main_thread():
        event_dict.setdefault("thread", thread.name)
    return event_dict


def _renderers(log_json: bool) -> list[structlog.types.Processor]:
    if log_json:
        # JSON has no traceback pretty-printer of its own.
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Safe to call repeatedly: the root handler is replaced, not stacked.

    Args:
        verbose: ``repostress.*`` loggers at DEBUG instead of WARNING.
        log_json: Render JSON lines instead of the console format.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_thread_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_renderers(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("repostress").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
