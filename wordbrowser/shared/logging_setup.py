"""
wordbrowser/shared/logging_setup.py
-----------------------------------

Central logging configuration.

- stdlib `logging` carries the handlers and the level.
- `structlog` sits on top; modules log event names with key/value context:

      import structlog
      logger = structlog.get_logger()
      logger.info("remote_loaded", count=42)

- LOG_FORMAT selects the renderer: "json" for machines, "console" for humans.

`init_logging` is idempotent; calling it multiple times is safe.
"""

from __future__ import annotations

import logging
from typing import Optional

import structlog

from wordbrowser.shared.config import settings

# Internal flag to avoid re-configuring logging multiple times
_INITIALIZED = False


def _level(name: Optional[str]) -> int:
    return getattr(logging, (name or "INFO").upper(), logging.INFO)


def init_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    *,
    force: bool = False,
) -> None:
    """
    Initialize stdlib logging and structlog.

    Args:
        level: Level name (DEBUG, INFO, ...). Defaults to settings.LOG_LEVEL.
        fmt: "json" or "console". Defaults to settings.LOG_FORMAT.
        force: Reconfigure even if already initialized.
    """
    global _INITIALIZED

    if _INITIALIZED and not force:
        return

    log_level = _level(level or settings.LOG_LEVEL)
    renderer_name = (fmt or settings.LOG_FORMAT).lower()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        force=True,
    )

    if renderer_name == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _INITIALIZED = True


__all__ = ["init_logging"]
