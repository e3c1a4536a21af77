from __future__ import annotations

import logging
import sys
from typing import Optional


_LEVELS_BY_VERBOSE = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def setup_logging(verbose_count: int = 0, logger_name: Optional[str] = None,
                  level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root (or named) logger.

    -v  -> INFO
    -vv -> DEBUG
    default -> WARNING, or ``level`` when given by name (e.g. from settings)

    Idempotent: a second call only adjusts the level.
    """
    if level is not None and verbose_count == 0:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING
    else:
        resolved = _LEVELS_BY_VERBOSE.get(verbose_count, logging.DEBUG)

    logger = logging.getLogger(logger_name or "")
    logger.setLevel(resolved)

    already_configured = any(getattr(h, "_bowling_lab_handler", False) for h in logger.handlers)
    if not already_configured:
        handler = logging.StreamHandler(stream=sys.stderr)
        handler._bowling_lab_handler = True  # type: ignore[attr-defined]
        fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))
        logger.addHandler(handler)

    if resolved > logging.DEBUG:
        for noisy in ("httpx", "httpcore", "faker"):
            logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger
