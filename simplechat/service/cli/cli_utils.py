"""Small helpers for the chat CLI.

- ``parse_verbosity`` turns a ``--verbose`` value into a level name.
- ``suppress_console_logs`` keeps structured log lines out of the terminal
  while a reply is being printed token by token.
"""

from __future__ import annotations

import contextlib
import logging
from typing import Iterator, Optional

from ...base.logging import BASE_LOGGER_NAME

_VERBOSITY = {
    "debug": "DEBUG",
    "verbose": "DEBUG",
    "info": "INFO",
    "warning": "WARNING",
    "warn": "WARNING",
    "error": "ERROR",
    "err": "ERROR",
    "quiet": "ERROR",
    "critical": "CRITICAL",
    "silent": "CRITICAL",
}


def parse_verbosity(value: str) -> Optional[str]:
    """Return the canonical level name for ``value`` or ``None`` if unrecognized."""
    return _VERBOSITY.get(value.strip().lower())


def _is_console(handler: logging.Handler) -> bool:
    if getattr(handler, "_simplechat_file_handler", False):
        return False
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


@contextlib.contextmanager
def suppress_console_logs() -> Iterator[None]:
    """Detach console handlers of the ``simplechat`` logger for the duration of the block."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    consoles = [h for h in logger.handlers if _is_console(h)]
    for handler in consoles:
        handler.flush()
        logger.removeHandler(handler)
    try:
        yield
    finally:
        for handler in consoles:
            logger.addHandler(handler)


__all__ = ["parse_verbosity", "suppress_console_logs"]
