"""Structured logging for the client.

Every module logs through the shared ``simplechat`` logger. One console
handler (JSON by default) is attached to it lazily; child loggers such as
``simplechat.openai`` own no handlers and propagate.

Events are single-line JSON documents built by :func:`log_event`.
:func:`normalized_log_event` adds the keys every stream and request event
carries: ``phase``, ``outcome``, ``emitted`` and, on failures,
``error_code``. Credentials are never passed to these helpers.

Environment
-----------
``SIMPLECHAT_LOG_LEVEL``
    Level name applied to the base logger and its console handler.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "simplechat"
LOG_LEVEL_ENV = "SIMPLECHAT_LOG_LEVEL"

_READY_ATTR = "_simplechat_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_simplechat_console_handler"
_FILE_HANDLER_ATTR = "_simplechat_file_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_FILE_MAX_BYTES = 10 * 1024 * 1024
_FILE_BACKUPS = 5

_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Return the numeric level named by ``value`` (case-insensitive), else ``default``."""
    if not value:
        return default
    return _LEVELS.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _new_console_handler(level: int, json_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _refresh_console_handlers(logger: logging.Logger, level: int, json_mode: bool) -> None:
    """Re-point console handlers at the current ``sys.stderr``.

    Test runners swap ``sys.stderr`` between tests; a handler still holding a
    closed stream is replaced.
    """
    for handler in list(logger.handlers):
        if not getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            continue
        stream = getattr(handler, "stream", None)
        if stream is None or getattr(stream, "closed", False):
            logger.removeHandler(handler)
            logger.addHandler(_new_console_handler(level, json_mode))
            continue
        handler.setLevel(level)
        if isinstance(handler, logging.StreamHandler):
            with contextlib.suppress(ValueError):
                handler.setStream(sys.stderr)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)
    if getattr(logger, _READY_ATTR, False):
        # Only the environment overrides a level set by configure_logger.
        if env_level:
            logger.setLevel(_parse_level(env_level, default=logger.level))
        _refresh_console_handlers(logger, logger.level, json_mode)
        return logger
    wanted = _parse_level(env_level, default=level)
    logger.setLevel(wanted)
    logger.handlers[:] = [_new_console_handler(wanted, json_mode)]
    logger.propagate = False
    setattr(logger, _READY_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` under the shared hierarchy, initializing the base logger once."""
    base = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base
    child = logging.getLogger(name)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def _managed_file_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Parameters
    ----------
    level:
        Numeric level or level name applied to the logger and all its
        handlers. ``None`` keeps the current level.
    file_path:
        Attach (or keep) a rotating file handler writing to this path. With
        ``None`` any managed file handler is detached and closed.
    json_mode:
        Formatter used for the file handler.
    """
    logger = get_logger(BASE_LOGGER_NAME, json_mode=json_mode)
    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        logger.setLevel(numeric)
        for handler in logger.handlers:
            handler.setLevel(numeric)

    target = os.path.abspath(os.path.expanduser(file_path)) if file_path is not None else None
    keep: Optional[logging.FileHandler] = None
    for handler in _managed_file_handlers(logger):
        if target is not None and isinstance(handler, logging.FileHandler) and handler.baseFilename == target:
            keep = handler
            continue
        logger.removeHandler(handler)
        handler.close()
    if target is None:
        return logger

    if keep is None:
        os.makedirs(os.path.dirname(target), exist_ok=True)
        keep = RotatingFileHandler(target, maxBytes=_FILE_MAX_BYTES, backupCount=_FILE_BACKUPS, encoding="utf-8")
        setattr(keep, _FILE_HANDLER_ATTR, True)
        logger.addHandler(keep)
    keep.setFormatter(_formatter(json_mode))
    keep.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON document.

    Context fields come first, then ``fields``. ``None`` values are dropped
    unless ``keep_none`` is set. Nothing is serialized when ``level`` is
    disabled.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload.update(ctx.to_dict())
    payload.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "outcome",
    "error_code",
    "emitted",
)


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    outcome: str | None = None,
    error_code: str | None = None,
    emitted: int | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Log ``event`` with the normalized lifecycle keys.

    ``phase``, ``outcome`` and ``emitted`` are always present (``None`` when
    unknown); ``error_code`` only when set. Extra fields are appended when not
    ``None``.
    """
    fields: Dict[str, Any] = {"phase": phase, "outcome": outcome, "emitted": emitted}
    if error_code is not None:
        fields["error_code"] = error_code
    fields.update({k: v for k, v in extra_fields.items() if v is not None})
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
