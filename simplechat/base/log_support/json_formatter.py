"""JSON line formatter for the ``simplechat`` logger.

Each record becomes one JSON object with ``ts``, ``level`` and ``logger``.
Messages produced by ``log_event`` are JSON objects already; their keys are
merged into the top level instead of being nested as an escaped string.
Attributes attached through ``extra=`` are carried over as well.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord has; anything else came in through ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


def _structured(message: str) -> Dict[str, Any] | None:
    if not message.startswith("{"):
        return None
    try:
        parsed = json.loads(message)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        doc: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        message = record.getMessage()
        payload = _structured(message)
        if payload is None:
            doc["msg"] = message
        else:
            doc.update(payload)
        for key, value in vars(record).items():
            if key in _STANDARD_ATTRS or key.startswith("_"):
                continue
            doc.setdefault(key, value)
        if record.exc_info:
            doc["exc"] = self.formatException(record.exc_info)
        return json.dumps(doc, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "ISO"]
