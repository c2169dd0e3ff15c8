"""simplechat.config.env
=====================

Environment variable names and helpers for credentials and settings.

Design Notes
------------
- ``ENV_FIELD_MAP`` maps configuration keys to their environment variables.
  ``OPENAI_API_KEY`` is the canonical credential variable.
- Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Optional

API_KEY_ENV = "OPENAI_API_KEY"  # pragma: allowlist secret - env var name, not a secret

ENV_FIELD_MAP: Dict[str, str] = {
    "api_key": API_KEY_ENV,
    "base_url": "OPENAI_BASE_URL",
    "api_version": "OPENAI_API_VERSION",
    "chat_model": "OPENAI_CHAT_MODEL",
    "completion_model": "OPENAI_COMPLETION_MODEL",
    "embeddings_model": "OPENAI_EMBEDDINGS_MODEL",
    "moderation_model": "OPENAI_MODERATION_MODEL",
}

_PLACEHOLDER_MARKERS = ("placeholder", "changeme", "your_openai_key", "<<", "example")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', template
    brackets, or starts with 'test_'. The check is case-insensitive and
    resilient to surrounding spaces.
    """
    if val is None:
        return False
    v = val.strip().lower()
    if not v:
        return True
    return v.startswith("test_") or any(marker in v for marker in _PLACEHOLDER_MARKERS)


def env_overrides() -> Dict[str, str]:
    """Return configuration values present in the process environment."""
    out: Dict[str, str] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val is not None and val.strip():
            out[field] = val.strip()
    return out


def resolve_api_key() -> Optional[str]:
    """Return the API key from the environment unless it looks like a placeholder."""
    val = os.getenv(API_KEY_ENV)
    if not val or is_placeholder(val):
        return None
    return val.strip()


__all__ = [
    "API_KEY_ENV",
    "ENV_FIELD_MAP",
    "is_placeholder",
    "env_overrides",
    "resolve_api_key",
]
