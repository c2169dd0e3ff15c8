"""Unified configuration layer for the client.

Goals
-----
* Centralize defaults (base URL, API version, per-endpoint models).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by SIMPLECHAT_CONFIG_FILE
    3. Environment variables (OPENAI_API_KEY, OPENAI_BASE_URL, ...)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_client_config(overrides)``.

External Config File (Optional)
-------------------------------
The file may hold the keys at top level or under an ``openai`` section::

    openai:
      base_url: https://api.openai.com
      api_version: v1
      chat_model: gpt-4

A ``.env`` file (path from ``DOTENV_FILE``, default ``.env``) is read once;
it only fills variables that are unset or hold placeholder values.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional
import json
import os

import yaml

from .defaults import (
    DEFAULT_API_VERSION,
    DEFAULT_BASE_URL,
    DEFAULT_CHAT_MODEL,
    DEFAULT_COMPLETION_MODEL,
    DEFAULT_EMBEDDINGS_MODEL,
    DEFAULT_MODERATION_MODEL,
)
from .env import ENV_FIELD_MAP, env_overrides, is_placeholder

CONFIG_FILE_ENV = "SIMPLECHAT_CONFIG_FILE"

DEFAULTS: Dict[str, Any] = {
    "base_url": DEFAULT_BASE_URL,
    "api_version": DEFAULT_API_VERSION,
    "chat_model": DEFAULT_CHAT_MODEL,
    "completion_model": DEFAULT_COMPLETION_MODEL,
    "embeddings_model": DEFAULT_EMBEDDINGS_MODEL,
    "moderation_model": DEFAULT_MODERATION_MODEL,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Lightweight .env loader.

    Parses KEY=VALUE lines, ignoring comments and blank lines. Safe to call
    multiple times. Overrides existing environment variables only if their
    current values appear to be placeholders.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    _DOTENV_LOADED = True
    if not os.path.isfile(path):
        return
    with open(path, "r", encoding="utf-8") as fh:
        for line in fh:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                os.environ[k] = v


def _load_external_config() -> Dict[str, Any]:
    """Load and cache the optional config file (JSON first, then YAML)."""
    global _FILE_CACHE, _FILE_CACHE_PATH
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Any = {}
    if path and Path(path).is_file():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must hold a mapping, got {type(data).__name__}")
    section = data.get("openai")
    if isinstance(section, dict):
        data = section
    _FILE_CACHE = {k: v for k, v in data.items() if k in ENV_FIELD_MAP}
    _FILE_CACHE_PATH = path
    return _FILE_CACHE


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` override values are ignored. A placeholder-looking ``api_key`` is
    dropped so callers see it as missing.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    if is_placeholder(cfg.get("api_key")):
        cfg.pop("api_key", None)
    return cfg


def reset_config_cache() -> None:
    """Forget the cached config file and ``.env`` state (used by tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH, _DOTENV_LOADED
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None
    _DOTENV_LOADED = False


__all__ = [
    "CONFIG_FILE_ENV",
    "DEFAULTS",
    "get_client_config",
    "reset_config_cache",
]
