"""simplechat.config.defaults
==========================

Central place for the small, stable default values used by the client. All
of them can be overridden via environment variables, the optional config
file, or constructor arguments.

This module intentionally imports nothing from the rest of the package to
avoid circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Service endpoint ----
DEFAULT_BASE_URL = "https://api.openai.com"
DEFAULT_API_VERSION = "v1"

# ---- Per-endpoint models ----
DEFAULT_CHAT_MODEL = "gpt-4"
DEFAULT_COMPLETION_MODEL = "text-davinci-003"
DEFAULT_EMBEDDINGS_MODEL = "text-embedding-ada-002"
DEFAULT_MODERATION_MODEL = "text-moderation-latest"

# ---- Sampling ----
DEFAULT_TEMPERATURE = 0.0

# ---- CLI ----
# Opening system message for the interactive chat loop.
CLI_DEFAULT_SYSTEM_MESSAGE = "You are a helpful assistant."
# The chat loop samples slightly above zero.
CLI_DEFAULT_TEMPERATURE = 0.1


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_API_VERSION",
    "DEFAULT_CHAT_MODEL",
    "DEFAULT_COMPLETION_MODEL",
    "DEFAULT_EMBEDDINGS_MODEL",
    "DEFAULT_MODERATION_MODEL",
    "DEFAULT_TEMPERATURE",
    "CLI_DEFAULT_SYSTEM_MESSAGE",
    "CLI_DEFAULT_TEMPERATURE",
]
