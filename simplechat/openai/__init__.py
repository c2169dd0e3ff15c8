"""OpenAI endpoint facade.

``OpenAIClient`` is the single entry point for the completion, chat
completion, model listing, embedding and moderation endpoints.
"""

from .client import MessageLike, OpenAIClient

__all__ = ["OpenAIClient", "MessageLike"]
