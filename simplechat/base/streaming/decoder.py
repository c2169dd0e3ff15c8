"""Typed decoding of event payloads.

A payload is decoded in one step with ``model_validate_json``; every failure
(malformed JSON, a non-object document, a missing ``choices`` key, wrong
field types, an unknown role) surfaces as :class:`DecodeError` with the raw
payload attached.
"""

from __future__ import annotations

from typing import Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..dto import ChatChunk, CompletionChunk
from ..errors import DecodeError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0] if exc.errors() else {}
    loc = ".".join(str(p) for p in first.get("loc", ())) or "<document>"
    return f"{exc.error_count()} validation error(s); first at {loc}: {first.get('msg', 'invalid')}"


def decode_payload(payload: str, shape: Type[ModelT]) -> ModelT:
    """Decode ``payload`` into ``shape``.

    Raises:
        DecodeError: the payload does not match ``shape``; ``payload`` is kept
            verbatim on the error.
    """
    try:
        return shape.model_validate_json(payload)
    except ValidationError as exc:
        raise DecodeError(payload, f"{shape.__name__}: {_summarize(exc)}", raw=exc) from exc


def decode_completion_chunk(payload: str) -> CompletionChunk:
    return decode_payload(payload, CompletionChunk)


def decode_chat_chunk(payload: str) -> ChatChunk:
    return decode_payload(payload, ChatChunk)


__all__ = ["decode_payload", "decode_completion_chunk", "decode_chat_chunk"]
