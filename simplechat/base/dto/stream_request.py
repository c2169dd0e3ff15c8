"""Immutable description of one streaming call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .chat import ChatMessage

StreamInput = Union[str, ChatMessage]


@dataclass(frozen=True)
class StreamRequest:
    """Endpoint, model, inputs and sampling options for a streaming call.

    Attributes:
        endpoint: Path relative to the versioned API root (e.g. ``chat/completions``).
        model: Model identifier sent to the service.
        inputs: Prompt strings (completions) or chat messages, in order.
        input_field: JSON key the inputs are sent under (``prompt`` or ``messages``).
        temperature: Sampling temperature.
        stop: Optional stop sequences.
        stream: Always ``True`` for streaming calls; kept explicit in the payload.
    """

    endpoint: str
    model: str
    inputs: Tuple[StreamInput, ...]
    input_field: str
    temperature: float = 0.0
    stop: Optional[Tuple[str, ...]] = None
    stream: bool = True

    @classmethod
    def for_completion(
        cls,
        model: str,
        prompts: Iterable[str],
        *,
        temperature: float = 0.0,
        stop: Optional[Iterable[str]] = None,
    ) -> "StreamRequest":
        return cls(
            endpoint="completions",
            model=model,
            inputs=tuple(prompts),
            input_field="prompt",
            temperature=temperature,
            stop=tuple(stop) if stop is not None else None,
        )

    @classmethod
    def for_chat(
        cls,
        model: str,
        messages: Iterable[ChatMessage],
        *,
        temperature: float = 0.0,
        stop: Optional[Iterable[str]] = None,
    ) -> "StreamRequest":
        return cls(
            endpoint="chat/completions",
            model=model,
            inputs=tuple(messages),
            input_field="messages",
            temperature=temperature,
            stop=tuple(stop) if stop is not None else None,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON request body."""
        items = [item.to_wire() if isinstance(item, ChatMessage) else item for item in self.inputs]
        payload: Dict[str, Any] = {
            "model": self.model,
            self.input_field: items,
            "temperature": self.temperature,
        }
        if self.stop is not None:
            payload["stop"] = list(self.stop)
        payload["stream"] = self.stream
        return payload


__all__ = ["StreamRequest", "StreamInput"]
