"""OpenAI client facade.

Wires configuration, the pooled HTTP client, the transport adapter and the
SSE stream driver into one object with a method per endpoint.

Streaming calls (``create_completion``, ``create_chat_completion``) return a
:class:`ChunkStream` without touching the network; the request is sent on
the first ``next()``. Every streaming call gets its own cancellation token:
a child of the caller's token when one is passed, a fresh token otherwise.

Non-streaming calls (``list_models``, ``create_embeddings``,
``create_moderation``) block until the whole body has arrived and return
typed records. No call is retried.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, ValidationError

from ..base.cancellation import CancellationToken
from ..base.dto import (
    ChatChunk,
    ChatMessage,
    CompletionChunk,
    CreateEmbeddingsResponse,
    CreateModerationResponse,
    ListModelsResponse,
    StreamRequest,
)
from ..base.errors import ClientError, DecodeError, ErrorCode, TransportError
from ..base.http import get_httpx_client, open_stream, send_request
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.streaming import ChunkStream, SSEStreamDriver, decode_chat_chunk, decode_completion_chunk
from ..base.timeouts import get_timeout_config
from ..config import get_client_config
from ..config.env import API_KEY_ENV

ModelT = TypeVar("ModelT", bound=BaseModel)
T = TypeVar("T")

MessageLike = Union[ChatMessage, Dict[str, Any]]


def _api_root(base_url: str, api_version: str) -> str:
    """Return the versioned API root with a trailing slash (``https://host/v1/``)."""
    return f"{base_url.rstrip('/')}/{api_version.strip('/')}/"


def _as_message(item: MessageLike) -> ChatMessage:
    return item if isinstance(item, ChatMessage) else ChatMessage.model_validate(item)


class OpenAIClient:
    """Client for the completion, chat, model, embedding and moderation endpoints.

    Parameters
    ----------
    api_key:
        Bearer credential. Resolved from configuration (``OPENAI_API_KEY``)
        when omitted; a missing key raises ``ClientError(AUTH)``.
    base_url, api_version:
        Service root and version segment; requests go to
        ``{base_url}/{api_version}/{endpoint}``.
    chat_model, completion_model, embeddings_model, moderation_model:
        Per-endpoint model identifiers.
    transport:
        Optional ``httpx`` transport. When given, the client builds and owns a
        private ``httpx.Client`` on top of it (tests pass an
        ``httpx.MockTransport``); otherwise it borrows a pooled client.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        chat_model: Optional[str] = None,
        completion_model: Optional[str] = None,
        embeddings_model: Optional[str] = None,
        moderation_model: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        cfg = get_client_config(
            {
                "api_key": api_key,
                "base_url": base_url,
                "api_version": api_version,
                "chat_model": chat_model,
                "completion_model": completion_model,
                "embeddings_model": embeddings_model,
                "moderation_model": moderation_model,
            }
        )
        key = cfg.get("api_key")
        if not key:
            raise ClientError(ErrorCode.AUTH, f"no API key configured; set {API_KEY_ENV}")
        self.base_url: str = cfg["base_url"]
        self.api_version: str = cfg["api_version"]
        self.chat_model: str = cfg["chat_model"]
        self.completion_model: str = cfg["completion_model"]
        self.embeddings_model: str = cfg["embeddings_model"]
        self.moderation_model: str = cfg["moderation_model"]
        self._logger = get_logger("simplechat.openai")

        root = _api_root(self.base_url, self.api_version)
        headers = {"Authorization": f"Bearer {key}"}
        if transport is not None:
            self._http = httpx.Client(
                base_url=root,
                headers=headers,
                timeout=get_timeout_config().to_httpx(),
                transport=transport,
            )
            self._owns_http = True
        else:
            self._http = get_httpx_client(root, "openai", headers)
            self._owns_http = False

    # Lifecycle -----------------------------------------------------------
    def close(self) -> None:
        """Close the HTTP client if this instance created it; pooled clients stay open."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"OpenAIClient(base_url={self.base_url!r}, api_version={self.api_version!r})"

    # Streaming -----------------------------------------------------------
    def create_completion(
        self,
        prompt: Union[str, Sequence[str]],
        *,
        temperature: float = 0.0,
        stop: Optional[Iterable[str]] = None,
        token: Optional[CancellationToken] = None,
    ) -> ChunkStream[CompletionChunk]:
        """Stream a legacy completion for ``prompt`` (one string or a batch)."""
        prompts = [prompt] if isinstance(prompt, str) else list(prompt)
        request = StreamRequest.for_completion(
            self.completion_model, prompts, temperature=temperature, stop=stop
        )
        return self._stream(request, decode_completion_chunk, token)

    def create_chat_completion(
        self,
        messages: Iterable[MessageLike],
        *,
        temperature: float = 0.0,
        stop: Optional[Iterable[str]] = None,
        token: Optional[CancellationToken] = None,
    ) -> ChunkStream[ChatChunk]:
        """Stream a chat completion continuing ``messages``.

        Plain ``{"role": ..., "content": ...}`` mappings are accepted alongside
        :class:`ChatMessage` records.
        """
        request = StreamRequest.for_chat(
            self.chat_model,
            [_as_message(m) for m in messages],
            temperature=temperature,
            stop=stop,
        )
        return self._stream(request, decode_chat_chunk, token)

    def _stream(
        self,
        request: StreamRequest,
        decoder: Callable[[str], T],
        token: Optional[CancellationToken],
    ) -> ChunkStream[T]:
        stream_token = token.child() if token is not None else CancellationToken()
        body = request.to_payload()
        http = self._http

        def _open(tok: CancellationToken) -> httpx.Response:
            return open_stream(http, request.endpoint, body, tok)

        driver: SSEStreamDriver[T] = SSEStreamDriver(
            opener=_open,
            decoder=decoder,
            token=stream_token,
            logger=self._logger,
            ctx=LogContext(endpoint=request.endpoint, model=request.model),
        )
        return ChunkStream(driver, stream_token)

    # Request/response ----------------------------------------------------
    def list_models(self) -> ListModelsResponse:
        """Return the models available to the configured key."""
        return self._request("GET", "models", ListModelsResponse)

    def create_embeddings(self, input: Union[str, Sequence[str]]) -> CreateEmbeddingsResponse:  # noqa: A002 - wire name
        """Embed one string or a batch of strings with the embeddings model."""
        body = {"model": self.embeddings_model, "input": input if isinstance(input, str) else list(input)}
        return self._request("POST", "embeddings", CreateEmbeddingsResponse, body, model=self.embeddings_model)

    def create_moderation(self, *inputs: str) -> CreateModerationResponse:
        """Classify ``inputs`` with the moderation model; one result per input."""
        if not inputs:
            raise ValueError("create_moderation requires at least one input")
        body = {"model": self.moderation_model, "input": list(inputs)}
        return self._request("POST", "moderations", CreateModerationResponse, body, model=self.moderation_model)

    def _request(
        self,
        method: str,
        endpoint: str,
        shape: Type[ModelT],
        json_body: Optional[Dict[str, Any]] = None,
        *,
        model: Optional[str] = None,
    ) -> ModelT:
        ctx = LogContext(endpoint=endpoint, model=model)
        normalized_log_event(self._logger, "request.start", ctx, phase="start", method=method)
        t0 = time.perf_counter()
        try:
            document = send_request(self._http, method, endpoint, json_body)
            try:
                result = shape.model_validate(document)
            except ValidationError as exc:
                raw = json.dumps(document, ensure_ascii=False, default=str)
                raise DecodeError(raw, f"{shape.__name__}: {exc.error_count()} validation error(s)", raw=exc) from exc
        except ClientError as exc:
            normalized_log_event(
                self._logger,
                "request.error",
                ctx,
                phase="finalize",
                outcome="failed",
                error_code=exc.code.value,
                level=logging.WARNING,
                status=exc.status if isinstance(exc, TransportError) else None,
                error=exc.message,
                duration_ms=round((time.perf_counter() - t0) * 1000.0, 3),
            )
            raise
        normalized_log_event(
            self._logger,
            "request.end",
            ctx,
            phase="finalize",
            outcome="ok",
            duration_ms=round((time.perf_counter() - t0) * 1000.0, 3),
        )
        return result


__all__ = ["OpenAIClient", "MessageLike"]
