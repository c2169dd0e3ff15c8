"""HTTP utilities package.

Exposes pooled httpx clients and the transport adapter used by the
streaming and request/response paths.
"""

from .client import get_httpx_client, close_all_clients
from .transport import EVENT_STREAM, JSON_CONTENT, interrupt_read, open_stream, send_request

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "open_stream",
    "interrupt_read",
    "send_request",
    "EVENT_STREAM",
    "JSON_CONTENT",
]
