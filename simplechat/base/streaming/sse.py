"""Server-sent-event framing helpers.

Only the two pieces of the SSE format this client needs are implemented:
pulling the payload out of a ``data:`` line and recognising the ``[DONE]``
terminator. Event names, ids and retry hints are not used by the service and
are skipped like any other non-data line.
"""

from __future__ import annotations

DATA_MARKER = "data: "
DONE_SENTINEL = "[DONE]"


def extract_payload(line: str) -> str:
    """Return everything after the first ``data: `` marker on ``line``.

    The payload is returned verbatim (no trimming). Lines without the marker
    (blank keep-alives, ``:`` comments, ``event:`` lines) yield ``""``.
    """
    idx = line.find(DATA_MARKER)
    if idx < 0:
        return ""
    return line[idx + len(DATA_MARKER):]


def is_sentinel(payload: str) -> bool:
    """Whether ``payload`` is exactly the end-of-stream token."""
    return payload == DONE_SENTINEL


__all__ = ["DATA_MARKER", "DONE_SENTINEL", "extract_payload", "is_sentinel"]
