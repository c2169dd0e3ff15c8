"""Chat CLI (package entrypoint).

Wires argument parsing, logging and the Ctrl+C handler to the
``ChatSession`` loop kept in ``cli_chat``. Performs no request logic itself.

Public API re-exports:
- ``main``: CLI entrypoint callable
- ``build_parser``: argument parser factory
- ``ChatSession``: the interactive loop
"""

from __future__ import annotations

import signal
import sys
from typing import Any, Optional

from ...base.errors import ClientError
from ...base.logging import configure_logger
from ...openai import OpenAIClient
from .cli_chat import ChatSession
from .cli_parser import build_parser
from .cli_utils import parse_verbosity


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code (0 success, 2 on usage or configuration errors).
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    level = parse_verbosity(args.verbose)
    if level is None:
        print(f"unknown verbosity: {args.verbose}", file=sys.stderr)
        return 2
    configure_logger(level=level, file_path=args.log_file)

    try:
        client = OpenAIClient(chat_model=args.model, base_url=args.base_url)
    except ClientError as exc:
        print(f"[Error] {exc}", file=sys.stderr)
        return 2

    session = ChatSession(client, system=args.system, temperature=args.temperature)

    def _on_sigint(signum: int, frame: Any) -> None:
        # Ctrl+C between replies exits as usual.
        if not session.interrupt():
            raise KeyboardInterrupt

    previous = signal.signal(signal.SIGINT, _on_sigint)
    try:
        return session.run()
    except KeyboardInterrupt:
        print(file=sys.stdout)
        return 0
    finally:
        signal.signal(signal.SIGINT, previous)
        client.close()


__all__ = ["main", "build_parser", "ChatSession"]
