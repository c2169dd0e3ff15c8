"""CLI parser construction for the chat loop.

Wires argument shapes only; execution lives in ``cli_chat``.
"""

from __future__ import annotations

import argparse

from ...config.defaults import CLI_DEFAULT_SYSTEM_MESSAGE, CLI_DEFAULT_TEMPERATURE


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level CLI parser.

    No I/O or network calls occur here.
    """
    p = argparse.ArgumentParser(
        prog="simplechat",
        description="Interactive streaming chat (blank prompt quits, Ctrl+C interrupts a reply)",
    )
    p.add_argument("--model", default=None, help="Chat model id (defaults to configuration)")
    p.add_argument("--temperature", type=float, default=CLI_DEFAULT_TEMPERATURE)
    p.add_argument("--system", default=CLI_DEFAULT_SYSTEM_MESSAGE, help="Opening system message")
    p.add_argument("--base-url", default=None)
    p.add_argument(
        "--verbose",
        default="warning",
        help="Log verbosity: debug, info, warning, error, critical (or verbose/quiet/silent)",
    )
    p.add_argument("--log-file", default=None, help="Also write JSON logs to this file")
    return p


__all__ = ["build_parser"]
