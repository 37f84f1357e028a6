"""Shared Rich Console instances for CLI output.

Rich detects whether the stream is a terminal: styled output when it is,
plain text when piped.
"""

from __future__ import annotations

from rich.console import Console

__all__ = ["console", "err_console"]

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)
