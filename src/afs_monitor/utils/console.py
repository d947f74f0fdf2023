"""
AFS Monitor Console

A shared Rich console bound to stderr. Stdout belongs to the one-line
probe verdict, so operator-facing tables (probe list, resolved settings)
go through this console instead.

Usage:
    from afs_monitor.utils.console import get_console
    get_console().print(table)
"""

import threading
from typing import Optional

from rich.console import Console
from rich.theme import Theme

# Thread-safe singleton
_console: Optional[Console] = None
_lock = threading.Lock()

AFS_THEME = Theme({
    "heading": "bold cyan",
    "dim": "dim white",
})


def get_console(force_terminal: bool = None,
                no_color: bool = None,
                width: int = None) -> Console:
    """
    Get the singleton stderr Console.

    Args:
        force_terminal: Force terminal mode (for testing)
        no_color: Disable color output
        width: Override console width
    """
    global _console

    if _console is None:
        with _lock:
            if _console is None:
                _console = Console(
                    theme=AFS_THEME,
                    stderr=True,
                    force_terminal=force_terminal,
                    no_color=no_color,
                    width=width,
                    highlight=False,
                )

    return _console


def reset_console():
    """Reset the console singleton (useful for testing)."""
    global _console
    with _lock:
        _console = None
