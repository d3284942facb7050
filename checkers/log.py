"""Rich-backed logging setup shared by the console driver, the web app and the CLI."""

from __future__ import annotations

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

CUSTOM_THEME = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "side.x": "bold red",
    "side.o": "bold blue",
})


def make_console(**kwargs: Any) -> Console:
    """A Console that knows the style names used across the package."""
    return Console(theme=CUSTOM_THEME, **kwargs)


console = make_console()


def setup_logging(level: str = "WARNING", target: Console = console) -> None:
    """Route stdlib logging through Rich at ``level``."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=target, show_path=False, rich_tracebacks=True)],
        force=True,
    )
