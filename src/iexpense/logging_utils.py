"""Root logger setup for the command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def configure_logging(level: int | str = logging.WARNING) -> None:
    """Attach a RichHandler on stderr to the root logger, once."""
    global _CONFIGURED
    root = logging.getLogger()
    root.setLevel(level if isinstance(level, int) else level.upper())
    if _CONFIGURED:
        return
    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    _CONFIGURED = True
