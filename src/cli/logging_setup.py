"""Logging configuration for the CLI.

Records go to stderr through Rich, so stdout only ever carries the report.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "reqpeek-rich"


def configure_logging(level: str = "WARNING", *, verbose: bool = False) -> logging.Logger:
    """Attach a single `RichHandler` to the root logger.

    Calling it again replaces the level but never stacks handlers.
    """

    effective = logging.DEBUG if verbose else logging.getLevelName(level.upper())
    root = logging.getLogger()
    root.setLevel(effective)

    if not any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
        )
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root.addHandler(handler)

    # httpx/httpcore are chatty at DEBUG; keep them one notch quieter.
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(effective, logging.INFO))
    return root
