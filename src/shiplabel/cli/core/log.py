#!/usr/bin/env python3
from __future__ import annotations

import logging

from rich.logging import RichHandler

from ..ui import console_err

_HANDLER_NAME = "shiplabel-rich"


def _warn(message: str, *, quiet: bool) -> None:
    if quiet:
        return
    console_err.print(f"[yellow]Warning:[/yellow] {message}")


def configure_logging(*, debug: bool, quiet: bool) -> None:
    logger = logging.getLogger("shiplabel")
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logger.setLevel(level)
    for handler in logger.handlers:
        if handler.get_name() == _HANDLER_NAME:
            handler.setLevel(level)
            return
    handler = RichHandler(console=console_err, show_path=debug, rich_tracebacks=debug)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.propagate = False
