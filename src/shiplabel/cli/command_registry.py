#!/usr/bin/env python3
from __future__ import annotations

import typer

from .commands import (
    batch as batch_command,
    demo as demo_command,
    preview as preview_command,
    single as single_command,
)


def register(app: typer.Typer) -> None:
    single_command.register(app)
    batch_command.register(app)
    preview_command.register(app)
    demo_command.register(app)
