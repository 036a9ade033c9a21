#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

from pathlib import Path

import typer

from ...config import load_app_config
from ...render.service import LabelService
from ..core.common import _ctx_value, _run_cli
from ..io.inputs import _load_single_order
from ..ui import console, print_completion_panel

_SINGLE_HELP = (
    "Generate a 100x150mm shipping label PDF for one order.\n\n"
    "Examples:\n"
    "  shiplabel single order.json\n"
    "  shiplabel single order.json -o labels/\n"
    "  cat order.json | shiplabel single - --print\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_SINGLE_HELP)(single)


def single(
    ctx: typer.Context,
    order_json: str = typer.Argument(..., help="Order JSON file (use - for stdin)."),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the PDF (defaults to [output] directory or the cwd).",
        rich_help_panel="Outputs",
    ),
    print_label: bool = typer.Option(
        False,
        "--print",
        help="Open the label in a browser print window instead of writing a PDF.",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        service = LabelService(load_app_config(_ctx_value(ctx, "config")))
        order = _load_single_order(order_json)
        if print_label:
            path = service.print_label(order)
            print_completion_panel(
                "Print window opened",
                [f"Order {order.id}", f"Surface: {path}"],
                quiet=quiet_value,
            )
            return
        path = service.download_single(order, output_dir)
        if quiet_value:
            return
        console.print(str(path))

    _run_cli(_run, debug=debug_value)
