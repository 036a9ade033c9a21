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
from ...output.names import single_label_filename
from ...render.service import LabelService
from ..core.common import _ctx_value, _run_cli
from ..io.inputs import _load_single_order
from ..io.outputs import _write_text_output

_PREVIEW_HELP = (
    "Write the label as standalone HTML, without rasterizing.\n\n"
    "Examples:\n"
    "  shiplabel preview order.json\n"
    "  shiplabel preview order.json -o label.html\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_PREVIEW_HELP)(preview)


def preview(
    ctx: typer.Context,
    order_json: str = typer.Argument(..., help="Order JSON file (use - for stdin)."),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output HTML path (defaults to shipping-label-<order>.html).",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        service = LabelService(load_app_config(_ctx_value(ctx, "config")))
        order = _load_single_order(order_json)
        surface = service.surface(order)
        path = output or Path.cwd() / single_label_filename(surface.order_number, ext="html")
        _write_text_output(path, surface.html, quiet=quiet_value)

    _run_cli(_run, debug=debug_value)
