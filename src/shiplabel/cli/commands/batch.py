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
from ...core.errors import BatchFailedError
from ...render.service import LabelService
from ..core.common import _ctx_value, _run_cli
from ..core.log import _warn
from ..io.inputs import BATCH_STATUSES, _filter_by_status, _load_order_records
from ..ui import progress
from ..ui.summary import print_batch_summary, print_failures

_BATCH_HELP = (
    "Assemble labels for many orders into one A4 PDF (one label per page).\n\n"
    "Orders that cannot be labelled are skipped and listed afterwards.\n\n"
    "Examples:\n"
    "  shiplabel batch orders.json\n"
    "  shiplabel batch orders.json --status processing --status shipped\n"
    "  shiplabel batch orders.json --all-statuses -o out/\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_BATCH_HELP)(batch)


def batch(
    ctx: typer.Context,
    orders_json: str = typer.Argument(..., help="Orders JSON file (use - for stdin)."),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the batch PDF.",
        rich_help_panel="Outputs",
    ),
    status: list[str] = typer.Option(
        list(BATCH_STATUSES),
        "--status",
        help="Only include orders with this status (repeatable).",
        rich_help_panel="Inputs",
    ),
    all_statuses: bool = typer.Option(
        False,
        "--all-statuses",
        help="Include orders regardless of status.",
        rich_help_panel="Inputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> int:
        service = LabelService(load_app_config(_ctx_value(ctx, "config")))
        loaded = _load_order_records(orders_json)
        orders = loaded if all_statuses else _filter_by_status(loaded, status)
        skipped = len(loaded) - len(orders)
        if skipped:
            _warn(f"{skipped} order(s) skipped by status filter", quiet=quiet_value)

        with progress(quiet=quiet_value) as progress_bar:
            task_id = (
                progress_bar.add_task("Rendering labels...", total=len(orders))
                if progress_bar is not None
                else None
            )

            def _advance(done: int) -> None:
                if progress_bar is not None and task_id is not None:
                    progress_bar.update(task_id, completed=done)

            try:
                path, result = service.download_batch(orders, output_dir, on_progress=_advance)
            except BatchFailedError as exc:
                print_failures(exc.failures)
                raise
        print_batch_summary(result, path, quiet=quiet_value)
        return 1 if result.failures else 0

    _run_cli(_run, debug=debug_value)
