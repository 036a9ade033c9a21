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
from typing import Any

import typer

from ...config import load_app_config
from ...core.orders import order_from_dict
from ...render.service import LabelService
from ..core.common import _ctx_value, _run_cli
from ..ui import build_kv_table, console, panel

DEMO_ORDER: dict[str, Any] = {
    "id": "demo_order_12345678",
    "customerName": "Priya Sharma",
    "customerEmail": "priya.sharma@example.com",
    "customerPhone": "+91 98765 43210",
    "shippingAddress": {
        "street": "123 Rose Garden, MG Road",
        "city": "Bangalore",
        "state": "Karnataka",
        "pincode": "560001",
    },
    "items": [
        {
            "productId": "ruby_pendant_001",
            "productName": "Elegant Ruby Heart Pendant",
            "quantity": 1,
            "price": 15999,
        },
        {
            "productId": "gold_chain_002",
            "productName": "Gold Plated Chain (18 inch)",
            "quantity": 1,
            "price": 3999,
        },
    ],
    "totalAmount": 19998,
    "status": "processing",
    "paymentStatus": "completed",
    "createdAt": "2025-01-15T10:30:00",
    "notes": "Handle with extra care - premium jewelry",
}

_DEMO_HELP = (
    "Generate a label for a built-in sample order.\n\n"
    "Examples:\n"
    "  shiplabel demo\n"
    "  shiplabel demo --print\n"
)


def register(app: typer.Typer) -> None:
    app.command(help=_DEMO_HELP)(demo)


def demo(
    ctx: typer.Context,
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        "-o",
        help="Directory for the demo PDF.",
        rich_help_panel="Outputs",
    ),
    print_label: bool = typer.Option(
        False,
        "--print",
        help="Open the demo label in a browser print window.",
        rich_help_panel="Outputs",
    ),
) -> None:
    quiet_value = bool(_ctx_value(ctx, "quiet"))
    debug_value = bool(_ctx_value(ctx, "debug"))

    def _run() -> None:
        service = LabelService(load_app_config(_ctx_value(ctx, "config")))
        order = order_from_dict(DEMO_ORDER)
        record = service.label_record(order)
        if not quiet_value:
            rows = [
                ("Order", record.order_number),
                ("Ship to", record.ship_to.name),
                ("Items", str(record.item_count)),
                ("Value", record.total_display),
            ]
            console.print(panel("Demo label", build_kv_table(rows)))
        if print_label:
            path = service.print_label(order)
        else:
            path = service.download_single(order, output_dir)
        if not quiet_value:
            console.print(str(path))

    _run_cli(_run, debug=debug_value)
