#!/usr/bin/env python3
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ...core.errors import LabelFailure
from ...render.assemble import BatchResult
from . import build_failures_table, build_kv_table, console, console_err, panel


def print_failures(failures: Sequence[LabelFailure]) -> None:
    if not failures:
        return
    rows = [(failure.order_id, failure.reason) for failure in failures]
    console_err.print(panel("Failed labels", build_failures_table(rows), style="warning"))


def print_batch_summary(result: BatchResult, output_path: Path, *, quiet: bool) -> None:
    failed = len(result.failures)
    if not quiet:
        rows = [
            ("Succeeded", str(len(result.succeeded))),
            ("Failed", str(failed)),
            ("Pages", str(result.document.page_count)),
            ("Output", str(output_path)),
        ]
        style = "warning" if failed else "success"
        console.print(panel("Batch summary", build_kv_table(rows), style=style))
    print_failures(result.failures)
