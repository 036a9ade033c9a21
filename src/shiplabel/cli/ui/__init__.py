#!/usr/bin/env python3
from __future__ import annotations

import sys
from collections.abc import Sequence
from contextlib import contextmanager

from rich import box
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from .state import THEME, UIContext, get_context, isatty

DEFAULT_CONTEXT = get_context()
console = DEFAULT_CONTEXT.console
console_err = DEFAULT_CONTEXT.console_err


def _resolve_context(context: UIContext | None) -> UIContext:
    return context or DEFAULT_CONTEXT


def configure_ui(
    *,
    no_color: bool,
    no_animations: bool = False,
    context: UIContext | None = None,
) -> None:
    context = _resolve_context(context)
    context.animations_enabled = not no_animations
    context.console.no_color = no_color
    context.console_err.no_color = no_color


@contextmanager
def progress(*, quiet: bool, context: UIContext | None = None):
    context = _resolve_context(context)
    if quiet:
        yield None
        return
    force_render = isatty(sys.__stdout__, sys.stdout)
    columns = [TextColumn("[progress.description]{task.description}")]
    if context.animations_enabled:
        columns.insert(0, SpinnerColumn(style="accent"))
    progress_bar = Progress(
        *columns,
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=context.console,
        transient=True,
        disable=not force_render,
    )
    with progress_bar:
        yield progress_bar


def build_kv_table(rows: Sequence[tuple[str, str]], *, title: str | None = None) -> Table:
    table = Table(title=title, show_header=False, box=box.SIMPLE, show_lines=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value")
    for key, value in rows:
        table.add_row(str(key), str(value))
    return table


def build_failures_table(rows: Sequence[tuple[str, str]]) -> Table:
    table = Table(show_header=True, box=box.SIMPLE_HEAD, header_style="bold")
    table.add_column("Order", style="warning", no_wrap=True)
    table.add_column("Reason")
    for order_id, reason in rows:
        table.add_row(Text(order_id), Text(reason))
    return table


def build_action_list(items: Sequence[str]) -> Table:
    table = Table.grid(padding=(0, 1))
    table.add_column(no_wrap=True)
    table.add_column()
    for item in items:
        table.add_row("-", Text(item))
    return table


def panel(title: str, renderable, *, style: str = "panel") -> Panel:
    return Panel(
        renderable,
        title=title,
        title_align="left",
        border_style=style,
        box=box.ROUNDED,
        padding=(1, 2),
    )


def print_completion_panel(
    title: str,
    items: Sequence[str],
    *,
    quiet: bool,
    use_err: bool = False,
) -> None:
    if quiet:
        return
    output = console_err if use_err else console
    output.print(panel(title, build_action_list(items), style="success"))


__all__ = [
    "THEME",
    "build_action_list",
    "build_failures_table",
    "build_kv_table",
    "configure_ui",
    "console",
    "console_err",
    "panel",
    "print_completion_panel",
    "progress",
]
