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

import importlib.metadata
import inspect
import os
import re
import subprocess
import sys
from pathlib import Path

import playwright
from platformdirs import user_cache_dir
from playwright.sync_api import sync_playwright
from rich.progress import Progress, TaskID
from rich.traceback import install as install_rich_traceback

from ..config import init_user_config
from .core.log import configure_logging
from .ui import configure_ui, console, progress

_PLAYWRIGHT_SKIP_ENV = "SHIPLABEL_SKIP_PLAYWRIGHT_INSTALL"
_PLAYWRIGHT_BROWSERS_ENV = "PLAYWRIGHT_BROWSERS_PATH"
_PLAYWRIGHT_PERCENT_RE = re.compile(r"(\d{1,3})%")


def run_startup(
    *,
    quiet: bool,
    no_color: bool,
    no_animations: bool,
    debug: bool,
    init_config: bool,
) -> bool:
    configure_ui(no_color=no_color, no_animations=no_animations)
    configure_logging(debug=debug, quiet=quiet)
    if debug:
        install_rich_traceback(show_locals=True)
    if init_config:
        config_dir = init_user_config()
        console.print(f"User config ready at {config_dir}")
        return True
    _ensure_playwright_browsers(quiet=quiet)
    return False


def ensure_playwright_browsers(*, quiet: bool = True) -> None:
    _ensure_playwright_browsers(quiet=quiet)


def _configure_playwright_env() -> None:
    if os.environ.get(_PLAYWRIGHT_BROWSERS_ENV):
        return
    os.environ[_PLAYWRIGHT_BROWSERS_ENV] = user_cache_dir("ms-playwright", appauthor=False)


def _playwright_chromium_installed() -> bool:
    try:
        with sync_playwright() as playwright_instance:
            executable = Path(playwright_instance.chromium.executable_path)
    except (OSError, RuntimeError, playwright.sync_api.Error):
        return False
    return executable.exists()


def _playwright_driver_command() -> tuple[str, str]:
    driver_path = Path(inspect.getfile(playwright)).parent / "driver"
    cli_path = str(driver_path / "package" / "cli.js")
    node_name = "node.exe" if sys.platform == "win32" else "node"
    node_path = os.getenv("PLAYWRIGHT_NODEJS_PATH", str(driver_path / node_name))
    return node_path, cli_path


def _playwright_driver_env() -> dict[str, str]:
    env = os.environ.copy()
    env["PW_LANG_NAME"] = "python"
    env["PW_LANG_NAME_VERSION"] = f"{sys.version_info.major}.{sys.version_info.minor}"
    env["PW_CLI_DISPLAY_VERSION"] = importlib.metadata.version("playwright")
    return env


def _ensure_playwright_browsers(*, quiet: bool) -> None:
    if os.environ.get(_PLAYWRIGHT_SKIP_ENV):
        return
    _configure_playwright_env()
    if _playwright_chromium_installed():
        return
    with progress(quiet=quiet) as progress_bar:
        task_id: TaskID | None = None
        if progress_bar is not None:
            task_id = progress_bar.add_task("Installing Chromium for label rendering...", total=100)
        _playwright_install(progress_bar, task_id)


def _playwright_install(progress_bar: Progress | None, task_id: TaskID | None) -> None:
    driver_executable, driver_cli = _playwright_driver_command()
    process = subprocess.Popen(
        [driver_executable, driver_cli, "install", "chromium"],
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        env=_playwright_driver_env(),
        bufsize=1,
    )
    if process.stdout is None:
        raise RuntimeError("Playwright install failed: unable to capture output")
    tail: list[str] = []
    for line in process.stdout:
        tail = [*tail[-49:], line]
        percent = _parse_playwright_progress(line)
        if progress_bar is not None and task_id is not None and percent is not None:
            progress_bar.update(task_id, completed=percent)
    if process.wait() != 0:
        detail = "".join(tail).strip() or "unknown error"
        raise RuntimeError(f"Playwright install failed: {detail}")


def _parse_playwright_progress(line: str) -> int | None:
    match = _PLAYWRIGHT_PERCENT_RE.search(line)
    if match is None:
        return None
    return min(100, int(match.group(1)))
