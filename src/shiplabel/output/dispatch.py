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

"""Deliver label output: write a download file or open a print surface."""

from __future__ import annotations

import logging
import os
import tempfile
import webbrowser
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import OutputSinkError, PopupBlockedError
from ..render.assemble import LabelDocument
from ..render.surface import VisualSurface
from .names import single_label_filename

logger = logging.getLogger(__name__)

DEFAULT_PRINT_DELAY_MS = 500

_PRINT_SCRIPT = (
    "<script>window.addEventListener('load', function () {{"
    " window.focus(); setTimeout(function () {{ window.print(); }}, {delay}); }});</script>"
)


@dataclass(frozen=True)
class DownloadSink:
    directory: Path = field(default_factory=Path.cwd)

    def deliver(self, document: LabelDocument) -> Path:
        target = Path(self.directory) / document.filename
        tmp_name: str | None = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=target.parent, prefix=".shiplabel-", suffix=".part"
            )
            with os.fdopen(fd, "wb") as handle:
                handle.write(document.data)
            os.replace(tmp_name, target)
        except OSError as exc:
            raise OutputSinkError(f"unable to write {target}: {exc}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.info("wrote %s (%d page(s))", target, document.page_count)
        return target


def inject_print_script(html: str, delay_ms: int) -> str:
    script = _PRINT_SCRIPT.format(delay=int(delay_ms))
    marker = html.lower().rfind("</body>")
    if marker == -1:
        return html + script
    return html[:marker] + script + html[marker:]


@dataclass(frozen=True)
class PrintSink:
    """Open the label HTML in a new browser window that prints itself."""

    delay_ms: int = DEFAULT_PRINT_DELAY_MS
    opener: Callable[[str], bool] = webbrowser.open_new
    directory: Path | None = None

    def deliver(self, surface: VisualSurface) -> Path:
        html = inject_print_script(surface.html, self.delay_ms)
        stem = Path(single_label_filename(surface.order_number)).stem
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                suffix=".html",
                prefix=f"{stem}-",
                dir=self.directory,
                delete=False,
            ) as handle:
                handle.write(html)
                path = Path(handle.name)
        except OSError as exc:
            raise OutputSinkError(f"unable to stage print surface: {exc}") from exc

        try:
            opened = self.opener(path.resolve().as_uri())
        except webbrowser.Error as exc:
            path.unlink(missing_ok=True)
            raise PopupBlockedError(f"print window could not be opened: {exc}") from exc
        if not opened:
            path.unlink(missing_ok=True)
            raise PopupBlockedError(
                "print window could not be opened; allow the browser to open new windows"
            )
        logger.info("opened print surface for %s", surface.order_number)
        return path


__all__ = ["DownloadSink", "PrintSink", "inject_print_script"]
