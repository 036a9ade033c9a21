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

from collections.abc import Sequence
from dataclasses import dataclass


class LabelError(RuntimeError):
    pass


class InvalidOrderError(LabelError, ValueError):
    """The order lacks fields required to produce a label."""

    def __init__(self, message: str, *, order_id: str | None = None) -> None:
        super().__init__(message)
        self.order_id = order_id


class RenderFailure(LabelError):
    """Template population or rasterization failed for one label."""

    def __init__(self, message: str, *, order_id: str | None = None) -> None:
        super().__init__(message)
        self.order_id = order_id


class EmptyBatchError(LabelError, ValueError):
    pass


class OutputSinkError(LabelError):
    pass


class PopupBlockedError(OutputSinkError):
    pass


@dataclass(frozen=True)
class LabelFailure:
    order_id: str
    reason: str


class BatchFailedError(OutputSinkError):
    def __init__(self, failures: Sequence[LabelFailure]) -> None:
        self.failures = tuple(failures)
        super().__init__(
            f"no labels could be rendered: all {len(self.failures)} order(s) failed"
        )


__all__ = [
    "BatchFailedError",
    "EmptyBatchError",
    "InvalidOrderError",
    "LabelError",
    "LabelFailure",
    "OutputSinkError",
    "PopupBlockedError",
    "RenderFailure",
]
