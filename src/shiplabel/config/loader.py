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

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..core.models import PartyAddress
from .installer import DEFAULT_CONFIG_PATH, DEFAULT_TEMPLATE_PATH, resolve_config_path

MIN_SCALE_FACTOR = 2
DEFAULT_PRINT_DELAY_MS = 500
DEFAULT_MAX_VISIBLE_ITEMS = 6


@dataclass(frozen=True)
class LabelDefaults:
    org_tag: str = "GS"
    currency_symbol: str = "₹"
    handling_notice: str = "Handle with Care"
    max_visible_items: int = DEFAULT_MAX_VISIBLE_ITEMS


@dataclass(frozen=True)
class RenderDefaults:
    scale_factor: int = MIN_SCALE_FACTOR
    per_label_timeout: float | None = None


@dataclass(frozen=True)
class PrintDefaults:
    delay_ms: int = DEFAULT_PRINT_DELAY_MS


@dataclass(frozen=True)
class OutputDefaults:
    directory: str | None = None


@dataclass(frozen=True)
class AppConfig:
    sender: PartyAddress
    template_path: Path = DEFAULT_TEMPLATE_PATH
    label: LabelDefaults = field(default_factory=LabelDefaults)
    render: RenderDefaults = field(default_factory=RenderDefaults)
    printing: PrintDefaults = field(default_factory=PrintDefaults)
    output: OutputDefaults = field(default_factory=OutputDefaults)
    source_path: Path | None = None


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return AppConfig(
        sender=_parse_sender(_get_dict(data, "sender")),
        template_path=_resolve_template_path(_get_dict(data, "template"), config_path),
        label=_parse_label_defaults(_get_dict(data, "label")),
        render=_parse_render_defaults(_get_dict(data, "render")),
        printing=_parse_print_defaults(_get_dict(data, "print")),
        output=_parse_output_defaults(_get_dict(data, "output")),
        source_path=config_path,
    )


def default_app_config() -> AppConfig:
    return load_app_config(DEFAULT_CONFIG_PATH)


def _parse_sender(cfg: dict[str, object]) -> PartyAddress:
    name = _parse_optional_str(cfg.get("name"), field="sender.name")
    if name is None:
        raise ValueError("sender.name must be a non-empty string")
    lines_value = cfg.get("address_lines")
    if not isinstance(lines_value, list) or not lines_value:
        raise ValueError("sender.address_lines must be a non-empty list of strings")
    lines: list[str] = []
    for index, line in enumerate(lines_value):
        parsed = _parse_optional_str(line, field=f"sender.address_lines[{index}]")
        if parsed is None:
            raise ValueError(f"sender.address_lines[{index}] must be a non-empty string")
        lines.append(parsed)
    return PartyAddress(
        name=name,
        lines=tuple(lines),
        phone=_parse_optional_str(cfg.get("phone"), field="sender.phone"),
        email=_parse_optional_str(cfg.get("email"), field="sender.email"),
        website=_parse_optional_str(cfg.get("website"), field="sender.website"),
    )


def _parse_label_defaults(cfg: dict[str, object]) -> LabelDefaults:
    defaults = LabelDefaults()
    max_items = _parse_optional_int(cfg.get("max_visible_items"), field="label.max_visible_items")
    if max_items is not None and max_items < 2:
        raise ValueError("label.max_visible_items must be at least 2")
    org_tag = _parse_optional_str(cfg.get("org_tag"), field="label.org_tag")
    if org_tag is not None and not (len(org_tag) == 2 and org_tag.isalnum()):
        raise ValueError("label.org_tag must be two alphanumeric characters")
    return LabelDefaults(
        org_tag=(org_tag or defaults.org_tag).upper(),
        currency_symbol=(
            _parse_optional_str(cfg.get("currency_symbol"), field="label.currency_symbol")
            or defaults.currency_symbol
        ),
        handling_notice=(
            _parse_optional_str(cfg.get("handling_notice"), field="label.handling_notice")
            or defaults.handling_notice
        ),
        max_visible_items=defaults.max_visible_items if max_items is None else max_items,
    )


def _parse_render_defaults(cfg: dict[str, object]) -> RenderDefaults:
    scale = _parse_optional_int(cfg.get("scale_factor"), field="render.scale_factor")
    if scale is not None and scale < MIN_SCALE_FACTOR:
        raise ValueError(f"render.scale_factor must be at least {MIN_SCALE_FACTOR}")
    timeout = _parse_optional_float(cfg.get("per_label_timeout"), field="render.per_label_timeout")
    if timeout is not None and timeout < 0:
        raise ValueError("render.per_label_timeout must be 0 or a positive number")
    return RenderDefaults(
        scale_factor=MIN_SCALE_FACTOR if scale is None else scale,
        per_label_timeout=timeout or None,
    )


def _parse_print_defaults(cfg: dict[str, object]) -> PrintDefaults:
    delay = _parse_optional_int(cfg.get("delay_ms"), field="print.delay_ms")
    if delay is not None and delay < 0:
        raise ValueError("print.delay_ms must be a non-negative integer")
    return PrintDefaults(delay_ms=DEFAULT_PRINT_DELAY_MS if delay is None else delay)


def _parse_output_defaults(cfg: dict[str, object]) -> OutputDefaults:
    return OutputDefaults(
        directory=_parse_optional_str(cfg.get("directory"), field="output.directory"),
    )


def _resolve_template_path(cfg: dict[str, object], config_path: Path) -> Path:
    value = _parse_optional_str(cfg.get("path"), field="template.path")
    if value is not None:
        candidate = Path(value).expanduser()
        if not candidate.is_absolute():
            candidate = config_path.parent / candidate
        if not candidate.is_file():
            raise ValueError(f"template.path: template not found: {candidate}")
        return candidate
    # A user config directory carries its own editable copy of the template.
    local = (
        config_path.parent
        / "templates"
        / DEFAULT_TEMPLATE_PATH.parent.name
        / DEFAULT_TEMPLATE_PATH.name
    )
    if local.is_file():
        return local
    return DEFAULT_TEMPLATE_PATH


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_optional_str(value: object, *, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    normalized = value.strip()
    return normalized or None


def _parse_int_strict(value: object, *, field: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{field} must be an integer")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError(f"{field} must be an integer")
        try:
            return int(text)
        except ValueError as exc:
            raise ValueError(f"{field} must be an integer") from exc
    raise ValueError(f"{field} must be an integer")


def _parse_optional_int(value: object, *, field: str) -> int | None:
    if value is None:
        return None
    return _parse_int_strict(value, field=field)


def _parse_optional_float(value: object, *, field: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as exc:
            raise ValueError(f"{field} must be a number") from exc
    raise ValueError(f"{field} must be a number")
