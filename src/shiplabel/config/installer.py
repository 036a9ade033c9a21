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

import os
import shutil
import sys
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / "config/default.toml"
DEFAULT_TEMPLATE_PATH = PACKAGE_ROOT / "templates/label/shipping_label.html.j2"
CONFIG_FILENAME = "config.toml"
CONFIG_PATH_ENV = "SHIPLABEL_CONFIG"
XDG_CONFIG_ENV = "XDG_CONFIG_HOME"


@dataclass(frozen=True)
class ConfigPaths:
    user_config_dir: Path
    user_config_path: Path
    user_templates_dir: Path
    user_template_path: Path
    user_required_files: tuple[Path, ...]


def _user_config_dir() -> Path:
    xdg_override = os.environ.get(XDG_CONFIG_ENV)
    if xdg_override:
        return Path(xdg_override) / "shiplabel"
    if sys.platform == "darwin":
        return Path.home() / ".config" / "shiplabel"
    return Path(user_config_dir("shiplabel", appauthor=False))


def _build_paths() -> ConfigPaths:
    config_dir = _user_config_dir()
    templates_dir = config_dir / "templates" / DEFAULT_TEMPLATE_PATH.parent.name
    config_path = config_dir / CONFIG_FILENAME
    template_path = templates_dir / DEFAULT_TEMPLATE_PATH.name
    return ConfigPaths(
        user_config_dir=config_dir,
        user_config_path=config_path,
        user_templates_dir=templates_dir,
        user_template_path=template_path,
        user_required_files=(config_path, template_path),
    )


def init_user_config() -> Path:
    paths = _build_paths()
    if not _ensure_user_config(paths):
        raise OSError(f"unable to create config dir at {paths.user_config_dir}")
    return paths.user_config_dir


def user_config_needs_init() -> bool:
    paths = _build_paths()
    return any(not path.exists() for path in paths.user_required_files)


def user_template_path() -> Path:
    return _build_paths().user_template_path


def resolve_config_path(path: str | Path | None = None) -> Path:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path and env_path.strip():
        return Path(env_path.strip())
    user_config = _build_paths().user_config_path
    if user_config.exists():
        return user_config
    return DEFAULT_CONFIG_PATH


def _ensure_user_config(paths: ConfigPaths) -> bool:
    try:
        paths.user_config_dir.mkdir(parents=True, exist_ok=True)
        paths.user_templates_dir.mkdir(parents=True, exist_ok=True)
        _copy_if_missing(DEFAULT_CONFIG_PATH, paths.user_config_path)
        _copy_if_missing(DEFAULT_TEMPLATE_PATH, paths.user_template_path)
    except OSError:
        return False
    return True


def _copy_if_missing(source: Path, dest: Path) -> None:
    if dest.exists():
        return
    dest.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(source, dest)
