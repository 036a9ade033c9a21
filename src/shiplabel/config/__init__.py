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

"""Config loaders and installers."""

from .installer import (
    CONFIG_PATH_ENV,
    DEFAULT_CONFIG_PATH,
    DEFAULT_TEMPLATE_PATH,
    init_user_config,
    resolve_config_path,
    user_config_needs_init,
    user_template_path,
)
from .loader import (
    MIN_SCALE_FACTOR,
    AppConfig,
    LabelDefaults,
    OutputDefaults,
    PrintDefaults,
    RenderDefaults,
    default_app_config,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "CONFIG_PATH_ENV",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TEMPLATE_PATH",
    "LabelDefaults",
    "MIN_SCALE_FACTOR",
    "OutputDefaults",
    "PrintDefaults",
    "RenderDefaults",
    "default_app_config",
    "init_user_config",
    "load_app_config",
    "resolve_config_path",
    "user_config_needs_init",
    "user_template_path",
]
