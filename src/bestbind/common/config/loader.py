# SPDX-FileCopyrightText: Copyright (c) 2025-2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Config file discovery and profile loading."""

import logging
import os
import tomllib
from pathlib import Path

from pydantic import ValidationError

from bestbind.common.config.profile_config import Profile
from bestbind.common.constants import (
    CONFIG_FILE_NAME,
    HOME_CONFIG_FILE_NAME,
    SYSTEM_CONFIG_PATH,
)
from bestbind.common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    "get_config_paths",
    "load_profile",
    "parse_profile",
]


def get_config_paths(explicit: Path | None = None) -> list[Path]:
    """Return the config file candidates in lookup order.

    An explicit path is the only candidate. Otherwise the XDG config directory
    ($XDG_CONFIG_HOME, defaulting to ~/.config), the home directory and /etc are
    tried in that order.
    """
    if explicit is not None:
        return [Path(explicit)]

    paths = []
    home = Path.home()
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    xdg_dir = Path(xdg_config_home) if xdg_config_home else home / ".config"
    paths.append(xdg_dir / CONFIG_FILE_NAME)
    paths.append(home / HOME_CONFIG_FILE_NAME)
    paths.append(Path(SYSTEM_CONFIG_PATH))
    return paths


def parse_profile(text: str, profile_name: str, source: str = "<config>") -> Profile:
    """Parse TOML config text and return the named profile.

    Raises:
        ConfigurationError: If the text is not valid TOML, the profile is missing
            or the profile fails validation
    """
    try:
        profiles = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Cannot parse config file {source}: {e}") from e

    raw = profiles.get(profile_name)
    if raw is None:
        raise ConfigurationError(
            f"Profile '{profile_name}' not found in config file {source}. "
            f"Available profiles: {', '.join(sorted(profiles)) or 'none'}"
        )
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Profile '{profile_name}' in {source} must be a table"
        )

    try:
        return Profile.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid profile '{profile_name}' in {source}:\n{e}"
        ) from e


def load_profile(profile_name: str, explicit: Path | None = None) -> Profile:
    """Read the first readable config file and return the named profile.

    Raises:
        ConfigurationError: If no candidate file can be read, or parsing fails
    """
    errors = []
    for path in get_config_paths(explicit):
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            errors.append(f"Tried: {path}, got error: {e}")
            continue
        logger.debug(f"Using config file {path}")
        return parse_profile(text, profile_name, source=str(path))

    raise ConfigurationError("Cannot open config file.\n" + "\n".join(errors))
