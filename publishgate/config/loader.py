# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
YAML config file loading.

A publishgate config file is optional and usually tiny: most CI jobs set a
branch and maybe a repository URL, and leave the rest to the environment.
An empty file is valid and means "all defaults". Anything that is not a
mapping, or that names an unknown key, is rejected with a
`ConfigLoadError` or `ConfigValidationError` so `check` exits with the
config error code instead of guessing.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from publishgate.config.exceptions import ConfigLoadError, ConfigValidationError
from publishgate.config.schema import PublishGateConfig


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    """
    Read a YAML file and return the parsed dict.

    An empty file is treated as an empty mapping, so every section falls back
    to its defaults.

    Raises:
        ConfigLoadError: If the file doesn't exist, isn't readable, or isn't a YAML mapping.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")

    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except OSError as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping (dict), got {type(parsed).__name__}"
        )

    return parsed


def load_config(config_path: Path) -> PublishGateConfig:
    """
    Parse `config_path` into a PublishGateConfig.

    Tokens and URLs left unset here are filled from the environment later by
    `publishgate.config.resolve.resolve_config`.

    Raises:
        ConfigLoadError: File I/O or YAML parse failures.
        ConfigValidationError: Schema violations (wrong types, unknown keys).
    """
    raw_data = _read_yaml_file(config_path)

    try:
        config = PublishGateConfig.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err

    return config
