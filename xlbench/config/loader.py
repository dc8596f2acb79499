# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Config loader. Reads YAML from disk and produces frozen, validated models.

The pipeline is the same for both config kinds:
  1. Read the text
  2. Parse it with yaml.safe_load
  3. Validate the mapping with pydantic
  4. Return the frozen model

The only difference is what a missing file means. A missing harness config
that the user named explicitly is an error. A missing `.args` sidecar just
means the benchmark runs with defaults.
"""

from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from xlbench.config.exceptions import ConfigLoadError, ConfigValidationError
from xlbench.config.schema import BenchmarkConfig, HarnessConfig

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _read_yaml_file(config_path: Path) -> dict[str, Any]:
    """
    Read a YAML file and return the parsed mapping.

    An empty file parses to None, which we treat as an empty mapping so a
    placeholder sidecar behaves like an absent one.

    Raises:
        ConfigLoadError: If the file isn't a readable file or isn't a YAML mapping.
    """
    if not config_path.is_file():
        raise ConfigLoadError(f"Config path is not a file: {config_path}")

    try:
        raw_text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise ConfigLoadError(f"Cannot read config file {config_path}: {err}") from err

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as err:
        raise ConfigLoadError(f"Invalid YAML in {config_path}: {err}") from err

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        raise ConfigLoadError(
            f"Config file must contain a YAML mapping, got {type(parsed).__name__}"
        )

    return parsed


def _validate(model: type[_ModelT], raw_data: dict[str, Any], config_path: Path) -> _ModelT:
    try:
        return model.model_validate(raw_data)
    except ValidationError as err:
        raise ConfigValidationError(
            f"Config validation failed for {config_path}:\n{err}"
        ) from err


def load_harness_config(config_path: Path) -> HarnessConfig:
    """
    Load the harness config named on the command line.

    Raises:
        ConfigLoadError: File missing, unreadable, or not a YAML mapping.
        ConfigValidationError: Unknown keys or invalid values.
    """
    if not config_path.exists():
        raise ConfigLoadError(f"Config file not found: {config_path}")
    return _validate(HarnessConfig, _read_yaml_file(config_path), config_path)


def load_benchmark_config(config_path: Path) -> BenchmarkConfig:
    """
    Load a benchmark's `.args` sidecar, or the defaults if there isn't one.

    Raises:
        ConfigLoadError: The file exists but can't be read or parsed.
        ConfigValidationError: The file parses but has bad fields.
    """
    if not config_path.exists():
        return BenchmarkConfig()
    return _validate(BenchmarkConfig, _read_yaml_file(config_path), config_path)
