# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Errors raised while reading the harness config or a benchmark's `.args` sidecar.

Kept apart from xlbench.errors so the CLI can tell a broken config file from
a failed toolchain and exit with CONFIG_ERROR instead of RUNTIME_ERROR.
"""


class ConfigError(Exception):
    """A harness config or `.args` sidecar that can't be turned into settings."""


class ConfigLoadError(ConfigError):
    """
    The file named by --config is missing, or a config/sidecar file can't be
    read, isn't YAML, or holds something other than a mapping at the top.
    """


class ConfigValidationError(ConfigError):
    """
    The YAML parsed but the settings don't fit the schema, e.g. a misspelled
    key under `timing:`, `runs: 0`, a negative `warmup`, or an unknown
    `log_level`.
    """
