# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for xlbench.

There are two kinds of config file:

  - the harness config (one YAML file, passed with --config) that says where
    the suite lives, where binaries and results go, and how hyperfine runs;
  - the per-benchmark sidecar `<name>/<name>.args`, a small YAML mapping with
    the run arguments and repetition count for that one benchmark.

Both are frozen pydantic models with extra="forbid", so a typo in a key is a
load-time failure instead of a silently ignored setting.
"""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RUNS = 10
DEFAULT_WARMUP = 3


class BenchmarkConfig(BaseModel):
    """Settings for one benchmark, loaded from its `.args` sidecar."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    test_args: list[str] = Field(
        default_factory=list,
        description="Arguments for test mode, used to check a variant runs cleanly",
    )
    args: list[str] = Field(
        default_factory=list,
        description="Arguments for benchmark mode, used for timed runs",
    )
    runs: int = Field(
        default=DEFAULT_RUNS,
        ge=1,
        description="Timed repetitions hyperfine performs per variant",
    )
    heap_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Heap size hint handed to compilers that take one",
    )

    @field_validator("test_args", "args", mode="before")
    @classmethod
    def _stringify_args(cls, value: object) -> object:
        # `args: [35]` in YAML gives ints; a command line only has strings.
        if isinstance(value, list):
            return [item if isinstance(item, str) else str(item) for item in value]
        return value


class PathsConfig(BaseModel):
    """Where the harness reads sources from and writes artifacts to."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    suite_root: Path = Field(
        default=Path("benchmarks/suite"),
        description="One subdirectory per benchmark problem",
    )
    binary_root: Path = Field(
        default=Path("target_xlbench/bin"),
        description="Compiled artifacts, split into one directory per host architecture",
    )
    results_root: Path = Field(
        default=Path("target_xlbench/results/raw"),
        description="hyperfine CSV exports, one per benchmark",
    )
    workspace_root: Path = Field(
        default=Path("target_xlbench/moon_workspace"),
        description="MoonBit project the staged build copies sources into",
    )


class TimingConfig(BaseModel):
    """How hyperfine is invoked."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    executable: str = Field(default="hyperfine", description="hyperfine binary name or path")
    warmup: int = Field(
        default=DEFAULT_WARMUP,
        ge=0,
        description="Untimed runs before measurement starts",
    )
    name_commands: bool = Field(
        default=True,
        description="Label each hyperfine command with its language (-n)",
    )


class HarnessConfig(BaseModel):
    """Top-level harness config. Every section has working defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    paths: PathsConfig = Field(default_factory=PathsConfig)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional path for a copy of the JSON log",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level '{value}'")
        return upper
