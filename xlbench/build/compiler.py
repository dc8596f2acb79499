# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Compile orchestration.

Turns one (benchmark, language) pair into an artifact at the canonical
artifact path. The language descriptor says what the build looks like as a
list of steps. This module runs those steps in order and maps each kind of
failure to its error:

  CommandStep         spawn failure / non-zero exit  -> CompileError
  CopyStep, MoveStep  OSError                        -> FileAccessError
  MakeExecutableStep  OSError                        -> PathAccessError

A compile that succeeded but left a non-executable artifact is a failed
compile. There is no caching: every call rebuilds from scratch and
overwrites whatever artifact was there.
"""

import shutil
import stat
import time
from pathlib import Path

from xlbench.errors import CompileError, FileAccessError, PathAccessError
from xlbench.languages import Language
from xlbench.languages.steps import (
    BuildStep,
    CommandStep,
    CopyStep,
    MakeExecutableStep,
    MoveStep,
)
from xlbench.logging.logger import get_logger
from xlbench.suite.benchmark import Benchmark, check_language
from xlbench.utils.paths import ensure_directory
from xlbench.utils.process import run_captured

logger = get_logger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def _run_command_step(step: CommandStep, benchmark: Benchmark, lang: Language) -> None:
    try:
        result = run_captured(step.argv, cwd=step.cwd)
    except OSError as err:
        raise CompileError(benchmark.name, lang.value, b"", str(err)) from err

    if not result.success:
        raise CompileError(benchmark.name, lang.value, result.stdout, result.stderr)


def _copy(source: Path, destination: Path) -> None:
    ensure_directory(destination.parent)
    try:
        shutil.copyfile(source, destination)
    except OSError as err:
        raise FileAccessError(destination, "Copy source into workspace", err) from err


def _move(source: Path, destination: Path) -> None:
    ensure_directory(destination.parent)
    try:
        shutil.move(str(source), str(destination))
    except OSError as err:
        raise FileAccessError(destination, "Move built artifact", err) from err


def _make_executable(path: Path) -> None:
    try:
        path.chmod(path.stat().st_mode | _EXEC_BITS)
    except OSError as err:
        raise PathAccessError(path, "Change file permissions") from err


def _uses_workspace(step: BuildStep, workspace: Path) -> bool:
    if isinstance(step, CommandStep):
        return step.cwd == workspace
    if isinstance(step, (CopyStep, MoveStep)):
        return workspace in step.destination.parents or workspace in step.source.parents
    return False


def execute_step(step: BuildStep, benchmark: Benchmark, lang: Language) -> None:
    """Run a single build step, raising the error that step kind maps to."""
    logger.debug(
        "Build step",
        extra={"benchmark": benchmark.name, "language": lang.value, "step": repr(step)},
    )
    if isinstance(step, CommandStep):
        _run_command_step(step, benchmark, lang)
    elif isinstance(step, CopyStep):
        _copy(step.source, step.destination)
    elif isinstance(step, MoveStep):
        _move(step.source, step.destination)
    elif isinstance(step, MakeExecutableStep):
        _make_executable(step.path)
    else:
        raise TypeError(f"Unknown build step: {step!r}")


def compile_benchmark(benchmark: Benchmark, lang: Language) -> Path:
    """
    Build one language variant of a benchmark and return its artifact path.

    Raises:
        UnknownLanguageError: `lang` wasn't discovered for this benchmark.
        CompileError: The toolchain failed; carries its stdout and stderr.
        FileAccessError: Staging or moving files around the build failed.
        PathAccessError: The artifact couldn't be made executable, or the
            binary root couldn't be resolved for this host.
    """
    check_language(benchmark, lang, "Compiling")

    source = benchmark.source_path(lang)
    artifact = benchmark.artifact_path(lang)
    ensure_directory(artifact.parent)
    workspace = benchmark.paths.workspace_root

    steps = lang.build_steps(source, artifact, benchmark.config.heap_size, workspace)
    if any(_uses_workspace(step, workspace) for step in steps):
        ensure_directory(workspace)

    logger.info(
        "Compiling",
        extra={
            "benchmark": benchmark.name,
            "language": lang.value,
            "source": str(source),
            "artifact": str(artifact),
        },
    )

    start = time.monotonic()
    for step in steps:
        execute_step(step, benchmark, lang)

    logger.info(
        "Compiled",
        extra={
            "benchmark": benchmark.name,
            "language": lang.value,
            "elapsed_seconds": round(time.monotonic() - start, 3),
        },
    )
    return artifact


def compile_all(benchmark: Benchmark) -> list[Path]:
    """
    Compile every discovered language in discovery order.

    Stops at the first failure and raises it. Languages after the failing
    one are not attempted.
    """
    artifacts: list[Path] = []
    for lang in benchmark.languages:
        artifacts.append(compile_benchmark(benchmark, lang))
    return artifacts
