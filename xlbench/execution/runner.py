# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Run compiled artifacts once, outside of hyperfine.

Test mode runs each variant with the benchmark's `test_args`, which is how
you check that every toolchain produced something that starts and exits
cleanly before spending minutes timing it. Benchmark mode uses `args`, the
same arguments hyperfine will use. Only the exit status decides success.
Output is captured and returned but never checked.
"""

import time
from dataclasses import dataclass
from enum import Enum

from xlbench.errors import RunError, decode_output
from xlbench.languages import Language
from xlbench.logging.logger import get_logger
from xlbench.suite.benchmark import Benchmark, check_language
from xlbench.utils.process import run_captured

logger = get_logger(__name__)


class Mode(str, Enum):
    TEST = "test"
    BENCHMARK = "benchmark"


@dataclass(frozen=True)
class RunOutput:
    """What came back from running one artifact."""

    language: Language
    exit_code: int
    stdout: str
    stderr: str
    elapsed_seconds: float


def run_args(benchmark: Benchmark, mode: Mode) -> list[str]:
    """The argument list a mode appends to the run command."""
    if mode is Mode.TEST:
        return list(benchmark.config.test_args)
    return list(benchmark.config.args)


def run_command(benchmark: Benchmark, lang: Language, mode: Mode) -> list[str]:
    """Full argv for running `lang`'s artifact in `mode`."""
    check_language(benchmark, lang, "Running")
    return [*lang.run_command(benchmark.artifact_path(lang)), *run_args(benchmark, mode)]


def run(benchmark: Benchmark, lang: Language, mode: Mode) -> RunOutput:
    """
    Run one artifact and return its output.

    Raises:
        UnknownLanguageError: `lang` wasn't discovered for this benchmark.
        RunError: The process couldn't start or exited non-zero.
    """
    argv = run_command(benchmark, lang, mode)

    start = time.monotonic()
    try:
        result = run_captured(argv)
    except OSError as err:
        raise RunError(benchmark.name, lang.value, err) from err
    elapsed = time.monotonic() - start

    stdout = decode_output(result.stdout)
    stderr = decode_output(result.stderr)

    if not result.success:
        raise RunError(
            benchmark.name,
            lang.value,
            f"exited with status {result.exit_code}",
            exit_code=result.exit_code,
            stdout=stdout,
            stderr=stderr,
        )

    logger.info(
        "Run finished",
        extra={
            "benchmark": benchmark.name,
            "language": lang.value,
            "mode": mode.value,
            "elapsed_seconds": round(elapsed, 3),
        },
    )

    return RunOutput(
        language=lang,
        exit_code=result.exit_code,
        stdout=stdout,
        stderr=stderr,
        elapsed_seconds=elapsed,
    )


def run_all(benchmark: Benchmark, mode: Mode) -> list[RunOutput]:
    """
    Run every discovered language in discovery order.

    Stops at the first failure and raises it, so later languages never run.
    """
    outputs: list[RunOutput] = []
    for lang in benchmark.languages:
        outputs.append(run(benchmark, lang, mode))
    return outputs
