# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
hyperfine driver.

All language variants of one benchmark are timed in a single hyperfine
invocation, so they share warm-up policy, repetition count and one CSV with a
row per variant:

    hyperfine -n rust '<bin>/fib_rust 35' -n smlnj 'sml @SMLload <bin>/fib_smlnj 35' \
        --runs 10 --warmup 3 --export-csv <results>/fib.csv

hyperfine itself is a black box here. The harness hands it runnable command
strings and trusts it to produce the statistics.
"""

from xlbench.config.schema import TimingConfig
from xlbench.errors import HyperfineError
from xlbench.logging.logger import get_logger
from xlbench.suite.benchmark import Benchmark, check_language
from xlbench.utils.paths import ensure_directory, path_text
from xlbench.utils.process import run_attached

logger = get_logger(__name__)


def build_commands(benchmark: Benchmark) -> list[tuple[str, str]]:
    """
    One (label, shell command) pair per discovered language, in discovery order.

    Raises:
        UnknownLanguageError: The language set no longer matches the benchmark.
        PathAccessError: An artifact path isn't valid text.
    """
    commands: list[tuple[str, str]] = []
    for lang in benchmark.languages:
        check_language(benchmark, lang, "Run hyperfine")
        artifact = benchmark.artifact_path(lang)
        path_text(artifact)
        commands.append((lang.value, lang.shell_command(artifact, benchmark.config.args)))
    return commands


def hyperfine_command(benchmark: Benchmark, timing: TimingConfig | None = None) -> list[str]:
    """Full hyperfine argv for timing every variant of `benchmark`."""
    timing = timing if timing is not None else TimingConfig()

    argv = [timing.executable]
    for label, command in build_commands(benchmark):
        if timing.name_commands:
            argv.extend(["-n", label])
        argv.append(command)

    argv.extend(["--runs", str(benchmark.config.runs)])
    argv.extend(["--warmup", str(timing.warmup)])
    argv.extend(["--export-csv", path_text(benchmark.result_path())])
    return argv


def time_all(benchmark: Benchmark, timing: TimingConfig | None = None) -> None:
    """
    Time every variant with hyperfine and export `<results_root>/<name>.csv`.

    hyperfine's own progress output goes straight to the terminal.

    Raises:
        HyperfineError: hyperfine couldn't start or exited non-zero.
        FileAccessError: The results root can't be created.
        UnknownLanguageError, PathAccessError: See build_commands.
    """
    argv = hyperfine_command(benchmark, timing)
    ensure_directory(benchmark.result_path().parent)
    logger.info(
        "hyperfine command",
        extra={"benchmark": benchmark.name, "argv": argv},
    )

    try:
        exit_code = run_attached(argv)
    except OSError as err:
        raise HyperfineError(benchmark.name, err) from err

    if exit_code != 0:
        raise HyperfineError(benchmark.name, f"exited with status {exit_code}")

    logger.info(
        "Timing finished",
        extra={"benchmark": benchmark.name, "results": str(benchmark.result_path())},
    )
