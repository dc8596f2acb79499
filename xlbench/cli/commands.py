# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the xlbench CLI.

Each handler loads the harness config, bootstraps, selects the benchmarks,
calls into the core and turns the outcome into an exit code. The core never
logs its own failures; that happens here, once, with the error's diagnostic
text (which for compile failures includes the toolchain's stdout/stderr).

No print() calls. Everything goes through the structured logger.
"""

import argparse
import logging
from pathlib import Path

from xlbench.cli.exit_codes import (
    CONFIG_ERROR,
    RUNTIME_ERROR,
    SUCCESS,
    USER_ERROR,
    VALIDATION_ERROR,
)
from xlbench.config.exceptions import ConfigError
from xlbench.config.loader import load_harness_config
from xlbench.config.schema import HarnessConfig, TimingConfig
from xlbench.errors import HarnessError, RunError
from xlbench.logging.logger import configure_logging, get_logger
from xlbench.runtime.bootstrap import bootstrap
from xlbench.suite import Benchmark, load_all, load_selected


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, HarnessConfig | None, logging.Logger]:
    """
    Load the harness config (or defaults) and run bootstrap.

    Returns a tuple of (exit_code, config, logger). If exit_code is not SUCCESS,
    the caller should return it immediately.
    """
    configure_logging(args.log_level or "INFO")
    logger = get_logger(f"xlbench.cli.{command_name}")

    config = HarnessConfig()
    if args.config is not None:
        try:
            config = load_harness_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger

    if args.suite_root is not None:
        paths = config.paths.model_copy(update={"suite_root": Path(args.suite_root)})
        config = config.model_copy(update={"paths": paths})

    # The command line wins over the config file for verbosity.
    if args.log_level is not None:
        config = config.model_copy(update={"log_level": args.log_level})

    try:
        bootstrap(config, prepare_outputs=not args.dry_run)
    except HarnessError as err:
        return _fail(logger, "Bootstrap failed", err, RUNTIME_ERROR), None, logger
    return SUCCESS, config, logger


def _select_benchmarks(args: argparse.Namespace, config: HarnessConfig) -> list[Benchmark]:
    if args.bench:
        skipped = set(args.exclude_bench)
        names = [name for name in args.bench if name not in skipped]
        return load_selected(names, args.exclude_lang, config.paths)
    return load_all(args.exclude_lang, args.exclude_bench, config.paths)


def _preflight_ok(
    args: argparse.Namespace,
    benchmarks: list[Benchmark],
    logger: logging.Logger,
    timing: TimingConfig | None = None,
) -> bool:
    if args.no_preflight or args.dry_run:
        return True

    from xlbench.runtime.preflight import missing_tools

    missing = missing_tools(benchmarks, timing)
    if missing:
        logger.error(
            "Required executables not found on PATH; pass --no-preflight to try anyway",
            extra={"missing": missing},
        )
        return False
    return True


def _fail(logger: logging.Logger, message: str, err: Exception, exit_code: int) -> int:
    diagnostic = err.diagnostic() if isinstance(err, HarnessError) else str(err)
    logger.error(message, extra={"error_type": type(err).__name__, "error": diagnostic})
    return exit_code


def _log_build_plan(benchmark: Benchmark, logger: logging.Logger) -> None:
    for lang in benchmark.languages:
        steps = lang.build_steps(
            benchmark.source_path(lang),
            benchmark.artifact_path(lang),
            benchmark.config.heap_size,
            benchmark.paths.workspace_root,
        )
        logger.info(
            "Dry run: would build",
            extra={
                "benchmark": benchmark.name,
                "language": lang.value,
                "steps": [repr(step) for step in steps],
            },
        )


def handle_list(args: argparse.Namespace) -> int:
    """Log every discovered benchmark with its languages and run settings."""
    exit_code, config, logger = _load_and_bootstrap(args, "list")
    if exit_code != SUCCESS:
        return exit_code

    try:
        benchmarks = _select_benchmarks(args, config)
    except ConfigError as err:
        return _fail(logger, "Benchmark config error", err, CONFIG_ERROR)
    except HarnessError as err:
        return _fail(logger, "Benchmark discovery failed", err, RUNTIME_ERROR)

    for benchmark in benchmarks:
        logger.info(
            "Benchmark",
            extra={
                "benchmark": benchmark.name,
                "languages": [lang.value for lang in benchmark.languages],
                "runs": benchmark.config.runs,
                "args": benchmark.config.args,
                "test_args": benchmark.config.test_args,
            },
        )
    logger.info("Listed benchmarks", extra={"total": len(benchmarks)})
    return SUCCESS


def handle_compile(args: argparse.Namespace) -> int:
    """Compile every selected benchmark in every discovered language."""
    exit_code, config, logger = _load_and_bootstrap(args, "compile")
    if exit_code != SUCCESS:
        return exit_code

    from xlbench.build.compiler import compile_all

    try:
        benchmarks = _select_benchmarks(args, config)
        if not _preflight_ok(args, benchmarks, logger):
            return USER_ERROR

        for benchmark in benchmarks:
            if args.dry_run:
                _log_build_plan(benchmark, logger)
                continue
            compile_all(benchmark)

        logger.info("Compile finished", extra={"benchmarks": len(benchmarks)})
        return SUCCESS

    except ConfigError as err:
        return _fail(logger, "Benchmark config error", err, CONFIG_ERROR)
    except HarnessError as err:
        return _fail(logger, "Compile failed", err, RUNTIME_ERROR)


def handle_test(args: argparse.Namespace) -> int:
    """Compile, then run every variant once with its test arguments."""
    exit_code, config, logger = _load_and_bootstrap(args, "test")
    if exit_code != SUCCESS:
        return exit_code

    from xlbench.build.compiler import compile_all
    from xlbench.execution.runner import Mode, run_all, run_command

    try:
        benchmarks = _select_benchmarks(args, config)
        if not _preflight_ok(args, benchmarks, logger):
            return USER_ERROR

        for benchmark in benchmarks:
            if args.dry_run:
                _log_build_plan(benchmark, logger)
                for lang in benchmark.languages:
                    logger.info(
                        "Dry run: would run",
                        extra={
                            "benchmark": benchmark.name,
                            "language": lang.value,
                            "argv": run_command(benchmark, lang, Mode.TEST),
                        },
                    )
                continue
            compile_all(benchmark)
            outputs = run_all(benchmark, Mode.TEST)
            logger.info(
                "Benchmark passed test mode",
                extra={
                    "benchmark": benchmark.name,
                    "languages": [output.language.value for output in outputs],
                },
            )

        return SUCCESS

    except ConfigError as err:
        return _fail(logger, "Benchmark config error", err, CONFIG_ERROR)
    except RunError as err:
        return _fail(logger, "Test run failed", err, VALIDATION_ERROR)
    except HarnessError as err:
        return _fail(logger, "Test failed", err, RUNTIME_ERROR)


def handle_bench(args: argparse.Namespace) -> int:
    """Compile, then time every variant of each benchmark with hyperfine."""
    exit_code, config, logger = _load_and_bootstrap(args, "bench")
    if exit_code != SUCCESS:
        return exit_code

    from xlbench.build.compiler import compile_all
    from xlbench.timing.hyperfine import hyperfine_command, time_all

    try:
        benchmarks = _select_benchmarks(args, config)
        if args.skip_existing:
            pending = [b for b in benchmarks if not b.results_exist()]
            for benchmark in benchmarks:
                if benchmark not in pending:
                    logger.info(
                        "Skipping benchmark with existing results",
                        extra={"benchmark": benchmark.name},
                    )
            benchmarks = pending

        if not _preflight_ok(args, benchmarks, logger, config.timing):
            return USER_ERROR

        for benchmark in benchmarks:
            if args.dry_run:
                _log_build_plan(benchmark, logger)
                logger.info(
                    "Dry run: would time",
                    extra={
                        "benchmark": benchmark.name,
                        "argv": hyperfine_command(benchmark, config.timing),
                    },
                )
                continue
            compile_all(benchmark)
            time_all(benchmark, config.timing)

        logger.info("Benchmarking finished", extra={"benchmarks": len(benchmarks)})
        return SUCCESS

    except ConfigError as err:
        return _fail(logger, "Benchmark config error", err, CONFIG_ERROR)
    except HarnessError as err:
        return _fail(logger, "Benchmarking failed", err, RUNTIME_ERROR)


def handle_info(args: argparse.Namespace) -> int:
    """Display environment, host architecture and known languages."""
    configure_logging(args.log_level or "INFO")
    logger = get_logger("xlbench.cli.info")

    from xlbench import __version__
    from xlbench.languages import Language
    from xlbench.runtime.environment import get_system_info

    system_info = get_system_info()

    logger.info(
        "System information",
        extra={
            "xlbench_version": __version__,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
            "languages": {lang.value: lang.ext for lang in Language},
            "config": args.config,
        },
    )
    return SUCCESS
