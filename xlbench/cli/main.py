# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for xlbench.

Every operation is a subcommand of `xlbench`. The selection options
(--bench, --exclude-bench, --exclude-lang) and the global ones (--config,
--log-level, --dry-run) are shared by all subcommands through an argparse
parent parser.

Usage:
    xlbench list
    xlbench compile --bench fib --exclude-lang haskell
    xlbench test --config configs/harness.yaml
    xlbench bench --skip-existing
"""

import argparse
import sys

from xlbench.cli.commands import (
    handle_bench,
    handle_compile,
    handle_info,
    handle_list,
    handle_test,
)
from xlbench.cli.exit_codes import USER_ERROR
from xlbench.languages import Language


def _language(text: str) -> Language:
    try:
        return Language.parse(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from err


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with options every subcommand inherits.

    add_help=False so the parent's -h doesn't collide with each subcommand's.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to the harness YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (overrides the config file).",
    )
    parent.add_argument(
        "--suite-root",
        type=str,
        default=None,
        dest="suite_root",
        help="Directory holding one subdirectory per benchmark (overrides the config file).",
    )
    parent.add_argument(
        "--bench",
        action="append",
        default=[],
        metavar="NAME",
        help="Only use this benchmark. Repeatable.",
    )
    parent.add_argument(
        "--exclude-bench",
        action="append",
        default=[],
        dest="exclude_bench",
        metavar="NAME",
        help="Skip this benchmark. Repeatable.",
    )
    parent.add_argument(
        "--exclude-lang",
        action="append",
        default=[],
        dest="exclude_lang",
        type=_language,
        metavar="LANG",
        help="Skip this language, by name or extension. Repeatable.",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Log what would be built, run and timed without doing it.",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    commands = [
        ("list", "List discovered benchmarks and their languages.", handle_list),
        ("compile", "Compile every variant of the selected benchmarks.", handle_compile),
        ("test", "Compile and run every variant with its test arguments.", handle_test),
        ("bench", "Compile and time every variant with hyperfine.", handle_bench),
        ("info", "Display environment and language info.", handle_info),
    ]

    for name, help_text, handler in commands:
        parser = subparsers.add_parser(name, parents=[parent], help=help_text)
        parser.set_defaults(func=handler, no_preflight=False, skip_existing=False)

    for name in ("compile", "test", "bench"):
        subparsers.choices[name].add_argument(
            "--no-preflight",
            action="store_true",
            dest="no_preflight",
            help="Don't check that toolchain executables are on PATH first.",
        )

    subparsers.choices["bench"].add_argument(
        "--skip-existing",
        action="store_true",
        dest="skip_existing",
        help="Skip benchmarks that already have a results CSV.",
    )


def main() -> None:
    """
    Main CLI entrypoint, the target of the `xlbench` console script.

    If no subcommand is given, we show help and exit with USER_ERROR.
    """
    parent = _build_global_parser()

    root_parser = argparse.ArgumentParser(
        prog="xlbench",
        description="xlbench: cross-language benchmark harness.",
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)

    args = root_parser.parse_args()

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
