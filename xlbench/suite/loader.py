# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Suite loader.

Every directory directly under the suite root is one benchmark. Plain files
at the root (READMEs, scripts) are skipped without complaint. Loading is
fail-fast: if any benchmark can't be discovered, nothing is returned and the
error goes straight to the caller.
"""

from pathlib import Path
from typing import Iterable

from xlbench.config.schema import PathsConfig
from xlbench.errors import ReadDirError
from xlbench.languages import Language
from xlbench.logging.logger import get_logger
from xlbench.suite.benchmark import Benchmark

logger = get_logger(__name__)


def load_all(
    exclude_langs: Iterable[Language] = (),
    exclude_benches: Iterable[str] = (),
    paths: PathsConfig | None = None,
) -> list[Benchmark]:
    """
    Discover every benchmark under the suite root, sorted by name.

    Raises:
        ReadDirError: The suite root (or a benchmark directory) can't be listed.
        PathAccessError: A file name in a benchmark isn't valid text.
        ConfigError: A benchmark's `.args` sidecar is broken.
    """
    paths = paths if paths is not None else PathsConfig()
    exclude_langs = tuple(exclude_langs)
    skipped = frozenset(exclude_benches)
    suite_root = paths.suite_root

    try:
        entries = sorted(suite_root.iterdir(), key=lambda p: p.name)
    except OSError as err:
        raise ReadDirError(suite_root, err) from err

    benchmarks: list[Benchmark] = []
    for entry in entries:
        if not entry.is_dir():
            continue
        if entry.name in skipped:
            logger.debug("Skipping excluded benchmark", extra={"benchmark": entry.name})
            continue
        benchmarks.append(Benchmark.discover(entry.name, exclude_langs, paths))

    logger.info(
        "Benchmark suite loaded",
        extra={
            "suite_root": str(suite_root),
            "total_benchmarks": len(benchmarks),
        },
    )
    return benchmarks


def load_selected(
    names: Iterable[str],
    exclude_langs: Iterable[Language] = (),
    paths: PathsConfig | None = None,
) -> list[Benchmark]:
    """
    Discover only the named benchmarks, in the order given.

    Raises:
        ReadDirError: A named benchmark has no directory under the suite root.
    """
    paths = paths if paths is not None else PathsConfig()
    exclude_langs = tuple(exclude_langs)

    benchmarks: list[Benchmark] = []
    for name in names:
        bench_dir: Path = paths.suite_root / name
        if not bench_dir.is_dir():
            raise ReadDirError(bench_dir, "no such benchmark directory")
        benchmarks.append(Benchmark.discover(name, exclude_langs, paths))
    return benchmarks
