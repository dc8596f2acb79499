# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
One benchmark problem, as found on disk.

A benchmark is a directory under the suite root:

    benchmarks/suite/
    └── fib/
        ├── fib.args    optional YAML sidecar (arguments, runs, heap size)
        ├── fib.rs
        ├── fib.go
        └── fib.sc

Every file whose extension belongs to a known language adds that language to
the benchmark. The set is computed once at discovery and never changes, and
everything else about the benchmark (artifact paths, result path) is derived
from its name on demand. Deriving a path never touches the filesystem; the
directories are created by whichever stage writes into them.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from xlbench.config.loader import load_benchmark_config
from xlbench.config.schema import BenchmarkConfig, PathsConfig
from xlbench.errors import ReadDirError, UnknownLanguageError
from xlbench.languages import CONFIG_EXT, Language
from xlbench.logging.logger import get_logger
from xlbench.runtime.environment import binary_root
from xlbench.utils.paths import file_extension

logger = get_logger(__name__)


@dataclass(frozen=True)
class Benchmark:
    """
    A discovered benchmark.

    `languages` keeps directory-listing order, which is the order variants
    get compiled, run and timed in. Don't assume it's sorted.
    """

    name: str
    base_path: Path
    languages: tuple[Language, ...]
    config: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def discover(
        cls,
        name: str,
        exclude_langs: Iterable[Language] = (),
        paths: PathsConfig | None = None,
    ) -> "Benchmark":
        """
        Build a Benchmark from `<suite_root>/<name>`.

        Raises:
            ReadDirError: The benchmark directory can't be listed.
            PathAccessError: A file name's extension isn't valid text.
            ConfigError: The `.args` sidecar exists but is broken.
        """
        paths = paths if paths is not None else PathsConfig()
        excluded = frozenset(exclude_langs)
        base_path = paths.suite_root / name
        config = load_benchmark_config(base_path / f"{name}.{CONFIG_EXT}")

        try:
            entries = list(base_path.iterdir())
        except OSError as err:
            raise ReadDirError(base_path, err) from err

        languages: list[Language] = []
        for entry in entries:
            if entry.is_dir():
                continue
            ext = file_extension(entry)
            if ext is None or ext == CONFIG_EXT:
                continue
            lang = Language.from_ext(ext)
            if lang is None or lang in excluded or lang in languages:
                continue
            languages.append(lang)

        logger.debug(
            "Discovered benchmark",
            extra={
                "benchmark": name,
                "languages": [lang.value for lang in languages],
                "excluded": sorted(lang.value for lang in excluded),
            },
        )

        return cls(
            name=name,
            base_path=base_path,
            languages=tuple(languages),
            config=config,
            paths=paths,
        )

    def source_path(self, lang: Language) -> Path:
        return self.base_path / f"{self.name}.{lang.ext}"

    def bin_root(self, machine: Optional[str] = None) -> Path:
        """Architecture-specific binary root. Not created here; see compile_benchmark."""
        return binary_root(self.paths.binary_root, machine)

    def artifact_path(self, lang: Language, machine: Optional[str] = None) -> Path:
        """
        Where the compiled artifact for `lang` lives.

        Normally `<bin_root>/<name>_<suffix>`. The suffix-less language drops
        the `_<suffix>` part, and the nested one adds a `/<name>` level.
        """
        return lang.artifact_path(self.bin_root(machine), self.name)

    def result_path(self) -> Path:
        """`<results_root>/<name>.csv`. The timing driver creates the directory."""
        return self.paths.results_root / f"{self.name}.csv"

    def results_exist(self) -> bool:
        return self.result_path().exists()


def check_language(benchmark: Benchmark, lang: Language, action: str) -> None:
    """Reject operations on a language the benchmark didn't discover."""
    if lang not in benchmark.languages:
        raise UnknownLanguageError(action, benchmark.name, lang.value)
