# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for discovering a single benchmark and deriving its paths.
"""

import os
import sys
from pathlib import Path
from typing import Callable

import pytest

from xlbench.config.exceptions import ConfigValidationError
from xlbench.config.schema import PathsConfig
from xlbench.errors import PathAccessError, ReadDirError
from xlbench.languages import Language
from xlbench.suite import Benchmark


class TestDiscover:
    def test_finds_every_present_language(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        make_benchmark_dir("fib", ["rs", "go", "sc", "kk", "sml"])

        bench = Benchmark.discover("fib", paths=paths)

        assert set(bench.languages) == {
            Language.RUST, Language.GO, Language.SCC, Language.KOKA, Language.SMLNJ,
        }
        assert bench.name == "fib"
        assert bench.base_path == paths.suite_root / "fib"

    def test_excluded_language_is_dropped(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        make_benchmark_dir("bench", ["rs", "go"], args_yaml="args: []\n")

        bench = Benchmark.discover("bench", [Language.GO], paths)

        assert bench.languages == (Language.RUST,)

    def test_config_and_unknown_files_are_ignored(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        bench_dir = make_benchmark_dir("fib", ["rs"], args_yaml="runs: 2\n")
        (bench_dir / "README.md").write_text("notes", encoding="utf-8")
        (bench_dir / "Makefile").write_text("all:", encoding="utf-8")
        (bench_dir / "build.go").mkdir()

        bench = Benchmark.discover("fib", paths=paths)

        assert bench.languages == (Language.RUST,)

    def test_extension_counts_once(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        bench_dir = make_benchmark_dir("fib", ["rs"])
        (bench_dir / "helper.rs").write_text("", encoding="utf-8")

        bench = Benchmark.discover("fib", paths=paths)

        assert bench.languages == (Language.RUST,)

    def test_loads_sidecar_config(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        make_benchmark_dir(
            "fib", ["rs"],
            args_yaml="""\
                test_args: ["3"]
                args: ["30"]
                runs: 4
            """,
        )

        bench = Benchmark.discover("fib", paths=paths)

        assert bench.config.test_args == ["3"]
        assert bench.config.args == ["30"]
        assert bench.config.runs == 4

    def test_missing_sidecar_means_defaults(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        make_benchmark_dir("fib", ["rs"])
        bench = Benchmark.discover("fib", paths=paths)
        assert bench.config.args == []
        assert bench.config.test_args == []

    def test_invalid_sidecar_propagates(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        make_benchmark_dir("fib", ["rs"], args_yaml="runs: -3\n")
        with pytest.raises(ConfigValidationError):
            Benchmark.discover("fib", paths=paths)

    def test_missing_directory_is_read_dir_error(self, paths: PathsConfig) -> None:
        with pytest.raises(ReadDirError):
            Benchmark.discover("ghost", paths=paths)

    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts non-UTF-8 names")
    def test_undecodable_extension_is_path_access_error(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        bench_dir = make_benchmark_dir("fib", ["rs"])
        raw_name = os.path.join(os.fsencode(bench_dir), b"fib.\xff\xfe")
        with open(raw_name, "wb"):
            pass

        with pytest.raises(PathAccessError):
            Benchmark.discover("fib", paths=paths)

    def test_benchmark_is_immutable(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> None:
        make_benchmark_dir("fib", ["rs"])
        bench = Benchmark.discover("fib", paths=paths)
        with pytest.raises(AttributeError):
            bench.languages = ()  # type: ignore[misc]


class TestDerivedPaths:
    def _bench(self, paths: PathsConfig, *langs: Language) -> Benchmark:
        return Benchmark(
            name="fib",
            base_path=paths.suite_root / "fib",
            languages=langs,
            paths=paths,
        )

    def test_source_path(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.OCAML)
        assert bench.source_path(Language.OCAML) == paths.suite_root / "fib" / "fib.ml"

    def test_artifact_paths_per_shape(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.RUST, Language.SCC, Language.EFFEKT)
        root = paths.binary_root / "x86_64"

        assert bench.artifact_path(Language.RUST) == root / "fib_rust"
        assert bench.artifact_path(Language.SCC) == root / "fib"
        assert bench.artifact_path(Language.EFFEKT) == root / "fib_effekt" / "fib"

    def test_deriving_paths_creates_nothing(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.RUST)

        bench.artifact_path(Language.RUST)
        bench.result_path()

        assert not paths.binary_root.exists()
        assert not paths.results_root.exists()

    def test_artifact_path_depends_on_architecture(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.GO)

        x86 = bench.artifact_path(Language.GO, machine="amd64")
        arm = bench.artifact_path(Language.GO, machine="arm64")

        assert x86 == paths.binary_root / "x86_64" / "fib_go"
        assert arm == paths.binary_root / "aarch64" / "fib_go"

    def test_unsupported_architecture(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.GO)
        with pytest.raises(PathAccessError):
            bench.artifact_path(Language.GO, machine="riscv64")

    def test_result_path(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.GO)
        assert bench.result_path() == paths.results_root / "fib.csv"

    def test_results_exist(self, paths: PathsConfig) -> None:
        bench = self._bench(paths, Language.GO)
        assert bench.results_exist() is False

        paths.results_root.mkdir()
        bench.result_path().write_text("command,mean\n", encoding="utf-8")
        assert bench.results_exist() is True
