# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for host detection, toolchain preflight and bootstrap.
"""

import shutil
from pathlib import Path
from typing import Callable, Optional

import pytest

from xlbench.config.schema import HarnessConfig, PathsConfig, TimingConfig
from xlbench.errors import PathAccessError
from xlbench.runtime.bootstrap import bootstrap
from xlbench.runtime.environment import (
    binary_root,
    check_minimum_python,
    get_system_info,
    host_architecture,
)
from xlbench.runtime.preflight import missing_tools, required_tools
from xlbench.suite import Benchmark, load_all


class TestHostArchitecture:
    @pytest.mark.parametrize(
        "machine, expected",
        [
            ("x86_64", "x86_64"),
            ("AMD64", "x86_64"),
            ("aarch64", "aarch64"),
            ("arm64", "aarch64"),
        ],
    )
    def test_aliases(self, machine: str, expected: str) -> None:
        assert host_architecture(machine) == expected

    def test_defaults_to_this_host(self) -> None:
        # conftest pins platform.machine() to x86_64
        assert host_architecture() == "x86_64"

    def test_unsupported(self) -> None:
        with pytest.raises(PathAccessError):
            host_architecture("sparc64")

    def test_binary_root(self) -> None:
        assert binary_root(Path("bins"), "arm64") == Path("bins/aarch64")


class TestSystemChecks:
    def test_current_python_is_supported(self) -> None:
        check_minimum_python()

    def test_system_info(self) -> None:
        info = get_system_info()
        assert info.architecture == "x86_64"
        assert info.python_version


class TestPreflight:
    @pytest.fixture()
    def suite(
        self, paths: PathsConfig, make_benchmark_dir: Callable[..., Path]
    ) -> list[Benchmark]:
        make_benchmark_dir("fib", ["rs", "sml"])
        make_benchmark_dir("nbody", ["rs", "mbt"])
        return load_all(paths=paths)

    def test_required_tools_are_deduplicated(self, suite: list[Benchmark]) -> None:
        tools = required_tools(suite)

        assert sorted(tools) == ["ml-build", "moon", "rustc", "sml"]
        assert len(tools) == len(set(tools))

    def test_timing_adds_hyperfine(self, suite: list[Benchmark]) -> None:
        tools = required_tools(suite, TimingConfig())
        assert tools[-1] == "hyperfine"

    def test_missing_tools(
        self, suite: list[Benchmark], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        installed = {"rustc", "sml", "hyperfine"}

        def _which(cmd: str) -> Optional[str]:
            return f"/usr/bin/{cmd}" if cmd in installed else None

        monkeypatch.setattr(shutil, "which", _which)

        assert sorted(missing_tools(suite, TimingConfig())) == ["ml-build", "moon"]

    def test_nothing_missing(
        self, suite: list[Benchmark], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(shutil, "which", lambda cmd: f"/usr/bin/{cmd}")
        assert missing_tools(suite) == []


class TestBootstrap:
    def test_creates_output_roots(self, paths: PathsConfig) -> None:
        config = HarnessConfig(paths=paths, log_level="WARNING")

        logger = bootstrap(config)

        assert paths.binary_root.is_dir()
        assert paths.results_root.is_dir()
        assert logger.name == "xlbench.runtime"

    def test_dry_run_creates_no_output_roots(self, paths: PathsConfig) -> None:
        config = HarnessConfig(paths=paths, log_level="WARNING")

        bootstrap(config, prepare_outputs=False)

        assert not paths.binary_root.exists()
        assert not paths.results_root.exists()
