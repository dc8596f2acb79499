# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for xlbench tests.

Every test gets its own suite, binary, results and workspace roots under
tmp_path, and the host architecture is pinned to x86_64 so artifact paths
are the same on every machine running the tests.
"""

import platform
import stat
import textwrap
from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

from xlbench.config.schema import PathsConfig


@pytest.fixture(autouse=True)
def _pin_host_architecture(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(platform, "machine", lambda: "x86_64")


@pytest.fixture()
def paths(tmp_path: Path) -> PathsConfig:
    """A PathsConfig with every root inside tmp_path."""
    suite_root = tmp_path / "suite"
    suite_root.mkdir()
    return PathsConfig(
        suite_root=suite_root,
        binary_root=tmp_path / "bin",
        results_root=tmp_path / "results",
        workspace_root=tmp_path / "workspace",
    )


@pytest.fixture()
def make_benchmark_dir(paths: PathsConfig) -> Callable[..., Path]:
    """
    Factory that lays out `<suite_root>/<name>/` with one source per extension
    and, optionally, a `.args` sidecar with the given YAML text.
    """

    def _make(name: str, exts: Iterable[str], args_yaml: Optional[str] = None) -> Path:
        bench_dir = paths.suite_root / name
        bench_dir.mkdir(parents=True, exist_ok=True)
        for ext in exts:
            (bench_dir / f"{name}.{ext}").write_text("// source\n", encoding="utf-8")
        if args_yaml is not None:
            (bench_dir / f"{name}.args").write_text(textwrap.dedent(args_yaml), encoding="utf-8")
        return bench_dir

    return _make


def write_script(path: Path, body: str) -> Path:
    """Write an executable /bin/sh script, standing in for a compiled artifact."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n" + textwrap.dedent(body), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture()
def script_writer() -> Callable[[Path, str], Path]:
    return write_script


@pytest.fixture()
def harness_config_file(tmp_path: Path, paths: PathsConfig) -> Path:
    """A harness YAML config pointing every root into tmp_path."""
    config_file = tmp_path / "harness.yaml"
    config_file.write_text(
        textwrap.dedent(f"""\
            paths:
              suite_root: "{paths.suite_root}"
              binary_root: "{paths.binary_root}"
              results_root: "{paths.results_root}"
              workspace_root: "{paths.workspace_root}"
            timing:
              warmup: 1
            log_level: "DEBUG"
        """),
        encoding="utf-8",
    )
    return config_file
