# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for the config loader.

The harness config must exist when named; a benchmark's `.args` sidecar may
be absent (defaults) but must be valid when present.
"""

import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from xlbench.config.exceptions import ConfigLoadError, ConfigValidationError
from xlbench.config.loader import load_benchmark_config, load_harness_config
from xlbench.config.schema import DEFAULT_RUNS, DEFAULT_WARMUP, BenchmarkConfig


class TestHarnessConfig:
    def test_loads_paths_and_timing(self, harness_config_file: Path, tmp_path: Path) -> None:
        config = load_harness_config(harness_config_file)
        assert config.paths.suite_root == tmp_path / "suite"
        assert config.paths.results_root == tmp_path / "results"
        assert config.timing.warmup == 1
        assert config.timing.executable == "hyperfine"
        assert config.log_level == "DEBUG"

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("", encoding="utf-8")

        config = load_harness_config(config_file)
        assert config.timing.warmup == DEFAULT_WARMUP
        assert config.paths.suite_root == Path("benchmarks/suite")

    def test_missing_file_is_an_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="not found"):
            load_harness_config(tmp_path / "nope.yaml")

    def test_broken_yaml_is_an_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="Invalid YAML"):
            load_harness_config(config_file)

    def test_non_mapping_is_an_error(self, tmp_path: Path) -> None:
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="mapping"):
            load_harness_config(config_file)

    def test_unknown_key_is_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "typo.yaml"
        config_file.write_text("timing:\n  warmpu: 2\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_harness_config(config_file)

    def test_negative_warmup_is_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "warmup.yaml"
        config_file.write_text("timing:\n  warmup: -1\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_harness_config(config_file)

    def test_log_level_is_normalised(self, tmp_path: Path) -> None:
        config_file = tmp_path / "level.yaml"
        config_file.write_text("log_level: debug\n", encoding="utf-8")
        assert load_harness_config(config_file).log_level == "DEBUG"

    def test_unknown_log_level_is_rejected(self, tmp_path: Path) -> None:
        config_file = tmp_path / "level.yaml"
        config_file.write_text("log_level: LOUD\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_harness_config(config_file)

    def test_plots_root_is_not_a_setting(self, tmp_path: Path) -> None:
        config_file = tmp_path / "plots.yaml"
        config_file.write_text("paths:\n  plots_root: out/plots\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_harness_config(config_file)


class TestBenchmarkConfig:
    def test_absent_sidecar_gives_defaults(self, tmp_path: Path) -> None:
        config = load_benchmark_config(tmp_path / "fib.args")
        assert config == BenchmarkConfig()
        assert config.args == []
        assert config.test_args == []
        assert config.runs == DEFAULT_RUNS
        assert config.heap_size is None

    def test_loads_all_fields(self, tmp_path: Path) -> None:
        sidecar = tmp_path / "fib.args"
        sidecar.write_text(
            textwrap.dedent("""\
                test_args: ["5"]
                args: ["35", "--quiet"]
                runs: 3
                heap_size: 2048
            """),
            encoding="utf-8",
        )

        config = load_benchmark_config(sidecar)
        assert config.test_args == ["5"]
        assert config.args == ["35", "--quiet"]
        assert config.runs == 3
        assert config.heap_size == 2048

    def test_numeric_args_become_strings(self, tmp_path: Path) -> None:
        sidecar = tmp_path / "fib.args"
        sidecar.write_text("args: [35, 2.5]\ntest_args: [1]\n", encoding="utf-8")

        config = load_benchmark_config(sidecar)
        assert config.args == ["35", "2.5"]
        assert config.test_args == ["1"]

    def test_empty_sidecar_gives_defaults(self, tmp_path: Path) -> None:
        sidecar = tmp_path / "fib.args"
        sidecar.write_text("", encoding="utf-8")
        assert load_benchmark_config(sidecar) == BenchmarkConfig()

    def test_zero_runs_is_rejected(self, tmp_path: Path) -> None:
        sidecar = tmp_path / "fib.args"
        sidecar.write_text("runs: 0\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            load_benchmark_config(sidecar)

    def test_broken_sidecar_is_not_treated_as_absent(self, tmp_path: Path) -> None:
        sidecar = tmp_path / "fib.args"
        sidecar.write_text("args: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            load_benchmark_config(sidecar)

    def test_config_is_frozen(self) -> None:
        config = BenchmarkConfig(args=["1"])
        with pytest.raises(ValidationError):
            config.runs = 5  # type: ignore[misc]
