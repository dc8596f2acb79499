# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Toolchain preflight.

Before a long compile-and-time session, check that every executable the
selected languages need is actually on PATH. Finding out that `ghc` is
missing after twenty minutes of other builds is the failure mode this avoids.
"""

import shutil
from typing import Iterable, Optional

from xlbench.config.schema import TimingConfig
from xlbench.logging.logger import get_logger
from xlbench.suite.benchmark import Benchmark

logger = get_logger(__name__)


def required_tools(
    benchmarks: Iterable[Benchmark],
    timing: Optional[TimingConfig] = None,
) -> list[str]:
    """Executables needed by the benchmarks' languages (plus hyperfine when timing)."""
    tools: list[str] = []
    for benchmark in benchmarks:
        for lang in benchmark.languages:
            for tool in lang.toolchain():
                if tool not in tools:
                    tools.append(tool)
    if timing is not None and timing.executable not in tools:
        tools.append(timing.executable)
    return tools


def missing_tools(
    benchmarks: Iterable[Benchmark],
    timing: Optional[TimingConfig] = None,
) -> list[str]:
    """The subset of required_tools that shutil.which can't find."""
    missing = [tool for tool in required_tools(benchmarks, timing) if shutil.which(tool) is None]
    if missing:
        logger.warning("Missing toolchain executables", extra={"missing": missing})
    return missing
