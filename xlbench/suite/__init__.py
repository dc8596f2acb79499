# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Benchmark discovery: one Benchmark per directory under the suite root.
"""

from xlbench.suite.benchmark import Benchmark
from xlbench.suite.loader import load_all, load_selected

__all__ = ["Benchmark", "load_all", "load_selected"]
