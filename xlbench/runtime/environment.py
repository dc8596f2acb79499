# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Host environment checks for xlbench.

Artifacts are native binaries, so where they live depends on the CPU they
were built for. Binaries for x86_64 and aarch64 get separate roots under the
binary root, which lets one checkout be shared between machines without one
host's artifacts being mistaken for the other's.
"""

import platform
import sys
from pathlib import Path
from typing import NamedTuple, Optional

from xlbench.errors import PathAccessError

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    platform: str
    architecture: str
    hostname: str


def check_minimum_python() -> None:
    """
    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor = sys.version_info[:2]
    if (major, minor) < (MINIMUM_PYTHON_MAJOR, MINIMUM_PYTHON_MINOR):
        raise RuntimeError(
            f"xlbench requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and diagnostics."""
    return SystemInfo(
        python_version=platform.python_version(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
    )


def host_architecture(machine: Optional[str] = None) -> str:
    """
    Normalise a machine name to one of the supported architectures.

    Raises:
        PathAccessError: The architecture has no binary root.
    """
    raw = platform.machine() if machine is None else machine
    arch = _ARCH_ALIASES.get(raw.lower())
    if arch is None:
        raise PathAccessError(Path(raw), "Resolve binary root for host architecture")
    return arch


def binary_root(base: Path, machine: Optional[str] = None) -> Path:
    """Architecture-specific directory under `base` that holds artifacts."""
    return base / host_architecture(machine)
