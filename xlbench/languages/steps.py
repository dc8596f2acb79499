# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Build pipeline steps.

A language descriptor describes its build as an ordered list of these steps,
and the compiler in xlbench.build executes them. Most languages need a single
CommandStep. The odd toolchains add copy/move/chmod steps around it instead
of getting special cases in the compiler.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union


@dataclass(frozen=True)
class CommandStep:
    """Run a toolchain command. Non-zero exit is a compile failure."""

    argv: tuple[str, ...]
    cwd: Optional[Path] = None


@dataclass(frozen=True)
class CopyStep:
    """Copy a file into place, e.g. a source into a build workspace."""

    source: Path
    destination: Path


@dataclass(frozen=True)
class MoveStep:
    """Move a toolchain's output to the canonical artifact path."""

    source: Path
    destination: Path


@dataclass(frozen=True)
class MakeExecutableStep:
    """Add the execute bits to an artifact the toolchain left non-executable."""

    path: Path


BuildStep = Union[CommandStep, CopyStep, MoveStep, MakeExecutableStep]
