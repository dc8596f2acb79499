# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subprocess seam for every external program the harness starts.

Compilers, benchmark binaries and hyperfine all go through `run_captured` or
`run_attached`. These are plain blocking subprocess.run calls: no shell, no
timeout, and exit status as the only success signal. Spawn failures surface
as the OSError subprocess raised. The callers turn that into the right
harness error for their stage.
"""

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from xlbench.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Exit status and raw output of a finished process."""

    argv: tuple[str, ...]
    exit_code: int
    stdout: bytes
    stderr: bytes
    elapsed_seconds: float

    @property
    def success(self) -> bool:
        return self.exit_code == 0


def run_captured(argv: Sequence[str], cwd: Optional[Path] = None) -> ProcessResult:
    """
    Run a command to completion with stdout and stderr captured as bytes.

    Output stays as bytes: toolchains don't promise UTF-8, and diagnostics
    must survive intact even when they can't be decoded.

    Raises:
        OSError: The program couldn't be started (not found, not executable).
    """
    start = time.monotonic()
    completed = subprocess.run(
        list(argv),
        capture_output=True,
        cwd=str(cwd) if cwd is not None else None,
        check=False,
    )
    elapsed = time.monotonic() - start

    logger.debug(
        "Process finished",
        extra={
            "argv": list(argv),
            "exit_code": completed.returncode,
            "elapsed_seconds": round(elapsed, 3),
        },
    )

    return ProcessResult(
        argv=tuple(argv),
        exit_code=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
        elapsed_seconds=elapsed,
    )


def run_attached(argv: Sequence[str]) -> int:
    """
    Run a command with the harness's own stdout/stderr and return its exit code.

    Raises:
        OSError: The program couldn't be started.
    """
    completed = subprocess.run(list(argv), check=False)
    return completed.returncode
