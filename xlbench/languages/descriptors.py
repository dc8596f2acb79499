# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Per-language toolchain descriptors.

A descriptor knows everything language-specific about one variant: which file
extension its sources use, how its binaries are named, how to compile a
source, and how to run the result. The rest of the harness only ever talks to
this interface:

    compile_command(source, artifact, heap_size) -> argv
    build_steps(source, artifact, heap_size, workspace) -> [BuildStep, ...]
    run_command(artifact) -> argv
    artifact_path(bin_root, name) -> Path
    shell_command(artifact, args) -> str

The plain descriptor covers every toolchain that is "one compiler call, run
the binary directly". The subclasses each change exactly one of those shapes:

  NestedArtifactDescriptor   the compiler writes <out dir>/<name>, so the
                             artifact lives one directory deeper
  ExecutableFixupDescriptor  the compiler output needs chmod +x afterwards
  StagedWorkspaceDescriptor  sources are built inside a fixed project
                             workspace and the result is moved out
  LoaderDescriptor           the artifact is a heap image started through a
                             loader program instead of executed directly

Command templates use `{source}`, `{artifact}`, `{artifact_dir}` and
`{heap_size}` placeholders, filled per call.
"""

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from xlbench.languages.steps import (
    BuildStep,
    CommandStep,
    CopyStep,
    MakeExecutableStep,
    MoveStep,
)


@dataclass(frozen=True)
class LanguageDescriptor:
    """Toolchain description for an ordinary compile-then-execute language."""

    ext: str
    suffix: str
    compile_template: tuple[str, ...]
    heap_template: tuple[str, ...] = ()

    def compile_command(
        self,
        source: Path,
        artifact: Path,
        heap_size: Optional[int] = None,
    ) -> list[str]:
        """
        Build the compiler argv for one source file.

        The heap hint is accepted by every descriptor. Only toolchains that
        declare a heap_template turn it into flags; the rest ignore it.
        """
        values = {
            "source": str(source),
            "artifact": str(artifact),
            "artifact_dir": str(artifact.parent),
            "heap_size": "" if heap_size is None else str(heap_size),
        }
        argv = [part.format(**values) for part in self.compile_template]
        if heap_size is not None and self.heap_template:
            argv.extend(part.format(**values) for part in self.heap_template)
        return argv

    def build_steps(
        self,
        source: Path,
        artifact: Path,
        heap_size: Optional[int],
        workspace: Path,
    ) -> list[BuildStep]:
        return [CommandStep(tuple(self.compile_command(source, artifact, heap_size)))]

    def run_command(self, artifact: Path) -> list[str]:
        return [str(artifact)]

    def artifact_path(self, bin_root: Path, name: str) -> Path:
        if not self.suffix:
            return bin_root / name
        return bin_root / f"{name}_{self.suffix}"

    def shell_command(self, artifact: Path, args: Sequence[str] = ()) -> str:
        """Render run command plus arguments as one shell-safe string."""
        return shlex.join([*self.run_command(artifact), *args])

    def toolchain(self) -> tuple[str, ...]:
        """Executables that must be on PATH to build and run this language."""
        return (self.compile_template[0],)


@dataclass(frozen=True)
class NestedArtifactDescriptor(LanguageDescriptor):
    def artifact_path(self, bin_root: Path, name: str) -> Path:
        return super().artifact_path(bin_root, name) / name


@dataclass(frozen=True)
class ExecutableFixupDescriptor(LanguageDescriptor):
    def build_steps(
        self,
        source: Path,
        artifact: Path,
        heap_size: Optional[int],
        workspace: Path,
    ) -> list[BuildStep]:
        steps = super().build_steps(source, artifact, heap_size, workspace)
        steps.append(MakeExecutableStep(artifact))
        return steps


@dataclass(frozen=True)
class StagedWorkspaceDescriptor(LanguageDescriptor):
    """
    Build inside a prepared project workspace.

    The source is copied to `workspace/<working_file>`, the build command runs
    with the workspace as its working directory, and the file the toolchain
    writes at `workspace/<output_path>` is moved to the artifact path.
    """

    working_file: str = ""
    output_path: tuple[str, ...] = ()

    def build_steps(
        self,
        source: Path,
        artifact: Path,
        heap_size: Optional[int],
        workspace: Path,
    ) -> list[BuildStep]:
        return [
            CopyStep(source, workspace / self.working_file),
            CommandStep(tuple(self.compile_template), cwd=workspace),
            MoveStep(workspace.joinpath(*self.output_path), artifact),
        ]


@dataclass(frozen=True)
class LoaderDescriptor(LanguageDescriptor):
    loader: tuple[str, ...] = field(default=())

    def run_command(self, artifact: Path) -> list[str]:
        return [*self.loader, str(artifact)]

    def toolchain(self) -> tuple[str, ...]:
        return (self.compile_template[0], self.loader[0])
