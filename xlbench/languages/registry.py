# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
The fixed set of languages the harness knows how to build.

`Language` is the identity used everywhere (exclusion lists, benchmark
language sets, log fields). Each member is bound to one descriptor in
`DESCRIPTORS`, and the member's properties and methods delegate to it. Adding
a toolchain means adding a member and a descriptor here and nothing else.
"""

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from xlbench.languages.descriptors import (
    ExecutableFixupDescriptor,
    LanguageDescriptor,
    LoaderDescriptor,
    NestedArtifactDescriptor,
    StagedWorkspaceDescriptor,
)
from xlbench.languages.steps import BuildStep

# Sidecar config extension. Never a language, even if someone registers one.
CONFIG_EXT = "args"


class Language(str, Enum):
    SCC = "scc"
    EFFEKT = "effekt"
    KOKA = "koka"
    MOONBIT = "moonbit"
    SMLNJ = "smlnj"
    RUST = "rust"
    GO = "go"
    OCAML = "ocaml"
    HASKELL = "haskell"

    def __str__(self) -> str:
        return self.value

    @property
    def descriptor(self) -> LanguageDescriptor:
        return DESCRIPTORS[self]

    @property
    def ext(self) -> str:
        return self.descriptor.ext

    @property
    def suffix(self) -> str:
        return self.descriptor.suffix

    def compile_command(
        self, source: Path, artifact: Path, heap_size: Optional[int] = None
    ) -> list[str]:
        return self.descriptor.compile_command(source, artifact, heap_size)

    def build_steps(
        self, source: Path, artifact: Path, heap_size: Optional[int], workspace: Path
    ) -> list[BuildStep]:
        return self.descriptor.build_steps(source, artifact, heap_size, workspace)

    def run_command(self, artifact: Path) -> list[str]:
        return self.descriptor.run_command(artifact)

    def artifact_path(self, bin_root: Path, name: str) -> Path:
        return self.descriptor.artifact_path(bin_root, name)

    def shell_command(self, artifact: Path, args: Sequence[str] = ()) -> str:
        return self.descriptor.shell_command(artifact, args)

    def toolchain(self) -> tuple[str, ...]:
        return self.descriptor.toolchain()

    @classmethod
    def from_ext(cls, ext: str) -> Optional["Language"]:
        """Language for a file extension (with or without the dot), or None."""
        ext = ext[1:] if ext.startswith(".") else ext
        if ext == CONFIG_EXT:
            return None
        return _BY_EXT.get(ext)

    @classmethod
    def parse(cls, text: str) -> "Language":
        """
        Parse a language given by name or by extension, case-insensitively.

        Raises:
            ValueError: Nothing matches.
        """
        key = text.strip().lower()
        for lang in cls:
            if key == lang.value:
                return lang
        lang = cls.from_ext(key)
        if lang is None:
            known = ", ".join(lang.value for lang in cls)
            raise ValueError(f"Unknown language '{text}'. Known languages: {known}")
        return lang


DESCRIPTORS: Mapping[Language, LanguageDescriptor] = MappingProxyType({
    Language.SCC: LanguageDescriptor(
        ext="sc",
        suffix="",
        compile_template=("scc", "{source}", "-o", "{artifact}"),
        heap_template=("--heap-size", "{heap_size}"),
    ),
    Language.EFFEKT: NestedArtifactDescriptor(
        ext="effekt",
        suffix="effekt",
        compile_template=(
            "effekt", "--backend", "llvm", "--build", "--out", "{artifact_dir}", "{source}",
        ),
    ),
    Language.KOKA: ExecutableFixupDescriptor(
        ext="kk",
        suffix="koka",
        compile_template=("koka", "-O2", "-o", "{artifact}", "{source}"),
    ),
    Language.MOONBIT: StagedWorkspaceDescriptor(
        ext="mbt",
        suffix="moonbit",
        compile_template=("moon", "build", "--target", "native", "--release"),
        working_file="working.mbt",
        output_path=("target", "native", "release", "build", "benchmoon.exe"),
    ),
    Language.SMLNJ: LoaderDescriptor(
        ext="sml",
        suffix="smlnj",
        compile_template=("ml-build", "{source}", "Main.main", "{artifact}"),
        loader=("sml", "@SMLload"),
    ),
    Language.RUST: LanguageDescriptor(
        ext="rs",
        suffix="rust",
        compile_template=("rustc", "-C", "opt-level=3", "-o", "{artifact}", "{source}"),
    ),
    Language.GO: LanguageDescriptor(
        ext="go",
        suffix="go",
        compile_template=("go", "build", "-o", "{artifact}", "{source}"),
    ),
    Language.OCAML: LanguageDescriptor(
        ext="ml",
        suffix="ocaml",
        compile_template=("ocamlfind", "ocamlopt", "-O3", "-o", "{artifact}", "{source}"),
    ),
    Language.HASKELL: LanguageDescriptor(
        ext="hs",
        suffix="haskell",
        compile_template=("ghc", "-O2", "-o", "{artifact}", "{source}"),
    ),
})

_BY_EXT: Mapping[str, Language] = MappingProxyType(
    {descriptor.ext: lang for lang, descriptor in DESCRIPTORS.items()}
)
