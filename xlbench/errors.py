# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Error taxonomy for the harness core.

Every failure in discovery, compilation, execution and timing surfaces as one
of the HarnessError subclasses below. Nothing in the core retries or swallows
these. Aggregate operations (compile_all, run_all, load_all) stop at the first
one and hand it straight back to the caller.

None of the operations have a timeout. A hung compiler, benchmark binary or
hyperfine process blocks the harness indefinitely. There is no liveness
guarantee, and no error kind exists for it.
"""

from pathlib import Path


class HarnessError(Exception):
    """Base for all harness errors."""

    def diagnostic(self) -> str:
        """The text a caller should print when this error ends a command."""
        return str(self)


class ReadDirError(HarnessError):
    """Raised when a directory cannot be listed at all."""

    def __init__(self, path: Path, reason: object) -> None:
        self.path = path
        super().__init__(f"Cannot read directory {path}: {reason}")


class PathAccessError(HarnessError):
    """
    Raised when a path operation fails: extracting an extension, converting
    a path to text, resolving the binary root, or changing permissions.
    """

    def __init__(self, path: Path, action: str) -> None:
        self.path = path
        self.action = action
        super().__init__(f"Path access failed ({action}): {path}")


class UnknownLanguageError(HarnessError):
    """
    Raised when an operation targets a language that was not discovered for
    the benchmark. This is a caller bug, never a transient failure.
    """

    def __init__(self, action: str, benchmark: str, language: str) -> None:
        self.action = action
        self.benchmark = benchmark
        self.language = language
        super().__init__(
            f"{action}: language '{language}' is not part of benchmark '{benchmark}'"
        )


def decode_output(data: bytes | None) -> str:
    """Decode captured process output, falling back to "" if it is not UTF-8."""
    if not data:
        return ""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return ""


class CompileError(HarnessError):
    """
    A compile step exited non-zero or could not be spawned.

    Both streams are kept twice: raw bytes, exactly as the toolchain wrote
    them, and decoded text for printing. Undecodable output shows up as an
    empty string in the text form but is never dropped from the raw form.
    """

    def __init__(
        self,
        benchmark: str,
        language: str,
        stdout: bytes | str = b"",
        stderr: bytes | str = b"",
    ) -> None:
        self.benchmark = benchmark
        self.language = language
        self.raw_stdout = stdout.encode("utf-8") if isinstance(stdout, str) else stdout
        self.raw_stderr = stderr.encode("utf-8") if isinstance(stderr, str) else stderr
        self.stdout = decode_output(self.raw_stdout)
        self.stderr = decode_output(self.raw_stderr)
        super().__init__(f"Compiling {benchmark} ({language}) failed")

    def diagnostic(self) -> str:
        return f"{self}\n--- stdout ---\n{self.stdout}\n--- stderr ---\n{self.stderr}"


class RunError(HarnessError):
    """An artifact exited non-zero or could not be started."""

    def __init__(
        self,
        benchmark: str,
        language: str,
        reason: object,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self.benchmark = benchmark
        self.language = language
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(f"Running {benchmark} ({language}) failed: {reason}")

    def diagnostic(self) -> str:
        if not self.stdout and not self.stderr:
            return str(self)
        return f"{self}\n--- stdout ---\n{self.stdout}\n--- stderr ---\n{self.stderr}"


class FileAccessError(HarnessError):
    """Copying, moving or creating a file or directory failed."""

    def __init__(self, path: Path, action: str, reason: object) -> None:
        self.path = path
        self.action = action
        super().__init__(f"File access failed ({action}) for {path}: {reason}")


class HyperfineError(HarnessError):
    """hyperfine could not be spawned or exited non-zero."""

    def __init__(self, benchmark: str, reason: object) -> None:
        self.benchmark = benchmark
        super().__init__(f"hyperfine failed for {benchmark}: {reason}")
