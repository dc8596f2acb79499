# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Path helpers shared by discovery, compilation and timing.

Output directories (binary roots, result roots, the build workspace) are
created on demand right before anything is written into them. Creation is
idempotent, so calling these on every compile is fine.
"""

from pathlib import Path

from xlbench.errors import FileAccessError, PathAccessError


def ensure_directory(path: Path) -> Path:
    """
    Create a directory (and parents) if it doesn't exist. Returns the path for chaining.

    Raises:
        FileAccessError: The directory can't be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise FileAccessError(path, "Create directory", err) from err
    return path


def file_extension(path: Path) -> str | None:
    """
    Extension of a file name without the dot, or None if it has none.

    Raises:
        PathAccessError: The name isn't valid text (undecodable bytes that
            Python smuggled in as surrogates).
    """
    suffix = path.suffix
    if not suffix:
        return None
    try:
        suffix.encode("utf-8")
    except UnicodeEncodeError as err:
        raise PathAccessError(path, "Get file extension as text") from err
    return suffix[1:]


def path_text(path: Path) -> str:
    """
    Path as a str that can be embedded in a command line.

    Raises:
        PathAccessError: The path isn't valid text.
    """
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as err:
        raise PathAccessError(path, "Path as text") from err
    return text
