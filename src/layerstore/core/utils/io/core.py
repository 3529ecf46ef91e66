"""File primitives shared by the file backend, the CLI and the layers loader.

Writes never leave a half-written config file behind: content goes to a
sibling temp file that is flushed, fsync'd and then moved over the target.
Readers take a shared ``flock`` so they never observe a file while another
layerstore process holds it exclusively.
"""
from __future__ import annotations

import contextlib
import fcntl
import os
import tempfile
from pathlib import Path
from typing import Iterator, TextIO, Union

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    """Create ``path`` (and parents) if needed and return it.

    Raises:
        NotADirectoryError: If ``path`` exists as something else.
    """
    directory = Path(path)
    if directory.exists() and not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")
    directory.mkdir(parents=True, exist_ok=True)
    return directory


@contextlib.contextmanager
def _locked(handle: TextIO, mode: int) -> Iterator[TextIO]:
    fcntl.flock(handle.fileno(), mode)
    try:
        yield handle
    finally:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def atomic_write(path: PathLike, content: str, *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with ``content`` in a single rename."""
    target = Path(path)
    ensure_directory(target.parent)

    fd, tmp_name = tempfile.mkstemp(dir=str(target.parent), prefix=f".{target.name}.")
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle, _locked(handle, fcntl.LOCK_EX):
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_name)
        raise


def read_text(path: PathLike, *, encoding: str = "utf-8") -> str:
    """Read ``path`` under a shared lock.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
    """
    with open(path, "r", encoding=encoding) as handle, _locked(handle, fcntl.LOCK_SH):
        return handle.read()


def write_text(path: PathLike, content: str) -> None:
    atomic_write(path, content)


__all__ = [
    "PathLike",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
]
