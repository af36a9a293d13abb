"""
Helpers written against the ``Filesystem`` protocol.

They work with ``BucketFS`` in either mode and with any interchangeable
filesystem honouring the same contract (failures raised as the builtin
``OSError`` subclasses).

Example:
    >>> fs = BucketFS.create_with_error(RuntimeError("dry")).with_fake_directories(["/srv"])
    >>> mkdir_all(fs, "/srv/app/logs")
    >>> exists(fs, "/srv/app")
    True
"""
import os
import posixpath

from bucketfs.core.constants import ALL_PERMS, ALL_RW_PERMS, FileMode
from bucketfs.interfaces import Filesystem


def exists(fs: Filesystem, path: str) -> bool:
    """True if ``lstat`` finds the path."""
    try:
        fs.lstat(path)
    except FileNotFoundError:
        return False
    return True


def is_dir(fs: Filesystem, path: str) -> bool:
    """True if ``stat`` (links followed) reports a directory."""
    try:
        return fs.stat(path).is_dir
    except FileNotFoundError:
        return False


def mkdir_all(fs: Filesystem, path: str, perm: FileMode = ALL_PERMS) -> None:
    """Create ``path`` and any missing parents.

    Raises:
        NotADirectoryError: A component exists as a file
    """
    sep = fs.path_separator()
    path = posixpath.normpath(path)
    parts = [p for p in path.split(sep) if p]
    current = sep if path.startswith(sep) else ""

    for part in parts:
        current = posixpath.join(current, part) if current else part
        try:
            fs.mkdir(current, perm)
        except FileExistsError:
            if not fs.stat(current).is_dir:
                raise NotADirectoryError(f"{current} exists and is not a directory")


def remove_all(fs: Filesystem, path: str) -> None:
    """Remove ``path`` and everything listed beneath it.

    A missing path is not an error.
    """
    try:
        info = fs.lstat(path)
    except FileNotFoundError:
        return

    if info.is_dir:
        for child in fs.read_dir(path):
            remove_all(fs, posixpath.join(path, posixpath.basename(child.name)))

    try:
        fs.remove(path)
    except FileNotFoundError:
        pass


def write_file(fs: Filesystem, path: str, data: bytes, perm: FileMode = ALL_RW_PERMS) -> int:
    """Create or truncate ``path`` and write ``data`` to it.

    Returns:
        Number of bytes written
    """
    f = fs.open_file(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
    try:
        return f.write(data)
    finally:
        f.close()


def read_file(fs: Filesystem, path: str) -> bytes:
    """Read the whole content of ``path``."""
    f = fs.open(path)
    try:
        return f.read()
    finally:
        f.close()
