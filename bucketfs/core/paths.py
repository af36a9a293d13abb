"""
BucketFS Core: Path and mode-flag helpers.

Every path that enters the namespace goes through ``clean_path`` so that
the store is keyed by a single canonical spelling of each path.
"""
import os
import posixpath

from bucketfs.core.constants import CleanPath, FileMode, OpenFlags


def clean_path(path: str) -> CleanPath:
    """Normalize a path for namespace lookups.

    Trims surrounding spaces and tabs, lexically cleans the path and expands
    a leading ``~/`` to the home directory of the current user.

    Args:
        path: Path as given by the caller

    Returns:
        Canonical path
    """
    path = posixpath.normpath(path.strip(" \t"))
    # normpath keeps exactly two leading slashes
    if path.startswith("//"):
        path = "/" + path.lstrip("/")
    if path.startswith("~/"):
        home = os.path.expanduser("~")
        path = posixpath.join(home, path[2:])
    return path


def has_mode_flag(flag: OpenFlags, flags: OpenFlags) -> bool:
    """Check if every bit of ``flag`` is set in the open flags ``flags``."""
    return flags & flag == flag


def has_file_mode_flag(flag: FileMode, mode: FileMode) -> bool:
    """Check if every bit of ``flag`` is set in the file mode ``mode``.

    Example:
        >>> has_file_mode_flag(stat.S_IFLNK, stat.S_IFLNK | 0o666)
        True
    """
    return mode & flag == flag
