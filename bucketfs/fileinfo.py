"""
Stat results for BucketFS.

``BucketFileInfo`` is a read-only snapshot built fresh by every
``stat``/``lstat``/``read_dir`` call. It exposes both descriptive names
(``name``, ``size``, ``mode``, ``is_dir``) and the ``st_*`` names of
``os.stat_result`` so it can stand in where code expects the latter.
"""
import stat
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from bucketfs.core.constants import ALL_PERMS, DEF_GROUP, DEF_USER, MODE_DIR, MODE_FILE, FileMode


@dataclass(frozen=True)
class BucketFileInfo:
    """File information snapshot. The modification time is the time of
    construction and is never persisted."""

    name: str
    size: int
    mode: FileMode
    mod_time: datetime = field(default_factory=datetime.now)
    is_dir: bool = False
    sys: Any = None

    @property
    def is_file(self) -> bool:
        """Check if this is a regular file."""
        return stat.S_ISREG(self.mode)

    @property
    def is_symlink(self) -> bool:
        """Check if this is a symbolic link."""
        return stat.S_ISLNK(self.mode)

    @property
    def perms(self) -> FileMode:
        """Permission bits only."""
        return stat.S_IMODE(self.mode)

    @property
    def st_mode(self) -> FileMode:
        return self.mode

    @property
    def st_size(self) -> int:
        return self.size

    @property
    def st_mtime(self) -> float:
        return self.mod_time.timestamp()

    def __str__(self) -> str:
        """Render very much like a line of ``ls -l``."""
        return "%s %7s %7s %8d %s %s" % (
            stat.filemode(self.mode),
            DEF_USER,
            DEF_GROUP,
            self.size,
            self.mod_time.strftime("%d %b %Y %H:%M"),
            self.name,
        )


def new_file_info(name: str, size: int, mode: FileMode) -> BucketFileInfo:
    """File information for a non-directory object.

    A directory type in ``mode`` is replaced by the regular-file type;
    link and other type bits are kept.
    """
    if stat.S_ISDIR(mode):
        mode = MODE_FILE | stat.S_IMODE(mode)
    elif not stat.S_IFMT(mode):
        mode = MODE_FILE | mode
    return BucketFileInfo(name, size, mode, datetime.now(), False, None)


def new_dir_info(name: str, size: int, mode: FileMode) -> BucketFileInfo:
    """File information for a directory."""
    return BucketFileInfo(name, size, MODE_DIR | stat.S_IMODE(mode), datetime.now(), True, None)


def default_file_info(name: str = "") -> BucketFileInfo:
    """Projection returned in silent mode when no entry exists."""
    return BucketFileInfo(name, 0, MODE_FILE | ALL_PERMS, datetime.now(), False, None)


def default_dir_info(name: str = "") -> BucketFileInfo:
    """Directory-shaped variant of ``default_file_info``."""
    return new_dir_info(name, 0, ALL_PERMS)
