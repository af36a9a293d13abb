"""
Capability contracts shared by BucketFS and any interchangeable filesystem.

An OS-backed adapter, a content-storing in-memory filesystem or a mount
aggregator can satisfy these protocols and be swapped in for ``BucketFS``
by code written against them (``bucketfs.fsutil`` for instance).
"""
from typing import List, Optional, Protocol, runtime_checkable

from bucketfs.core.constants import FileMode, OpenFlags
from bucketfs.fileinfo import BucketFileInfo


@runtime_checkable
class File(Protocol):
    """Open-file descriptor contract."""

    @property
    def name(self) -> str: ...

    def write(self, data: Optional[bytes]) -> int: ...

    def read(self, size: int = -1) -> bytes: ...

    def read_at(self, size: int, offset: int) -> bytes: ...

    def seek(self, offset: int, whence: int = 0) -> int: ...

    def truncate(self, size: int) -> None: ...

    def sync(self) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class Filesystem(Protocol):
    """Filesystem contract. Failures are raised as ``OSError`` subclasses."""

    def path_separator(self) -> str: ...

    def open(self, name: str) -> File: ...

    def open_file(self, name: str, flags: OpenFlags, perm: FileMode) -> File: ...

    def remove(self, name: str) -> None: ...

    def rename(self, old_path: str, new_path: str) -> None: ...

    def symlink(self, old_name: str, new_name: str) -> None: ...

    def mkdir(self, name: str, perm: FileMode) -> None: ...

    def stat(self, name: str) -> BucketFileInfo: ...

    def lstat(self, name: str) -> BucketFileInfo: ...

    def read_dir(self, path: str) -> List[BucketFileInfo]: ...
