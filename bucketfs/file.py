"""
Content-less open-file descriptor for BucketFS.

``BucketFile`` tracks a synthetic size and cursor. Writes only grow the
size; reads hand back zero bytes. Nothing is ever stored, so ``sync()``
always reports the injected error of a hybrid filesystem, and ``close()``
merely rewinds the cursor: the handle stays usable afterwards.

Ownership: ``open``/``open_file`` return the descriptor by reference and
every call mutates that single object under its own lock. Code holding
the same reference always observes the same cursor and size.

Example:
    >>> f = BucketFile("/tmp/report.txt")
    >>> f.write(b"hello world")
    11
    >>> f.seek(6)
    6
    >>> f.read(3)
    b'\\x00\\x00\\x00'
"""
import os
import stat
import threading
from typing import Optional

from bucketfs.core.constants import FileMode, OpenFlags
from bucketfs.core.errors import EndOfDataError, SeekError, SyncError
from bucketfs.core.permission import Permission


class BucketFile:
    """Fake file descriptor over a synthetic, content-less byte range."""

    def __init__(
        self,
        name: str,
        flags: OpenFlags = os.O_RDONLY,
        perm: FileMode = 0,
        injected: Optional[BaseException] = None,
    ):
        """Initialize descriptor.

        Args:
            name: Fully-qualified (cleaned) file name
            flags: Open flags (O_RDONLY, O_WRONLY, O_RDWR, O_CREAT, ...)
            perm: Permission bits given at open time
            injected: Error injected into the owning filesystem, None in silent mode
        """
        self._name = name
        self._size = 0
        self._cursor = 0
        self._eof = False
        self._flags = flags
        self._perm = stat.S_IMODE(perm)
        self._injected = injected
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        """Fully-qualified file name."""
        return self._name

    @property
    def size(self) -> int:
        with self._lock:
            return self._size

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    @property
    def eof(self) -> bool:
        """True after a read reached the end of the synthetic data."""
        with self._lock:
            return self._eof

    @property
    def flags(self) -> Permission:
        return Permission(self._flags)

    @property
    def perm(self) -> FileMode:
        return self._perm

    @property
    def injected(self) -> Optional[BaseException]:
        return self._injected

    def __str__(self) -> str:
        return f"::{self._name} {self._size}@{self._cursor}"

    def __repr__(self) -> str:
        return f"BucketFile({self._name!r}, size={self._size}, cursor={self._cursor})"

    def __enter__(self) -> "BucketFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # Writing
    # =========================================================================

    def write(self, data: Optional[bytes]) -> int:
        """Grow the file by ``len(data)`` bytes without storing them.

        Returns:
            Number of bytes "written"
        """
        if data is None:
            return 0
        count = len(data)
        with self._lock:
            self._size += count
            self._eof = False
        return count

    def truncate(self, size: int) -> None:
        """Shrink the file to ``size`` bytes. Never grows it.

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"negative size value {size}")
        with self._lock:
            if size < self._size:
                self._size = size
                if self._cursor >= size:
                    self._cursor = max(size - 1, 0)
                self._eof = False

    # =========================================================================
    # Reading
    # =========================================================================

    def _advance(self, count: int) -> int:
        """Consume up to ``count`` bytes. Caller holds the lock.

        A request smaller than what remains advances the cursor by the full
        request. Otherwise the rest is handed back, the cursor parks on the
        last byte and end-of-data is flagged; the next read returns nothing
        until the cursor is moved.
        """
        if self._eof:
            return 0
        remaining = self._size - self._cursor
        if count < remaining:
            self._cursor += count
            return count
        self._cursor = max(self._size - 1, 0)
        self._eof = True
        return max(remaining, 0)

    def read(self, size: int = -1) -> bytes:
        """Pretend to read ``size`` bytes (everything left if negative).

        Returns:
            Zero-filled bytes; shorter than requested at end of data, empty
            once the data is exhausted
        """
        with self._lock:
            if size < 0:
                size = max(self._size - self._cursor, 0)
                if size == 0:
                    self._eof = True
                    return b""
            return bytes(self._advance(size))

    def readinto(self, buffer: bytearray) -> int:
        """Zero-fill ``buffer`` as far as the synthetic data reaches.

        Returns:
            Number of bytes filled
        """
        with self._lock:
            count = self._advance(len(buffer))
        buffer[:count] = bytes(count)
        return count

    def read_at(self, size: int, offset: int) -> bytes:
        """Pretend to read ``size`` bytes starting at ``offset``.

        Raises:
            EndOfDataError: If offset is at or beyond the end of the data
        """
        with self._lock:
            if offset < 0 or offset >= self._size:
                raise EndOfDataError("ReadAt", self._name, self._injected)
            self._cursor = offset
            self._eof = False
            return bytes(self._advance(size))

    # =========================================================================
    # Positioning
    # =========================================================================

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        """Move the cursor.

        ``SEEK_SET`` is absolute, ``SEEK_CUR`` relative to the cursor and
        ``SEEK_END`` counts ``offset`` bytes back from the end.

        Returns:
            New cursor position

        Raises:
            SeekError: If whence is unknown or the result is outside [0, size)
        """
        with self._lock:
            if whence == os.SEEK_SET:
                new_offset = offset
            elif whence == os.SEEK_CUR:
                new_offset = self._cursor + offset
            elif whence == os.SEEK_END:
                new_offset = self._size - offset
            else:
                raise SeekError("Seek", self._name, self._injected, reason=f"invalid whence {whence}")

            if new_offset < 0 or new_offset >= self._size:
                raise SeekError("Seek", self._name, self._injected)

            self._cursor = new_offset
            self._eof = False
            return self._cursor

    def tell(self) -> int:
        return self.cursor

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def sync(self) -> None:
        """Nothing is ever persisted.

        Raises:
            SyncError: Always, when the owning filesystem is in hybrid mode
        """
        if self._injected is not None:
            raise SyncError("Sync", self._name, self._injected)

    def close(self) -> None:
        """Rewind the cursor. The descriptor remains usable."""
        with self._lock:
            self._cursor = 0
            self._eof = False
