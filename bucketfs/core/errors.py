"""
BucketFS Core: Error Taxonomy

Every failure raised in hybrid mode is a ``BucketFSError``, which is an
``OSError`` carrying the failing operation, the path(s) involved, a POSIX
errno and the injected error supplied when the filesystem was switched to
hybrid mode. The injected error is also chained as ``__cause__``.

Callers can match on any of:
- the structural class (``NotFoundError``, ``LinkConflictError``, ...)
- the matching builtin (``FileNotFoundError``, ``IsADirectoryError``, ...)
- the injected error, via ``err.injected`` or ``err.wraps(candidate)``

Example:
    >>> boom = RuntimeError("dry run")
    >>> fs = BucketFS.create_with_error(boom)
    >>> try:
    ...     fs.remove("/etc/passwd")
    ... except FileNotFoundError as e:
    ...     assert e.wraps(boom)
"""
import builtins
import errno
from typing import Optional, Type, Union

from bucketfs.core.constants import ErrorCode


class BucketFSError(OSError):
    """Base exception for namespace and descriptor failures."""

    default_errno: Optional[int] = None
    default_reason = "BucketFS error"
    error_code = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        op: str,
        path: str,
        injected: Optional[BaseException] = None,
        path2: Optional[str] = None,
        reason: Optional[str] = None,
        errno_: Optional[int] = None,
    ):
        """Initialize error.

        Args:
            op: Operation name (e.g. "Mkdir", "Rename")
            path: Path the operation failed on (old path for link errors)
            injected: Error injected into the owning filesystem
            path2: Second path for two-path operations
            reason: Human readable reason, defaults to the class reason
            errno_: POSIX errno, defaults to the class errno
        """
        code = errno_ if errno_ is not None else self.default_errno
        super().__init__(code, reason or self.default_reason, path, None, path2)
        self.op = op
        self.injected = injected
        if injected is not None:
            self.__cause__ = injected

    @property
    def path(self) -> str:
        """Path the operation failed on."""
        return self.filename

    def wraps(self, candidate: Union[BaseException, Type[BaseException]]) -> bool:
        """Check whether this error wraps the given injected error.

        Args:
            candidate: Error instance (matched by identity) or error type

        Returns:
            True if the injected error matches
        """
        if self.injected is None:
            return False
        if isinstance(candidate, type):
            return isinstance(self.injected, candidate)
        return self.injected is candidate

    def __str__(self) -> str:
        target = self.filename if self.filename2 is None else f"{self.filename} {self.filename2}"
        text = f"{self.op} {target}: {self.strerror}"
        if self.injected is not None:
            text = f"{text}: {self.injected}"
        return text

    def __reduce__(self):
        return (
            self.__class__,
            (self.op, self.filename, self.injected, self.filename2, self.strerror, self.errno),
        )


class NotFoundError(BucketFSError, builtins.FileNotFoundError):
    """Path is absent from the namespace."""

    default_errno = errno.ENOENT
    default_reason = "no such file or directory"
    error_code = ErrorCode.NOT_FOUND


class FileExistsError(BucketFSError, builtins.FileExistsError):
    """Mkdir target already exists as a file."""

    default_errno = errno.EEXIST
    default_reason = "file exists"
    error_code = ErrorCode.CONFLICT


class DirectoryExistsError(BucketFSError, builtins.FileExistsError):
    """Mkdir target already exists as a directory."""

    default_errno = errno.EEXIST
    default_reason = "directory exists"
    error_code = ErrorCode.CONFLICT


class IsDirectoryError(BucketFSError, builtins.IsADirectoryError):
    """Operation needs a file but found a directory."""

    default_errno = errno.EISDIR
    default_reason = "is a directory"
    error_code = ErrorCode.INVALID_INPUT


class NotADirectoryError(BucketFSError, builtins.NotADirectoryError):
    """Operation needs a directory but found a file."""

    default_errno = errno.ENOTDIR
    default_reason = "not a directory"
    error_code = ErrorCode.INVALID_INPUT


class LinkConflictError(BucketFSError):
    """Rename/Symlink source is missing or destination already exists.

    The errno is ENOENT when the source is missing and EEXIST when the
    destination is taken.
    """

    default_errno = errno.EEXIST
    default_reason = "link conflict"
    error_code = ErrorCode.CONFLICT


class SymlinkLoopError(BucketFSError):
    """Symlink chain revisits a path or exceeds the hop limit."""

    default_errno = errno.ELOOP
    default_reason = "too many levels of symbolic links"
    error_code = ErrorCode.INVALID_INPUT


class SeekError(BucketFSError):
    """Computed seek offset falls outside [0, size)."""

    default_errno = errno.EINVAL
    default_reason = "seek error"
    error_code = ErrorCode.INVALID_INPUT


class EndOfDataError(BucketFSError, EOFError):
    """Read requested beyond the synthetic size."""

    default_reason = "end of data"
    error_code = ErrorCode.NOT_FOUND


class SyncError(BucketFSError):
    """Sync on a descriptor whose content is never persisted."""

    default_errno = errno.EIO
    default_reason = "nothing is persisted"
    error_code = ErrorCode.DEGRADED


class InjectedError(Exception):
    """Default injected error built from a configured message."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.DEGRADED):
        self.message = message
        self.error_code = error_code
        super().__init__(message)
