"""
BucketFS: a content-less filesystem namespace for dry runs.

``BucketFS`` mimics the success/failure semantics of a POSIX filesystem
without touching the disk or storing content. It has two modes:

- Silent (``BucketFS.create()``): every operation reports itself on the
  diagnostic sink and succeeds. Nothing is recorded.
- Hybrid (``BucketFS.create_with_error(err)``): only the paths declared
  through ``with_fake_files``/``with_fake_directories`` (or created by
  ``mkdir``/``symlink``/``rename``) exist. Operations on anything else fail
  the way a real filesystem would, with ``err`` wrapped in the raised
  ``BucketFSError``.

Example:
    >>> boom = RuntimeError("dry run")
    >>> fs = (
    ...     BucketFS.create()
    ...     .with_error(boom)
    ...     .with_fake_directories(["/home/Documents"])
    ...     .with_fake_files(["/home/Documents/cv.doc"])
    ... )
    >>> fs.remove("/home/Documents/cv.doc")
    >>> fs.remove("/home/Documents/cv.doc")
    Traceback (most recent call last):
    ...
    bucketfs.core.errors.NotFoundError: Remove /home/Documents/cv.doc: ...

Thread Safety:
- One reader/writer lock guards the namespace store
- Mutations hold the exclusive side, lookups the shared side
- Descriptors carry their own lock and are not tracked by the store
"""

import errno
import os
from typing import Dict, Iterable, List, Optional, Set

from bucketfs.core.constants import (
    ALL_PERMS,
    ALL_RW_PERMS,
    MODE_DIR,
    MODE_FILE,
    PATH_SEPARATOR,
    FileMode,
    Limits,
    NodeLevel,
    OpenFlags,
    OperatingMode,
)
from bucketfs.core.errors import (
    BucketFSError,
    DirectoryExistsError,
    FileExistsError,
    IsDirectoryError,
    LinkConflictError,
    NotADirectoryError,
    NotFoundError,
    SymlinkLoopError,
)
from bucketfs.core.locking import ReadWriteLock
from bucketfs.core.paths import clean_path, has_mode_flag
from bucketfs.diagnostics import ConsoleSink, DiagnosticSink, OperationEvent
from bucketfs.file import BucketFile
from bucketfs.fileinfo import BucketFileInfo, default_file_info, new_dir_info, new_file_info
from bucketfs.infrastructure.logger import Logger, get_logger
from bucketfs.nodes import BucketNode, create_node


class BucketFS:
    """
    Fake filesystem with silent and hybrid modes of operation.

    The namespace store maps canonical paths to ``BucketNode`` entries and
    is the only state of the filesystem. Silent mode never reads or writes
    it.
    """

    def __init__(
        self,
        error: Optional[BaseException] = None,
        node_level: NodeLevel = NodeLevel.FUNCTIONAL,
        sink: Optional[DiagnosticSink] = None,
        logger: Optional[Logger] = None,
        max_symlink_depth: int = Limits.MAX_SYMLINK_DEPTH,
    ):
        """
        Initialize filesystem. Prefer ``create()``/``create_with_error()``.

        Args:
            error: Injected error; None selects silent mode
            node_level: Capability level of the entries
            sink: Diagnostic sink (console on stdout if None)
            logger: Structured logger (global ``bucketfs`` logger if None)
            max_symlink_depth: Maximum number of links followed by ``stat``
        """
        if max_symlink_depth < 1:
            raise ValueError(f"max_symlink_depth must be positive, got {max_symlink_depth}")

        self._lock = ReadWriteLock()
        self._silent = error is None
        self._error = error
        self._entries: Dict[str, BucketNode] = {}
        self.node_level = node_level
        self.sink = sink if sink is not None else ConsoleSink()
        self.logger = logger if logger is not None else get_logger("bucketfs")
        self.max_symlink_depth = max_symlink_depth

    # =========================================================================
    # Construction / fluent configuration
    # =========================================================================

    @classmethod
    def create(cls, **kwargs) -> "BucketFS":
        """Silent mode constructor: every operation only reports itself."""
        return cls(None, **kwargs)

    @classmethod
    def create_with_error(cls, error: BaseException, **kwargs) -> "BucketFS":
        """Hybrid mode constructor.

        Raises:
            ValueError: If error is None
        """
        if error is None:
            raise ValueError("BucketFS.create_with_error() needs an error")
        return cls(error, **kwargs)

    def with_error(self, error: BaseException) -> "BucketFS":
        """Switch to hybrid mode, wrapping ``error`` into every failure.

        Raises:
            ValueError: If error is None
        """
        if error is None:
            raise ValueError("BucketFS.with_error() needs an error")
        with self._lock.write_locked():
            self._silent = False
            self._error = error
        self.logger.debug("Hybrid mode enabled", error=repr(error))
        return self

    def with_fake_directories(self, dirs: Iterable[str], perm: FileMode = ALL_PERMS) -> "BucketFS":
        """Declare directories as pre-existing. No-op in silent mode."""
        return self._declare(dirs, MODE_DIR | perm, 0)

    def with_fake_files(self, files: Iterable[str], perm: FileMode = ALL_RW_PERMS, size: int = 0) -> "BucketFS":
        """Declare files as pre-existing. No-op in silent mode.

        ``size`` is only remembered by functional nodes.
        """
        return self._declare(files, MODE_FILE | perm, size)

    def _declare(self, names: Iterable[str], mode: FileMode, size: int) -> "BucketFS":
        with self._lock.write_locked():
            if self._silent:
                return self
            cleaned = sorted(clean_path(name) for name in names)
            for name in cleaned:
                self._entries[name] = create_node(mode, self.node_level, size)
        self.logger.debug("Declared fake entries", count=len(cleaned))
        return self

    @property
    def silent(self) -> bool:
        return self._silent

    @property
    def mode(self) -> OperatingMode:
        return OperatingMode.SILENT if self._silent else OperatingMode.HYBRID

    @property
    def error(self) -> Optional[BaseException]:
        """The injected error, None in silent mode."""
        return self._error

    def __contains__(self, name: str) -> bool:
        with self._lock.read_locked():
            return clean_path(name) in self._entries

    @property
    def entry_count(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def entries(self) -> Dict[str, str]:
        """Snapshot of the namespace store as ``{path: node description}``."""
        with self._lock.read_locked():
            return {name: str(node) for name, node in sorted(self._entries.items())}

    # =========================================================================
    # Filesystem operations
    # =========================================================================

    def path_separator(self) -> str:
        return PATH_SEPARATOR

    def remove(self, name: str) -> None:
        """Delete the file or directory called ``name``.

        Raises:
            NotFoundError: Hybrid mode and name is not present
        """
        op = "Remove"
        with self._lock.write_locked():
            name = clean_path(name)
            if self._silent:
                self._emit(op, name)
                return

            node = self._entries.get(name)
            if node is None:
                self._emit(op, name)
                self.logger.debug("Remove failed", path=name)
                raise NotFoundError(op, name, self._error)

            self._emit(op, name, is_dir=node.is_dir)
            del self._entries[name]
            self.logger.debug("Removed entry", path=name)

    def rename(self, old_path: str, new_path: str) -> None:
        """Rename ``old_path`` to ``new_path``; the entry keeps its metadata.

        Raises:
            LinkConflictError: Hybrid mode and old is absent or new exists
        """
        op = "Rename"
        with self._lock.write_locked():
            old_path = clean_path(old_path)
            new_path = clean_path(new_path)
            if self._silent:
                self._emit(op, old_path, new_path)
                return

            node = self._entries.get(old_path)
            if node is None:
                self._emit(op, old_path, new_path)
                raise LinkConflictError(
                    op, old_path, self._error, new_path, "old path does not exist", errno_=errno.ENOENT
                )
            if new_path in self._entries:
                self._emit(op, old_path, new_path, is_dir=node.is_dir)
                raise LinkConflictError(op, old_path, self._error, new_path, "new path exists")

            # the old name disappears, the same entry lives on under the new one
            del self._entries[old_path]
            self._entries[new_path] = node
            self._emit(op, old_path, new_path, is_dir=node.is_dir)
            self.logger.debug("Renamed entry", old=old_path, new=new_path)

    def symlink(self, old_name: str, new_name: str) -> None:
        """Make ``new_name`` a symbolic link pointing at ``old_name``.

        The target entry is untouched; a new link entry is created.

        Raises:
            LinkConflictError: Hybrid mode and target is absent or link name exists
        """
        op = "Symlink"
        with self._lock.write_locked():
            old_name = clean_path(old_name)
            new_name = clean_path(new_name)
            if self._silent:
                self._emit(op, new_name, old_name)
                return

            node = self._entries.get(old_name)
            if node is None:
                self._emit(op, new_name, old_name)
                raise LinkConflictError(
                    op, old_name, self._error, new_name, "target does not exist", errno_=errno.ENOENT
                )
            if new_name in self._entries:
                self._emit(op, new_name, old_name, is_dir=node.is_dir)
                raise LinkConflictError(op, old_name, self._error, new_name, "link name exists")

            self._entries[new_name] = node.link_to(old_name)
            self._emit(op, new_name, old_name, is_dir=node.is_dir)
            self.logger.debug("Created symlink", link=new_name, target=old_name)

    def mkdir(self, name: str, perm: FileMode = ALL_PERMS) -> None:
        """Create a fake directory.

        Raises:
            DirectoryExistsError: Hybrid mode and name exists as a directory
            FileExistsError: Hybrid mode and name exists as a file
        """
        op = "Mkdir"
        with self._lock.write_locked():
            name = clean_path(name)
            if self._silent:
                self._emit(op, name)
                return

            node = self._entries.get(name)
            if node is not None:
                self._emit(op, name, is_dir=node.is_dir)
                if node.is_dir:
                    raise DirectoryExistsError(op, name, self._error)
                raise FileExistsError(op, name, self._error)

            self._entries[name] = create_node(MODE_DIR | perm, self.node_level)
            self._emit(op, name, is_dir=True)
            self.logger.debug("Created directory", path=name, perm=oct(perm))

    def open(self, name: str) -> BucketFile:
        """Open ``name`` read-only."""
        return self._open("Open", name, os.O_RDONLY, 0)

    def open_file(self, name: str, flags: OpenFlags = os.O_RDONLY, perm: FileMode = 0) -> BucketFile:
        """Open ``name`` with the given flags.

        In hybrid mode an absent file opened with ``O_CREAT`` yields a
        descriptor but is not added to the namespace.

        Raises:
            IsDirectoryError: Hybrid mode and name is a directory
            NotFoundError: Hybrid mode, name absent and no O_CREAT
        """
        return self._open("OpenFile", name, flags, perm)

    def _open(self, op: str, name: str, flags: OpenFlags, perm: FileMode) -> BucketFile:
        with self._lock.write_locked():
            name = clean_path(name)
            if self._silent:
                self._emit(op, name)
                return BucketFile(name, flags, perm, None)

            node = self._entries.get(name)
            if node is not None:
                self._emit(op, name, is_dir=node.is_dir)
                if node.is_dir:
                    raise IsDirectoryError(op, name, self._error)
                return BucketFile(name, flags, perm, self._error)

            self._emit(op, name)
            if has_mode_flag(os.O_CREAT, flags):
                self.logger.debug("Opened absent file with O_CREAT", path=name)
                return BucketFile(name, flags, perm, self._error)
            raise NotFoundError(op, name, self._error)

    def stat(self, name: str) -> BucketFileInfo:
        """Information about ``name``, following symbolic links.

        Raises:
            NotFoundError: Hybrid mode and name, or a link target, is absent
            SymlinkLoopError: The link chain loops or is too long
        """
        op = "Stat"
        name = clean_path(name)
        if self._silent:
            self._emit(op, name)
            return default_file_info(name)

        with self._lock.read_locked():
            node = self._entries.get(name)
            if node is None:
                self._emit(op, name)
                raise NotFoundError(op, name, self._error)

            if node.is_link:
                try:
                    node = self._dereference(op, name, node.target)
                except BucketFSError:
                    self._emit(op, name)
                    raise
                name = node.client_data

            info = self._project(name, node)
        self._emit(op, name, is_dir=info.is_dir)
        return info

    def lstat(self, name: str) -> BucketFileInfo:
        """Like ``stat`` but describes a symbolic link itself.

        Raises:
            NotFoundError: Hybrid mode and name is absent
        """
        op = "Lstat"
        name = clean_path(name)
        if self._silent:
            self._emit(op, name)
            return default_file_info(name)

        with self._lock.read_locked():
            node = self._entries.get(name)
            if node is None:
                self._emit(op, name)
                raise NotFoundError(op, name, self._error)
            info = self._project(name, node)
        self._emit(op, name, is_dir=info.is_dir)
        return info

    def read_dir(self, path: str) -> List[BucketFileInfo]:
        """List a directory. Listings are always empty; only the
        existence and kind of ``path`` decide success.

        Raises:
            NotADirectoryError: Hybrid mode and path is a file
            NotFoundError: Hybrid mode and path is absent
        """
        op = "ReadDir"
        path = clean_path(path)
        if self._silent:
            self._emit(op, path)
            return []

        with self._lock.read_locked():
            node = self._entries.get(path)
        if node is None:
            self._emit(op, path)
            raise NotFoundError(op, path, self._error)

        self._emit(op, path, is_dir=node.is_dir)
        if not node.is_dir:
            raise NotADirectoryError(op, path, self._error)
        return []

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _dereference(self, op: str, link_name: str, target: str) -> BucketNode:
        """
        Follow a chain of symbolic links. Caller holds the shared lock.

        The final non-link node gets its canonical path attached as client
        data so the projection can be named after it.

        Args:
            op: Operation the error is attributed to
            link_name: Canonical path of the first link
            target: Target of the first link

        Returns:
            Final non-link node

        Raises:
            NotFoundError: A hop points at an absent path (broken link)
            SymlinkLoopError: A path is visited twice or too many hops
        """
        visited: Set[str] = {link_name}
        name = target
        for _ in range(self.max_symlink_depth):
            self.sink.emit(OperationEvent(op, (name,), hop=True))
            name = clean_path(name)
            node = self._entries.get(name)
            if node is None:
                raise NotFoundError(op, name, self._error, reason="broken symbolic link")
            if not node.is_link:
                node.with_client_data(name)
                return node
            if name in visited:
                raise SymlinkLoopError(op, name, self._error)
            visited.add(name)
            name = node.target

        raise SymlinkLoopError(op, link_name, self._error)

    def _project(self, name: str, node: BucketNode) -> BucketFileInfo:
        if node.is_dir and not node.is_link:
            return new_dir_info(name, node.size, node.mode)
        return new_file_info(name, node.size, node.mode)

    def _emit(self, op: str, *paths: str, is_dir: Optional[bool] = None) -> None:
        self.sink.emit(OperationEvent(op, tuple(paths), is_dir))

    def __repr__(self) -> str:
        return f"BucketFS(mode={self.mode.value}, entries={len(self._entries)})"
