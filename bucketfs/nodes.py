"""
Namespace entries for BucketFS.

A node records what a path *is* without storing any content. Two
capability levels exist:

- ``LiteNode`` (``NodeLevel.MINIMAL``): only knows whether the object is a
  directory and whether it is a symbolic link. Size is always 0 and the
  permissions are always reported as 0o777.
- ``FunctionalNode`` (``NodeLevel.FUNCTIONAL``): also remembers the
  permission bits and size it was created with.

A filesystem instance commits to one level for its whole lifetime and
builds every node through ``create_node``.

Example:
    >>> node = create_node(stat.S_IFDIR | 0o755, NodeLevel.FUNCTIONAL)
    >>> node.is_dir
    True
    >>> link = node.link_to("/srv/data")
    >>> link.is_link, link.target
    (True, '/srv/data')
"""
import stat
from abc import ABC, abstractmethod
from typing import Any, Optional

from bucketfs.core.constants import ALL_PERMS, MODE_DIR, MODE_FILE, MODE_SYMLINK, FileMode, NodeLevel


class BucketNode(ABC):
    """Abstract namespace entry.

    All nodes expose:
    - is_dir / is_link / target: classification
    - size / mode / perms: metadata
    - with_link() / with_client_data(): in-place mutators (fluent)
    - link_to(): derive a *new* link node pointing at a path
    """

    def __init__(self) -> None:
        self._target = ""
        self._extra: Any = None

    @property
    @abstractmethod
    def is_dir(self) -> bool:
        """Is it a directory?"""

    @property
    @abstractmethod
    def is_link(self) -> bool:
        """Is it a symbolic link?"""

    @property
    @abstractmethod
    def size(self) -> int:
        """Synthetic size in bytes."""

    @property
    @abstractmethod
    def perms(self) -> FileMode:
        """Permission bits only."""

    @abstractmethod
    def with_link(self, name: str) -> "BucketNode":
        """Mark this node as a symbolic link to ``name``.

        An empty name leaves the node untouched.
        """

    @abstractmethod
    def link_to(self, key: str) -> Optional["BucketNode"]:
        """Create a new link node of the same level pointing at ``key``."""

    @property
    def mode(self) -> FileMode:
        """Full mode: file type bits plus permissions."""
        if self.is_link:
            return MODE_SYMLINK | self.perms
        if self.is_dir:
            return MODE_DIR | self.perms
        return MODE_FILE | self.perms

    @property
    def target(self) -> str:
        """Link target, empty unless this is a link."""
        return self._target

    @property
    def client_data(self) -> Any:
        """Transient data attached by the filesystem, usually None."""
        return self._extra

    def with_client_data(self, data: Any) -> "BucketNode":
        """Attach transient data (the resolved alias while dereferencing)."""
        self._extra = data
        return self

    def __str__(self) -> str:
        text = stat.filemode(self.mode)
        if self.is_link and self._target:
            text += " ->" + self._target
        return text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self})"


class LiteNode(BucketNode):
    """Minimal node: directory and link flags plus a target string."""

    def __init__(self, mode: FileMode = MODE_FILE | ALL_PERMS):
        super().__init__()
        self._is_dir = stat.S_ISDIR(mode)
        self._is_link = stat.S_ISLNK(mode)

    @property
    def is_dir(self) -> bool:
        return self._is_dir

    @property
    def is_link(self) -> bool:
        return self._is_link and bool(self._target)

    @property
    def size(self) -> int:
        return 0

    @property
    def perms(self) -> FileMode:
        return ALL_PERMS

    def with_link(self, name: str) -> "LiteNode":
        if name:
            self._target = name
            self._is_link = True
        return self

    def link_to(self, key: str) -> "LiteNode":
        node = LiteNode(MODE_SYMLINK | ALL_PERMS)
        node._target = key
        return node


class FunctionalNode(BucketNode):
    """Node that remembers its permission bits and size."""

    def __init__(self, mode: FileMode = MODE_FILE | ALL_PERMS, size: int = 0):
        super().__init__()
        if size < 0:
            raise ValueError(f"Node size must be non-negative, got {size}")
        self._is_dir = stat.S_ISDIR(mode)
        self._is_link = stat.S_ISLNK(mode)
        self._perms = stat.S_IMODE(mode)
        self._size = size

    @property
    def is_dir(self) -> bool:
        return self._is_dir

    @property
    def is_link(self) -> bool:
        return self._is_link

    @property
    def size(self) -> int:
        return self._size

    @property
    def perms(self) -> FileMode:
        return self._perms

    def with_link(self, name: str) -> "FunctionalNode":
        if name:
            self._target = name
            self._is_link = True
        return self

    def link_to(self, key: str) -> Optional["FunctionalNode"]:
        if not key.strip(" \t"):
            return None
        node = FunctionalNode(MODE_SYMLINK | ALL_PERMS)
        node._target = key
        return node


def create_node(mode: FileMode, level: NodeLevel = NodeLevel.FUNCTIONAL, size: int = 0) -> BucketNode:
    """Create a node of the requested capability level.

    Args:
        mode: File type and permission bits (``stat.S_IFDIR | 0o755`` ...)
        level: Capability level of the owning filesystem
        size: Initial size, ignored by minimal nodes

    Returns:
        New node
    """
    if level is NodeLevel.MINIMAL:
        return LiteNode(mode)
    return FunctionalNode(mode, size)
