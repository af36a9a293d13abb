"""
BucketFS Core: Open-flag rendering.

``Permission`` wraps the flags given to ``open_file`` and renders them in a
compact ``rw-acest`` form used by descriptor diagnostics.
"""
import os

from bucketfs.core.constants import OpenFlags

_PRIMARY_MASK = os.O_RDONLY | os.O_WRONLY | os.O_RDWR

_PRIMARY_NAMES = {
    os.O_RDWR: "rw-",
    os.O_RDONLY: "r--",
    os.O_WRONLY: "-w-",
}

# Flags that can be ORed on top of the primary mode
_FLAG_LETTERS = (
    (os.O_APPEND, "a"),
    (os.O_CREAT, "c"),
    (os.O_EXCL, "e"),
    (os.O_SYNC, "s"),
    (os.O_TRUNC, "t"),
)


class Permission(int):
    """Open flags with a readable rendering.

    Example:
        >>> str(Permission(os.O_RDWR | os.O_CREAT | os.O_TRUNC))
        'rw-ct'
    """

    @property
    def primary_mode(self) -> OpenFlags:
        """Only the O_RDONLY / O_WRONLY / O_RDWR part of the flags."""
        return int(self) & _PRIMARY_MASK

    @property
    def flags(self) -> OpenFlags:
        """The flags with the primary mode bits cleared."""
        return int(self) & ~_PRIMARY_MASK

    def __str__(self) -> str:
        primary = self.primary_mode
        if primary not in _PRIMARY_NAMES:
            raise ValueError(f"Invalid primary open mode: {primary:#o}")

        text = _PRIMARY_NAMES[primary]
        for flag, letter in _FLAG_LETTERS:
            if int(self) & flag:
                text += letter
        return text

    def __repr__(self) -> str:
        return f"Permission({int(self):#o})"
