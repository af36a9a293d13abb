"""BucketFS Core - Shared building blocks.

Import specific names from submodules:
    from bucketfs.core.constants import ErrorCode, Limits
    from bucketfs.core.errors import NotFoundError
    from bucketfs.core.locking import ReadWriteLock
    from bucketfs.core.paths import clean_path
    from bucketfs.core.permission import Permission
    from bucketfs.core import validators
"""

from bucketfs.core import constants, errors, locking, paths, permission, validators

__all__ = [
    "constants",
    "errors",
    "locking",
    "paths",
    "permission",
    "validators",
]
