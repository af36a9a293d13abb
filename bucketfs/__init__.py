"""BucketFS - a content-less fake filesystem for dry runs.

Import the main entry points from the package root:
    from bucketfs import BucketFS, BucketFile, BucketFileInfo
    from bucketfs import create_from_config, load_config

Submodules:
    bucketfs.core: constants, errors, paths, locking, validators
    bucketfs.infrastructure: logger, config manager
    bucketfs.diagnostics: operation events and sinks
    bucketfs.fsutil: helpers over any Filesystem
"""

from bucketfs.core.constants import BUCKETFS_VERSION, NodeLevel, OperatingMode
from bucketfs.core.errors import (
    BucketFSError,
    DirectoryExistsError,
    EndOfDataError,
    FileExistsError,
    InjectedError,
    IsDirectoryError,
    LinkConflictError,
    NotADirectoryError,
    NotFoundError,
    SeekError,
    SymlinkLoopError,
    SyncError,
)
from bucketfs.diagnostics import ConsoleSink, LoggerSink, NullSink, OperationEvent, RecordingSink
from bucketfs.factory import create_from_config, load_config
from bucketfs.file import BucketFile
from bucketfs.fileinfo import BucketFileInfo
from bucketfs.filesystem import BucketFS
from bucketfs.interfaces import File, Filesystem

__version__ = BUCKETFS_VERSION

__all__ = [
    # Filesystem
    "BucketFS",
    "BucketFile",
    "BucketFileInfo",
    "File",
    "Filesystem",
    "NodeLevel",
    "OperatingMode",
    # Errors
    "BucketFSError",
    "DirectoryExistsError",
    "EndOfDataError",
    "FileExistsError",
    "InjectedError",
    "IsDirectoryError",
    "LinkConflictError",
    "NotADirectoryError",
    "NotFoundError",
    "SeekError",
    "SymlinkLoopError",
    "SyncError",
    # Diagnostics
    "ConsoleSink",
    "LoggerSink",
    "NullSink",
    "OperationEvent",
    "RecordingSink",
    # Configuration
    "create_from_config",
    "load_config",
]
