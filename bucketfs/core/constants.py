"""
BucketFS Core: Constants and Type Definitions

This module provides system-wide constants, error codes, diagnostic glyphs
and configuration keys shared by every BucketFS layer.
"""
import stat
from enum import Enum, IntEnum
from typing import TypeAlias

# Version information
BUCKETFS_VERSION = "1.0.0"
BUCKETFS_API_VERSION = 1


# Error codes (0-9 range)
class ErrorCode(IntEnum):
    """Standardized error codes for BucketFS operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad path, bad seek offset, invalid configuration
    NOT_FOUND = 2  # Path not present in the namespace
    PERMISSION_DENIED = 3  # Reserved, permissions are never enforced
    CONFLICT = 4  # Path already exists, link source/destination conflict
    DEPENDENCY_ERROR = 5  # Missing dependency
    INTERNAL_ERROR = 6  # Bug in BucketFS
    TIMEOUT = 7  # Reserved, no operation blocks
    RATE_LIMITED = 8  # Reserved
    DEGRADED = 9  # Nothing is persisted (sync)


# Type aliases for clarity
CleanPath: TypeAlias = str
FileMode: TypeAlias = int
OpenFlags: TypeAlias = int


# Permission bits
ALL_PERMS: FileMode = 0o777
ALL_RW_PERMS: FileMode = 0o666

# Placeholder owner/group shown by the ls-like rendering
DEF_USER = "boot"
DEF_GROUP = "foot"

PATH_SEPARATOR = "/"

# File type bits used by the namespace
MODE_DIR: FileMode = stat.S_IFDIR
MODE_FILE: FileMode = stat.S_IFREG
MODE_SYMLINK: FileMode = stat.S_IFLNK


class Glyph:
    """Glyphs printed on the diagnostic channel."""

    OPERATION = "⚡"
    DIR = "Ⅾ"
    FILE = "Ⅎ"
    RENAME_ARROW = "⇢"
    SYMLINK_ARROW = "⇉"
    LINK = "⛓"  # One symlink hop


# Resource limits and defaults
class Limits:
    """System limits and default values."""

    # Path limits
    MAX_PATH_LENGTH = 4096

    # Symlink dereferencing
    MAX_SYMLINK_DEPTH = 40
    MAX_SYMLINK_DEPTH_LIMIT = 255

    # Log file rotation
    LOG_MAX_BYTES = 10 * 1024 * 1024
    LOG_BACKUP_COUNT = 5


class OperatingMode(Enum):
    """Operating mode of a BucketFS instance."""

    SILENT = "silent"  # Dry run, every operation succeeds
    HYBRID = "hybrid"  # Outcome depends on declared paths


class NodeLevel(Enum):
    """Capability level of namespace entries."""

    MINIMAL = "minimal"  # Directory/link flags and target only
    FUNCTIONAL = "functional"  # Full mode bits and size


class SinkType(Enum):
    """Diagnostic sinks selectable from configuration."""

    CONSOLE = "console"
    LOGGER = "logger"
    NONE = "none"


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    # Top-level keys
    ROOT = "bucketfs"
    VERSION = "version"
    MODE = "mode"
    ERROR = "error"
    NODE_LEVEL = "node_level"
    FAKE_FILES = "fake_files"
    FAKE_DIRECTORIES = "fake_directories"
    FILE_PERM = "file_perm"
    DIR_PERM = "dir_perm"
    MAX_SYMLINK_DEPTH = "max_symlink_depth"
    DIAGNOSTICS = "diagnostics"
    LOGGING = "logging"

    # Diagnostics configuration
    DIAGNOSTICS_SINK = "sink"
    DIAGNOSTICS_VERBOSE = "verbose"

    # Logging configuration
    LOGGING_LEVEL = "level"
    LOGGING_FILE = "file"


DEFAULT_ERROR_MESSAGE = "BitBucket error"

# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.VERSION: "1.0",
    ConfigKey.MODE: OperatingMode.SILENT.value,
    ConfigKey.ERROR: DEFAULT_ERROR_MESSAGE,
    ConfigKey.NODE_LEVEL: NodeLevel.FUNCTIONAL.value,
    ConfigKey.FAKE_FILES: [],
    ConfigKey.FAKE_DIRECTORIES: [],
    ConfigKey.FILE_PERM: ALL_RW_PERMS,
    ConfigKey.DIR_PERM: ALL_PERMS,
    ConfigKey.MAX_SYMLINK_DEPTH: Limits.MAX_SYMLINK_DEPTH,
    ConfigKey.DIAGNOSTICS: {
        ConfigKey.DIAGNOSTICS_SINK: SinkType.CONSOLE.value,
        ConfigKey.DIAGNOSTICS_VERBOSE: True,
    },
    ConfigKey.LOGGING: {
        ConfigKey.LOGGING_LEVEL: "INFO",
        ConfigKey.LOGGING_FILE: None,
    },
}
