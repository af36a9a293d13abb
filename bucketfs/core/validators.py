"""
BucketFS Core: Input Validators.

Validation for the ``bucketfs`` configuration section and the values it
carries (paths, permissions, levels).
"""
from typing import Any, Dict, List, Union

from bucketfs.core.constants import ConfigKey, ErrorCode, Limits, NodeLevel, OperatingMode, SinkType

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationError(Exception):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.error_code = error_code


def validate_config(config: Dict[str, Any]) -> bool:
    """Validate the ``bucketfs`` configuration section.

    Args:
        config: Configuration dictionary (contents of the ``bucketfs`` key)

    Returns:
        True if valid

    Raises:
        ValidationError: If configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Configuration must be a dictionary")

    if ConfigKey.VERSION in config:
        validate_version(config[ConfigKey.VERSION])

    if ConfigKey.MODE in config:
        validate_choice(config[ConfigKey.MODE], OperatingMode, ConfigKey.MODE)

    if ConfigKey.NODE_LEVEL in config:
        validate_choice(config[ConfigKey.NODE_LEVEL], NodeLevel, ConfigKey.NODE_LEVEL)

    if ConfigKey.ERROR in config:
        error = config[ConfigKey.ERROR]
        if not isinstance(error, str) or not error.strip():
            raise ValidationError(f"Error message must be a non-empty string: {error!r}")

    for key in (ConfigKey.FAKE_FILES, ConfigKey.FAKE_DIRECTORIES):
        if key in config:
            try:
                validate_path_list(config[key])
            except ValidationError as e:
                raise ValidationError(f"Invalid {key}: {e}")

    for key in (ConfigKey.FILE_PERM, ConfigKey.DIR_PERM):
        if key in config:
            validate_permissions(config[key])

    if ConfigKey.MAX_SYMLINK_DEPTH in config:
        validate_symlink_depth(config[ConfigKey.MAX_SYMLINK_DEPTH])

    if ConfigKey.DIAGNOSTICS in config:
        validate_diagnostics_config(config[ConfigKey.DIAGNOSTICS])

    if ConfigKey.LOGGING in config:
        validate_logging_config(config[ConfigKey.LOGGING])

    return True


def validate_choice(value: Any, choices: type, name: str) -> bool:
    """Validate that ``value`` is one of the values of an Enum.

    Raises:
        ValidationError: If value is not a member value
    """
    try:
        choices(value)
    except ValueError:
        valid = [c.value for c in choices]
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {valid}")
    return True


def validate_diagnostics_config(diagnostics: Dict[str, Any]) -> bool:
    """Validate diagnostics configuration.

    Raises:
        ValidationError: If diagnostics config is invalid
    """
    if not isinstance(diagnostics, dict):
        raise ValidationError("Diagnostics config must be a dictionary")

    if ConfigKey.DIAGNOSTICS_SINK in diagnostics:
        validate_choice(diagnostics[ConfigKey.DIAGNOSTICS_SINK], SinkType, "diagnostics sink")

    if ConfigKey.DIAGNOSTICS_VERBOSE in diagnostics:
        if not isinstance(diagnostics[ConfigKey.DIAGNOSTICS_VERBOSE], bool):
            raise ValidationError("Diagnostics verbose must be boolean")

    return True


def validate_logging_config(logging_config: Dict[str, Any]) -> bool:
    """Validate logging configuration.

    Raises:
        ValidationError: If logging config is invalid
    """
    if not isinstance(logging_config, dict):
        raise ValidationError("Logging config must be a dictionary")

    level = logging_config.get(ConfigKey.LOGGING_LEVEL)
    if level is not None:
        if not isinstance(level, str) or level.upper() not in _LOG_LEVELS:
            raise ValidationError(f"Invalid log level: {level!r}. Must be one of {list(_LOG_LEVELS)}")

    log_file = logging_config.get(ConfigKey.LOGGING_FILE)
    if log_file is not None and not isinstance(log_file, str):
        raise ValidationError(f"Log file must be a string: {log_file!r}")

    return True


def validate_path(path: str) -> bool:
    """Validate that a path can be used as a namespace key.

    Args:
        path: Path to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If path is invalid
    """
    if not isinstance(path, str):
        raise ValidationError(f"Path must be string, got {type(path)}")

    if not path.strip(" \t"):
        raise ValidationError("Path cannot be empty")

    if len(path) > Limits.MAX_PATH_LENGTH:
        raise ValidationError(f"Path exceeds maximum length ({Limits.MAX_PATH_LENGTH})")

    if "\0" in path:
        raise ValidationError("Path contains null bytes")

    if any(ord(c) < 32 and c not in "\t" for c in path):
        raise ValidationError("Path contains control characters")

    return True


def validate_path_list(paths: List[str]) -> bool:
    """Validate a list of paths.

    Raises:
        ValidationError: If not a list or an element is invalid
    """
    if not isinstance(paths, list):
        raise ValidationError("Paths must be a list")

    for path in paths:
        validate_path(path)

    return True


def validate_version(version: str) -> bool:
    """Validate configuration version string (``MAJOR.MINOR``).

    Raises:
        ValidationError: If version is invalid
    """
    version = str(version)
    parts = version.split(".")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValidationError(f"Invalid version format: {version}")

    if parts[0] != "1":
        raise ValidationError(f"Unsupported version: {version}")

    return True


def validate_permissions(mode: Union[int, str]) -> bool:
    """Validate file permissions mode.

    Args:
        mode: Permission mode (int or octal string such as "0644" or "0o644")

    Returns:
        True if valid

    Raises:
        ValidationError: If mode is invalid
    """
    try:
        mode_int = parse_permissions(mode)
    except (ValueError, TypeError):
        raise ValidationError(f"Invalid permission mode (must be octal): {mode}")

    if mode_int < 0 or mode_int > 0o777:
        raise ValidationError(f"Permission mode must be in range 0-777, got: {mode_int:o}")

    return True


def parse_permissions(mode: Union[int, str]) -> int:
    """Convert an int or octal string to permission bits."""
    if isinstance(mode, bool):
        raise TypeError("Permission mode cannot be boolean")
    if isinstance(mode, str):
        return int(mode, 8)
    return int(mode)


def validate_symlink_depth(depth: int) -> bool:
    """Validate maximum symlink depth.

    Raises:
        ValidationError: If depth is not an integer in [1, MAX_SYMLINK_DEPTH_LIMIT]
    """
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise ValidationError(f"Symlink depth must be integer: {depth!r}")

    if depth < 1 or depth > Limits.MAX_SYMLINK_DEPTH_LIMIT:
        raise ValidationError(
            f"Symlink depth must be between 1 and {Limits.MAX_SYMLINK_DEPTH_LIMIT}: {depth}"
        )

    return True
