"""
Build configured BucketFS instances.

This module handles:
- Loading and validating the ``bucketfs`` configuration section
- Logger and diagnostic sink construction
- Mode selection and fake entry declaration

Example:
    >>> config = load_config("dry-run.yaml")
    >>> fs = create_from_config(config)
    >>> fs.mode
    <OperatingMode.HYBRID: 'hybrid'>
"""
from typing import Any, Dict, Optional

from bucketfs.core.constants import (
    ALL_PERMS,
    ALL_RW_PERMS,
    DEFAULT_ERROR_MESSAGE,
    ConfigKey,
    Limits,
    NodeLevel,
    OperatingMode,
    SinkType,
)
from bucketfs.core.errors import InjectedError
from bucketfs.core.validators import parse_permissions, validate_config
from bucketfs.diagnostics import ConsoleSink, DiagnosticSink, LoggerSink, NullSink
from bucketfs.filesystem import BucketFS
from bucketfs.infrastructure.config_manager import ConfigManager
from bucketfs.infrastructure.logger import Logger, configure_logger


def load_config(config_file: Optional[str] = None, load_environment: bool = True) -> ConfigManager:
    """Load configuration and validate the merged ``bucketfs`` section.

    Args:
        config_file: Optional YAML file
        load_environment: Whether to apply BUCKETFS_* variables

    Returns:
        Configuration manager

    Raises:
        ConfigError: If the file cannot be loaded
        ValidationError: If the merged configuration is invalid
    """
    config = ConfigManager(config_file, load_environment=load_environment)
    validate_config(config.section())
    return config


def create_logger(section: Dict[str, Any]) -> Logger:
    """Build the ``bucketfs`` logger from the ``logging`` subsection."""
    logging_config = section.get(ConfigKey.LOGGING) or {}
    return configure_logger(
        "bucketfs",
        level=logging_config.get(ConfigKey.LOGGING_LEVEL) or "INFO",
        file=logging_config.get(ConfigKey.LOGGING_FILE),
    )


def create_sink(section: Dict[str, Any], logger: Logger) -> DiagnosticSink:
    """Build the diagnostic sink from the ``diagnostics`` subsection."""
    diagnostics = section.get(ConfigKey.DIAGNOSTICS) or {}
    sink_type = SinkType(diagnostics.get(ConfigKey.DIAGNOSTICS_SINK, SinkType.CONSOLE.value))

    if sink_type is SinkType.LOGGER:
        return LoggerSink(logger)
    if sink_type is SinkType.NONE:
        return NullSink()
    return ConsoleSink(verbose=diagnostics.get(ConfigKey.DIAGNOSTICS_VERBOSE, True))


def create_from_config(
    config: ConfigManager,
    sink: Optional[DiagnosticSink] = None,
    logger: Optional[Logger] = None,
) -> BucketFS:
    """Create a filesystem from configuration.

    Hybrid mode injects an ``InjectedError`` carrying the configured
    message; fake entries are only declared in hybrid mode.

    Args:
        config: Configuration manager
        sink: Overrides the configured diagnostic sink
        logger: Overrides the configured logger

    Returns:
        Configured filesystem

    Raises:
        ValidationError: If the configuration is invalid
    """
    section = config.section()
    validate_config(section)

    if logger is None:
        logger = create_logger(section)
    if sink is None:
        sink = create_sink(section, logger)

    logger.debug("Creating BucketFS", mode=section.get(ConfigKey.MODE))
    fs = BucketFS(
        node_level=NodeLevel(section.get(ConfigKey.NODE_LEVEL, NodeLevel.FUNCTIONAL.value)),
        sink=sink,
        logger=logger,
        max_symlink_depth=section.get(ConfigKey.MAX_SYMLINK_DEPTH, Limits.MAX_SYMLINK_DEPTH),
    )

    mode = OperatingMode(section.get(ConfigKey.MODE, OperatingMode.SILENT.value))
    if mode is OperatingMode.HYBRID:
        fs.with_error(InjectedError(section.get(ConfigKey.ERROR) or DEFAULT_ERROR_MESSAGE))
        fs.with_fake_directories(
            section.get(ConfigKey.FAKE_DIRECTORIES) or [],
            parse_permissions(section.get(ConfigKey.DIR_PERM, ALL_PERMS)),
        )
        fs.with_fake_files(
            section.get(ConfigKey.FAKE_FILES) or [],
            parse_permissions(section.get(ConfigKey.FILE_PERM, ALL_RW_PERMS)),
        )

    logger.info("BucketFS ready", mode=fs.mode.value, entries=fs.entry_count)
    return fs
