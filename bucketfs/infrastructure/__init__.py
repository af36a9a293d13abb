"""BucketFS Infrastructure Layer.

Services used by the filesystem and its factory:
- ConfigManager: Hierarchical configuration (defaults, YAML, environment)
- Logger: Structured logging system
"""

from .config_manager import ConfigError, ConfigManager, ConfigSource
from .logger import Logger, LogLevel, configure_logger, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "configure_logger",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigError",
    "ConfigManager",
]
