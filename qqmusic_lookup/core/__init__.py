"""
Core module for qqmusic-lookup.

This module provides the foundational components used throughout the application:
    - exceptions: Custom exception classes and retry classification
    - config: Configuration loading and validation
    - logger: Console and file logging

Usage:
    from qqmusic_lookup.core import (
        Config, load_config,
        setup_logging, get_logger,
        QQMusicError, TransportError, FormatError, NotFoundError
    )
"""

from qqmusic_lookup.core.config import (
    ChartsConfig,
    Config,
    LoggingConfig,
    NetworkConfig,
    SearchConfig,
    load_config,
)
from qqmusic_lookup.core.exceptions import (
    ConfigError,
    FormatError,
    NotFoundError,
    QQMusicError,
    TransportError,
)
from qqmusic_lookup.core.logger import (
    get_logger,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    # Config
    "Config",
    "NetworkConfig",
    "LoggingConfig",
    "SearchConfig",
    "ChartsConfig",
    "load_config",
    # Exceptions
    "QQMusicError",
    "ConfigError",
    "TransportError",
    "FormatError",
    "NotFoundError",
    # Logger
    "setup_logging",
    "get_logger",
    "shutdown_logging",
]
