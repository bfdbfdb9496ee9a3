"""
Configuration management for qqmusic-lookup.

This module handles loading, validating, and providing access to the
application configuration. Every setting has a default matching the
upstream contract, so a configuration file is optional.

Configuration Sources (lowest to highest precedence):
    1. Defaults defined on the dataclasses below
    2. YAML file (explicit path, or config.yaml in the working directory)
    3. Environment variables, optionally loaded from a .env file

Example config.yaml:
    network:
      timeout: 10
      retries: 3
      retry_delay: 1.0

    logging:
      level: "INFO"
      file: "~/.qqmusic-lookup/qqmusic.log"

    search:
      page_size: 10

Environment Variables:
    QQMUSIC_TIMEOUT      network.timeout
    QQMUSIC_USER_AGENT   network.user_agent
    QQMUSIC_RETRIES      network.retries
    QQMUSIC_LOG_LEVEL    logging.level
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from qqmusic_lookup.core.exceptions import ConfigError


# Default configuration file name (looked up in current working directory)
CONFIG_FILENAME = "config.yaml"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
DEFAULT_REFERER = "https://y.qq.com"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class NetworkConfig:
    """
    HTTP behaviour shared by every upstream request.

    Attributes:
        timeout: Per-attempt timeout in seconds.
        user_agent: Browser-identifying User-Agent header.
        referer: Referer header; the upstream rejects requests without it.
        retries: Maximum attempts per request (including the first one).
        retry_delay: Backoff unit in seconds. Attempt n waits n * retry_delay.
    """
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    referer: str = DEFAULT_REFERER
    retries: int = 3
    retry_delay: float = 1.0


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging configuration.

    Attributes:
        level: Console log level name.
        file: Optional path of a detailed log file. ~ is expanded.
    """
    level: str = "WARNING"
    file: Path | None = None


@dataclass(frozen=True)
class SearchConfig:
    """Search endpoint settings."""
    page_size: int = 10


@dataclass(frozen=True)
class ChartsConfig:
    """Chart endpoint settings."""
    limit: int = 20


@dataclass(frozen=True)
class Config:
    """
    Complete application configuration.

    Created by load_config() and treated as immutable, so one instance can
    be shared by concurrent requests.

    Example:
        config = load_config()
        print(f"Timeout: {config.network.timeout}s")
    """
    network: NetworkConfig = field(default_factory=NetworkConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    charts: ChartsConfig = field(default_factory=ChartsConfig)


def load_config(config_path: Path | None = None, use_env: bool = True) -> Config:
    """
    Load and validate configuration.

    Args:
        config_path: Optional explicit path to a YAML config file.
                     If None, config.yaml in the current working directory
                     is used when it exists, otherwise defaults apply.
        use_env: Apply environment variable overrides (and read .env).

    Returns:
        Config: A frozen dataclass containing all configuration values.

    Raises:
        ConfigError: If an explicit config file is missing, the YAML is
                     invalid, or a value has the wrong type.
    """
    raw_config: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path).expanduser()
        if not config_path.exists():
            raise ConfigError(
                f"Configuration file not found: {config_path}",
                details={"file_path": str(config_path)}
            )
        raw_config = _read_yaml(config_path)
    else:
        default_path = Path.cwd() / CONFIG_FILENAME
        if default_path.exists():
            raw_config = _read_yaml(default_path)

    config = Config(
        network=_parse_network_config(_section(raw_config, "network")),
        logging=_parse_logging_config(_section(raw_config, "logging")),
        search=SearchConfig(
            page_size=_positive_int(_section(raw_config, "search"), "page_size", 10, "search")
        ),
        charts=ChartsConfig(
            limit=_positive_int(_section(raw_config, "charts"), "limit", 20, "charts")
        ),
    )

    if use_env:
        load_dotenv(find_dotenv(usecwd=True))
        config = _apply_environment(config)

    return config


def _read_yaml(path: Path) -> dict[str, Any]:
    """
    Read and parse a YAML configuration file.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML dictionary.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except IOError as e:
        raise ConfigError(
            f"Failed to read configuration file: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    try:
        raw_config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(
            f"Invalid YAML syntax in configuration file: {e}",
            details={"file_path": str(path), "original_error": str(e)}
        ) from e

    # An empty file is valid and means "all defaults"
    if raw_config is None:
        return {}

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a YAML dictionary",
            details={"file_path": str(path)}
        )

    return raw_config


def _section(raw_config: dict[str, Any], name: str) -> dict[str, Any]:
    section = raw_config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' must be a dictionary",
            details={"section": name}
        )
    return section


def _positive_int(section: dict[str, Any], key: str, default: int, prefix: str) -> int:
    value = section.get(key, default)
    # bool is a subclass of int and is never a valid count
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(
            f"'{prefix}.{key}' must be a positive integer",
            details={"field": f"{prefix}.{key}", "value": value}
        )
    return value


def _positive_number(section: dict[str, Any], key: str, default: float, prefix: str) -> float:
    value = section.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(
            f"'{prefix}.{key}' must be a positive number",
            details={"field": f"{prefix}.{key}", "value": value}
        )
    return float(value)


def _non_empty_str(section: dict[str, Any], key: str, default: str, prefix: str) -> str:
    value = section.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(
            f"'{prefix}.{key}' must be a non-empty string",
            details={"field": f"{prefix}.{key}"}
        )
    return value.strip()


def _parse_network_config(section: dict[str, Any]) -> NetworkConfig:
    """
    Parse and validate the network section.

    retry_delay may be 0 (no backoff), every other number must be positive.
    """
    retry_delay = section.get("retry_delay", 1.0)
    if isinstance(retry_delay, bool) or not isinstance(retry_delay, (int, float)) or retry_delay < 0:
        raise ConfigError(
            "'network.retry_delay' must be a non-negative number",
            details={"field": "network.retry_delay", "value": retry_delay}
        )

    return NetworkConfig(
        timeout=_positive_number(section, "timeout", 10.0, "network"),
        user_agent=_non_empty_str(section, "user_agent", DEFAULT_USER_AGENT, "network"),
        referer=_non_empty_str(section, "referer", DEFAULT_REFERER, "network"),
        retries=_positive_int(section, "retries", 3, "network"),
        retry_delay=float(retry_delay),
    )


def _parse_logging_config(section: dict[str, Any]) -> LoggingConfig:
    level = _log_level(section.get("level", "WARNING"), "logging.level")

    log_file = section.get("file")
    if log_file is not None:
        if not isinstance(log_file, str) or not log_file.strip():
            raise ConfigError(
                "'logging.file' must be a string path or null",
                details={"field": "logging.file"}
            )
        log_file = Path(log_file.strip()).expanduser()

    return LoggingConfig(level=level, file=log_file)


def _log_level(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or value.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(
            f"'{field_name}' must be one of {', '.join(VALID_LOG_LEVELS)}",
            details={"field": field_name, "value": value}
        )
    return value.upper()


def _apply_environment(config: Config) -> Config:
    """
    Override configuration values from environment variables.

    Raises:
        ConfigError: If a variable is set to an unparseable value.
    """
    network = config.network
    logging_config = config.logging

    timeout = os.getenv("QQMUSIC_TIMEOUT")
    if timeout:
        try:
            network = replace(network, timeout=_positive_number(
                {"timeout": float(timeout)}, "timeout", 10.0, "network"
            ))
        except ValueError as e:
            raise ConfigError(
                f"QQMUSIC_TIMEOUT must be a number, got {timeout!r}",
                details={"variable": "QQMUSIC_TIMEOUT"}
            ) from e

    retries = os.getenv("QQMUSIC_RETRIES")
    if retries:
        try:
            network = replace(network, retries=_positive_int(
                {"retries": int(retries)}, "retries", 3, "network"
            ))
        except ValueError as e:
            raise ConfigError(
                f"QQMUSIC_RETRIES must be an integer, got {retries!r}",
                details={"variable": "QQMUSIC_RETRIES"}
            ) from e

    user_agent = os.getenv("QQMUSIC_USER_AGENT")
    if user_agent:
        network = replace(network, user_agent=user_agent.strip())

    level = os.getenv("QQMUSIC_LOG_LEVEL")
    if level:
        logging_config = replace(logging_config, level=_log_level(level, "QQMUSIC_LOG_LEVEL"))

    return replace(config, network=network, logging=logging_config)
