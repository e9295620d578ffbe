"""
Configuration management for the geocodio client.

Loads environment variables (optionally from a .env file), reads
individual GEOCODIO_* settings and parses integer values.
Only ClientConfiguration.from_env talks to this module; the client itself
receives an explicit configuration value.
"""

import os
import logging
from typing import Any, Optional
from dotenv import load_dotenv


class ConfigError(Exception):
    """Raised when configuration is missing or malformed."""
    pass


def load_config(env_path: str = ".env") -> bool:
    """
    Load environment variables from a .env file.

    Args:
        env_path: Path to the .env file (default: ".env")

    Returns:
        True if the file existed and was loaded
    """
    logger = logging.getLogger(__name__)

    if os.path.exists(env_path):
        load_dotenv(env_path, override=True)
        logger.info(f"Loaded configuration from {env_path}")
        return True

    logger.debug(f"Configuration file {env_path} not found, using process environment only")
    return False


def get_config(key: str, default: Any = None) -> Any:
    """
    Get a configuration value from the environment.

    Empty strings count as unset so that ``GEOCODIO_HOSTNAME=`` in a .env
    file falls back to the default.

    Args:
        key: Environment variable name
        default: Value returned when the key is unset or empty
    """
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    return value


def get_int_config(key: str, default: Optional[int] = None) -> Optional[int]:
    """
    Get an integer configuration value from the environment.

    Raises:
        ConfigError: If the variable is set but is not an integer
    """
    value = get_config(key)
    if value is None:
        return default

    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(f"Configuration key '{key}' must be an integer, got '{value}'")
