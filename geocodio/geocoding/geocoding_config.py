"""
Configuration for the geocoding client.

Holds the API credentials, endpoint location and the per-operation
timeout budgets. Values are loaded once (explicitly or from the
environment) and handed to the client; nothing reads the environment
while a request is being built.
"""

from dataclasses import dataclass
from typing import Optional

from ..config.config_module import get_config, get_int_config, load_config


DEFAULT_HOSTNAME = "api.geocod.io"
DEFAULT_API_VERSION = "v1.9"

# Timeout budgets in milliseconds
SINGLE_TIMEOUT_MS = 5000
BATCH_TIMEOUT_MS = 1800000  # 30 minutes
LISTS_TIMEOUT_MS = 60000
DISTANCE_TIMEOUT_MS = 10000
LIST_DOWNLOAD_TIMEOUT_MS = 1800000  # 30 minutes

TIMEOUT_FIELDS = (
    "single_timeout_ms",
    "batch_timeout_ms",
    "lists_timeout_ms",
    "distance_timeout_ms",
    "list_download_timeout_ms",
)


def timeout_seconds(timeout_ms: int) -> float:
    """Convert a millisecond budget to the seconds requests expects."""
    return timeout_ms / 1000


@dataclass(frozen=True)
class ClientConfiguration:
    """Connection settings for the Geocodio API."""

    api_key: Optional[str] = None

    # Change for Geocodio+HIPAA or on-premise installations
    hostname: str = DEFAULT_HOSTNAME

    api_version: str = DEFAULT_API_VERSION

    single_timeout_ms: int = SINGLE_TIMEOUT_MS
    batch_timeout_ms: int = BATCH_TIMEOUT_MS
    lists_timeout_ms: int = LISTS_TIMEOUT_MS
    distance_timeout_ms: int = DISTANCE_TIMEOUT_MS
    list_download_timeout_ms: int = LIST_DOWNLOAD_TIMEOUT_MS

    def __post_init__(self):
        """Validate configuration values."""
        if not self.hostname or not self.hostname.strip():
            raise ValueError("hostname cannot be empty")

        if not self.api_version or not self.api_version.strip():
            raise ValueError("api_version cannot be empty")

        for name in TIMEOUT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(
                    f"{name} must be a positive number of milliseconds, got {value!r}"
                )

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "ClientConfiguration":
        """
        Build a configuration from GEOCODIO_* environment variables.

        Args:
            env_path: Optional .env file loaded before reading the environment

        Returns:
            ClientConfiguration with unset values left at their defaults

        Raises:
            ConfigError: If a timeout variable is not an integer
        """
        if env_path:
            load_config(env_path)

        return cls(
            api_key=get_config("GEOCODIO_API_KEY"),
            hostname=get_config("GEOCODIO_HOSTNAME", DEFAULT_HOSTNAME),
            api_version=get_config("GEOCODIO_API_VERSION", DEFAULT_API_VERSION),
            single_timeout_ms=get_int_config("GEOCODIO_SINGLE_TIMEOUT_MS", SINGLE_TIMEOUT_MS),
            batch_timeout_ms=get_int_config("GEOCODIO_BATCH_TIMEOUT_MS", BATCH_TIMEOUT_MS),
            lists_timeout_ms=get_int_config("GEOCODIO_LISTS_TIMEOUT_MS", LISTS_TIMEOUT_MS),
            distance_timeout_ms=get_int_config("GEOCODIO_DISTANCE_TIMEOUT_MS", DISTANCE_TIMEOUT_MS),
            list_download_timeout_ms=get_int_config(
                "GEOCODIO_LIST_DOWNLOAD_TIMEOUT_MS", LIST_DOWNLOAD_TIMEOUT_MS
            ),
        )

    def base_url(self) -> str:
        """Return https://{hostname}/{api_version}."""
        return f"https://{self.hostname}/{self.api_version}"
