"""Configuration management for the edge load balancer.

Loads environment variables using pydantic-settings for type-safe
configuration. An optional YAML cloud-config file overrides the environment.
Credentials are carried for the gateway but no mapping decision depends on them.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

_ENV_LOADED = False
_ENV_LOCK = Lock()

DEFAULT_EXTERNAL_IP_SOURCES = [
    "https://icanhazip.com",
    "https://ifconfig.co/ip",
    "https://ipecho.net/plain",
    "https://myexternalip.com/raw",
    "https://api.ipify.org",
]


class ConfigError(ValueError):
    """Exception raised when the cloud-config file is unusable."""


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def normalize_log_level(value: str) -> str:
    """Upper-case a log level name and reject unknown ones.

    Raises:
        ConfigError: If the level is not one of LOG_LEVELS.
    """
    level = value.upper()
    if level not in LOG_LEVELS:
        raise ConfigError(
            f"invalid log level '{value}': expected one of {', '.join(LOG_LEVELS)}"
        )
    return level


def _resolve_env_file() -> str | None:
    """Locate the .env file regardless of the current working directory.

    Preference order:
        1. EDGE_ENV_FILE environment variable (explicit override)
        2. Current working directory (common for local runs)
        3. Ancestors of this file (covers package execution within a container)
    """
    override = os.getenv("EDGE_ENV_FILE")
    if override:
        override_path = Path(override).expanduser()
        if override_path.is_file():
            return str(override_path)

    cwd_candidate = Path.cwd() / ".env"
    if cwd_candidate.is_file():
        return str(cwd_candidate)

    for parent in Path(__file__).resolve().parents:
        candidate = parent / ".env"
        if candidate.is_file():
            return str(candidate)

    return None


_DEFAULT_ENV_FILE = _resolve_env_file()


def ensure_env_loaded() -> None:
    """Load environment variables from disk exactly once."""
    global _ENV_LOADED

    with _ENV_LOCK:
        if _ENV_LOADED:
            return

        env_path = _DEFAULT_ENV_FILE or _resolve_env_file()
        if env_path:
            load_dotenv(env_path, override=False)

        _ENV_LOADED = True


ensure_env_loaded()


class EdgeConfig(BaseSettings):
    """Main configuration class for the edge cloud provider.

    Values come from environment variables (case insensitive); keyword
    arguments, as passed by ``read_cloud_config``, take priority.
    """

    model_config = SettingsConfigDict(
        env_file=_DEFAULT_ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # ========== Gateway Credentials ==========
    username: str | None = Field(
        default=None,
        validation_alias=AliasChoices("edge_username", "midokura_username"),
    )
    password: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("edge_password", "midokura_password"),
    )

    # ========== Cluster ==========
    cluster_name: str = "kubernetes"

    # ========== Gateway Discovery ==========
    upnp_discover_delay_ms: int = Field(default=2000, ge=1, le=60000)
    probe_port: int = Field(default=12345, ge=1, le=65535)

    # ========== External Address Discovery ==========
    external_ip_sources: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXTERNAL_IP_SOURCES)
    )
    external_ip_timeout: float = Field(default=5.0, gt=0, le=60)
    external_ip_max_attempts: int = Field(default=3, ge=1, le=10)

    # ========== Observability ==========
    log_level: str = "INFO"

    @field_validator("external_ip_sources")
    @classmethod
    def _validate_sources(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("external_ip_sources must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        return normalize_log_level(value)


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        with path.open(encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"unable to read cloud config file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid cloud config file '{path}': {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigError(f"cloud config file '{path}' must contain a mapping")
    return content


def read_cloud_config(path: str | Path | None = None) -> EdgeConfig:
    """Read the configuration from the environment and an optional file.

    Values found in the cloud-config file take priority over environment
    variables.

    Args:
        path: Optional YAML cloud-config file.

    Returns:
        EdgeConfig: The merged configuration.

    Raises:
        ConfigError: If the file cannot be read or holds invalid values.
    """
    overrides: dict[str, Any] = {}
    if path is not None:
        overrides = _read_config_file(Path(path).expanduser())
        logger.debug(f"Cloud config file '{path}' sets: {sorted(overrides)}")

    try:
        config = EdgeConfig(**overrides)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e

    # SecretStr keeps the password masked here
    logger.debug(f"Username: {config.username}")
    logger.debug(f"Password: {config.password}")
    return config


@lru_cache(maxsize=1)
def get_config() -> EdgeConfig:
    """Return cached settings loaded from the environment only.

    Returns:
        EdgeConfig: The configuration instance loaded from environment variables.
    """
    return EdgeConfig()


# Export convenience accessors
__all__ = [
    "ConfigError",
    "DEFAULT_EXTERNAL_IP_SOURCES",
    "EdgeConfig",
    "LOG_LEVELS",
    "ensure_env_loaded",
    "get_config",
    "normalize_log_level",
    "read_cloud_config",
]
