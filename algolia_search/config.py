"""
Configuration Management for the Algolia Search Client

This module loads and validates client settings from configuration files,
a .env file and environment variables. Sources are merged in that order, so
environment variables win over files and explicit overrides win over both.

Key Features:
- Pydantic validation of credentials and timeouts
- YAML (algolia.yaml / algolia.yml) or JSON (algolia.json) configuration files
- .env loading through python-dotenv
- Environment variable overlay

Example Usage:
    from algolia_search.config import get_config
    from algolia_search.client import SearchClient

    config = get_config()
    client = SearchClient.from_config(config)

Environment Variables:
    ALGOLIA_APPLICATION_ID: Application identifier
    ALGOLIA_API_KEY: API key
    ALGOLIA_HOSTS: Comma-separated host list overriding the default hosts
    ALGOLIA_CONNECT_TIMEOUT_MS: Connect timeout (default 2000)
    ALGOLIA_SOCKET_TIMEOUT_MS: Read timeout for non-search calls (default 30000)
    ALGOLIA_SEARCH_TIMEOUT_MS: Read timeout for search calls (default 5000)
    ALGOLIA_USER_TOKEN: User token header sent with every call
    ALGOLIA_TAG_FILTERS: Tag filters header sent with every call
    LOG_LEVEL: Logging level
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILES = ("algolia.yaml", "algolia.yml", "algolia.json")

ENV_VARS = {
    "application_id": "ALGOLIA_APPLICATION_ID",
    "api_key": "ALGOLIA_API_KEY",
    "hosts": "ALGOLIA_HOSTS",
    "connect_timeout_ms": "ALGOLIA_CONNECT_TIMEOUT_MS",
    "socket_timeout_ms": "ALGOLIA_SOCKET_TIMEOUT_MS",
    "search_timeout_ms": "ALGOLIA_SEARCH_TIMEOUT_MS",
    "user_token": "ALGOLIA_USER_TOKEN",
    "tag_filters": "ALGOLIA_TAG_FILTERS",
    "log_level": "LOG_LEVEL",
}

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ClientConfig(BaseModel):
    """Validated client configuration."""

    application_id: str = Field(..., description="Application identifier")
    api_key: str = Field(..., description="API key")
    hosts: Optional[List[str]] = Field(None, description="Explicit host list")
    connect_timeout_ms: int = Field(2000, gt=0, description="Connect timeout")
    socket_timeout_ms: int = Field(30000, gt=0, description="Read timeout")
    search_timeout_ms: int = Field(5000, gt=0, description="Search read timeout")
    user_token: Optional[str] = Field(None, description="User token header")
    tag_filters: Optional[str] = Field(None, description="Tag filters header")
    extra_headers: Dict[str, str] = Field(default_factory=dict)
    log_level: str = Field("WARNING", description="Log level")

    @field_validator("hosts", mode="before")
    @classmethod
    def split_hosts(cls, value: Any) -> Any:
        """Accept a comma-separated host string."""
        if isinstance(value, str):
            value = [h.strip() for h in value.split(",") if h.strip()]
        return value or None

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: Any) -> str:
        level = str(value or "").upper()
        return level if level in VALID_LOG_LEVELS else "INFO"

    @model_validator(mode="after")
    def validate_credentials(self) -> "ClientConfig":
        """Validate credentials are present."""
        if not self.application_id:
            raise ValueError("application_id must not be empty")
        if not self.api_key:
            raise ValueError("api_key must not be empty")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClientConfig":
        """Create configuration from a dictionary.

        Raises:
            ConfigError: If validation fails
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e


class ConfigLoader:
    """Configuration loader class."""

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """Initialize configuration loader.

        Args:
            config_dir: Directory containing configuration files.
                Defaults to current directory.
        """
        self.config_dir = Path(config_dir or os.getcwd())

        env_file = self.config_dir / ".env"
        if env_file.exists():
            load_dotenv(env_file)

    def load(self, **overrides: Any) -> ClientConfig:
        """Load configuration.

        Args:
            **overrides: Values taking precedence over every other source;
                None values are ignored.

        Returns:
            Loaded configuration.

        Raises:
            ConfigError: If loading or validation fails.
        """
        data = self._load_config_file()
        data.update(self._load_env())
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ClientConfig.from_dict(data)

    def _load_config_file(self) -> Dict[str, Any]:
        for filename in CONFIG_FILES:
            path = self.config_dir / filename
            if path.exists():
                logger.debug(f"Loading configuration from {path}")
                return self._load_file(path)
        return {}

    def _load_file(self, path: Path) -> Dict[str, Any]:
        """Load configuration file.

        Raises:
            ConfigError: If the file cannot be parsed.
        """
        try:
            with open(path) as f:
                if path.suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load {path.name}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Failed to load {path.name}: expected a mapping")
        return data

    def _load_env(self) -> Dict[str, Any]:
        return {
            key: os.environ[name]
            for key, name in ENV_VARS.items()
            if os.environ.get(name)
        }


def get_config(
    config_dir: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> ClientConfig:
    """Get configuration.

    This is a convenience function that creates a loader
    and loads configuration in one step.
    """
    loader = ConfigLoader(config_dir)
    return loader.load(**overrides)


__all__ = ["ClientConfig", "ConfigLoader", "get_config"]
