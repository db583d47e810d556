"""Configuration for the WordPress REST client.

Connection settings are read once from a YAML file and/or environment
variables and are treated as immutable afterwards.

Example file::

    wordpress:
      base_url: https://blog.example.com
      username: editor
      password: "abcd efgh ijkl mnop"
"""

import os
from pathlib import Path
from typing import Any, Dict, IO, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigError

DEFAULT_CONTEXT = "/wp-json/wp/v2"
DEFAULT_CONFIG_PATH = Path.home() / ".wpctl" / "config.yaml"

ENV_CONFIG_PATH = "WPCTL_CONFIG"
ENV_OVERRIDES = {
    "WP_API_URL": "base_url",
    "WP_USERNAME": "username",
    "WP_PASSWORD": "password",
    "WP_TOKEN": "token",
}


class WordpressSettings(BaseModel):
    """Connection settings for one WordPress site."""

    base_url: HttpUrl = Field(..., description="Site URL, without the API context")
    username: Optional[str] = Field(None, description="User for application-password auth")
    password: Optional[SecretStr] = Field(None, description="Application password")
    token: Optional[SecretStr] = Field(None, description="Bearer token (JWT)")
    context: str = Field(default=DEFAULT_CONTEXT, description="API path prefix")
    timeout: int = Field(default=30, description="Request timeout in seconds")
    debug: bool = Field(default=False, description="Log requests and responses")

    model_config = ConfigDict(frozen=True)

    @field_validator("context")
    @classmethod
    def validate_context(cls, v: str) -> str:
        """Normalize to a leading slash and no trailing slash."""
        v = v.strip().strip("/")
        return f"/{v}" if v else ""

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: int) -> int:
        """Validate timeout value."""
        if v <= 0:
            raise ValueError("Timeout must be greater than 0")
        if v > 300:  # 5 minutes max
            raise ValueError("Timeout cannot exceed 300 seconds")
        return v

    @property
    def url(self) -> str:
        """Base URL without trailing slash."""
        return str(self.base_url).rstrip("/")

    @property
    def api_root(self) -> str:
        """Base URL joined with the API context."""
        return f"{self.url}{self.context}"


class ClientConfig(BaseModel):
    """Top-level configuration document."""

    wordpress: WordpressSettings

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], apply_env: bool = True) -> "ClientConfig":
        """Build a config from parsed data, applying environment overrides.

        Raises:
            ConfigError: If the data does not describe a valid configuration
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a mapping")

        settings = dict(data.get("wordpress") or {})
        if apply_env:
            settings.update(_environment_overrides())

        try:
            return cls(wordpress=settings)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    @classmethod
    def load(cls, stream: Union[str, IO], apply_env: bool = True) -> "ClientConfig":
        """Parse a YAML document.

        Args:
            stream: YAML text or an open file
            apply_env: Whether environment variables override file values

        Raises:
            ConfigError: If the document is not valid YAML or configuration
        """
        try:
            data = yaml.safe_load(stream)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse configuration: {e}")

        return cls.from_dict(data or {}, apply_env=apply_env)

    @classmethod
    def from_file(cls, path: Union[str, Path], apply_env: bool = True) -> "ClientConfig":
        """Load configuration from a YAML file.

        Raises:
            ConfigError: If the file cannot be read or is invalid
        """
        path = Path(path)
        try:
            with open(path, "r") as f:
                return cls.load(f, apply_env=apply_env)
        except OSError as e:
            raise ConfigError(f"Failed to read configuration file {path}: {e}")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Build configuration from environment variables only.

        Raises:
            ConfigError: If WP_API_URL is not set
        """
        if not os.getenv("WP_API_URL"):
            raise ConfigError("WP_API_URL environment variable is required")

        return cls.from_dict({"wordpress": {}})


def has_environment_config() -> bool:
    """Check if environment variables alone provide a usable configuration."""
    return bool(os.getenv("WP_API_URL"))


def load_config(path: Optional[Union[str, Path]] = None) -> ClientConfig:
    """Resolve and load configuration.

    Order: explicit ``path``, then ``$WPCTL_CONFIG``, then
    ``~/.wpctl/config.yaml``, then the environment alone.

    Raises:
        ConfigError: If no source yields a valid configuration
    """
    if path is not None:
        return ClientConfig.from_file(path)

    env_path = os.getenv(ENV_CONFIG_PATH)
    if env_path:
        return ClientConfig.from_file(env_path)

    if DEFAULT_CONFIG_PATH.exists():
        return ClientConfig.from_file(DEFAULT_CONFIG_PATH)

    if has_environment_config():
        return ClientConfig.from_env()

    raise ConfigError(
        "No WordPress configuration found. Please either:\n"
        f"  1. Create {DEFAULT_CONFIG_PATH}, or\n"
        "  2. Set environment variables: WP_API_URL, WP_USERNAME and WP_PASSWORD"
    )


def _environment_overrides() -> Dict[str, str]:
    overrides = {}
    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            overrides[field_name] = value
    return overrides
