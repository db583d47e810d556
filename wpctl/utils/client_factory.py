"""Client factory.

This module provides a centralized factory for creating WordpressClient
instances from configuration files, environment variables or explicit
settings, plus the helpers CLI commands use to get a client from their
Typer context.
"""

from pathlib import Path
from typing import Any, Optional, Tuple, Union

import typer

from ..client import WordpressClient
from ..config import ClientConfig, WordpressSettings, load_config
from ..exceptions import ConfigError, WpCtlError


class ClientFactory:
    """Factory for creating configured WordpressClient instances."""

    @staticmethod
    def from_config(config: ClientConfig, **kwargs: Any) -> WordpressClient:
        """Create a client from a loaded configuration."""
        return WordpressClient(settings=config.wordpress, **kwargs)

    @classmethod
    def from_file(cls, path: Union[str, Path], **kwargs: Any) -> WordpressClient:
        """Create a client from a YAML configuration file.

        Raises:
            ConfigError: If the file is missing or invalid
        """
        return cls.from_config(ClientConfig.from_file(path), **kwargs)

    @classmethod
    def from_env(cls, **kwargs: Any) -> WordpressClient:
        """Create a client from environment variables only.

        Raises:
            ConfigError: If required environment variables are missing
        """
        return cls.from_config(ClientConfig.from_env(), **kwargs)

    @staticmethod
    def build(
        base_url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
        **kwargs: Any,
    ) -> WordpressClient:
        """Create a client from explicit connection values.

        Raises:
            ConfigError: If the values do not form valid settings
        """
        try:
            settings = WordpressSettings(
                base_url=base_url,
                username=username,
                password=password,
                token=token,
                **kwargs,
            )
        except ValueError as e:
            raise ConfigError(f"Invalid connection settings: {e}")
        return WordpressClient(settings=settings)


def create_client(config_path: Optional[Union[str, Path]] = None, debug: bool = False) -> WordpressClient:
    """Resolve configuration and build a client.

    Raises:
        ConfigError: If no configuration can be loaded
        WpCtlError: If client creation fails
    """
    try:
        return ClientFactory.from_config(load_config(config_path), debug=debug)
    except WpCtlError:
        raise
    except ValueError as e:
        raise WpCtlError(f"Failed to create WordPress client: {e}")


def get_client_from_context(ctx: typer.Context) -> WordpressClient:
    """Get the client for a CLI command, creating it on first use.

    Args:
        ctx: Typer context

    Returns:
        Configured WordpressClient instance
    """
    client = ctx.obj.get("client")
    if client is None:
        client = create_client(ctx.obj.get("config_path"), debug=ctx.obj.get("debug", False))
        ctx.obj["client"] = client
    return client


def get_client_and_formatter(ctx: typer.Context) -> Tuple[WordpressClient, Any]:
    """Get both client and formatter from context.

    Args:
        ctx: Typer context

    Returns:
        Tuple of (WordpressClient, OutputFormatter)
    """
    client = get_client_from_context(ctx)
    formatter = ctx.obj["output_formatter"]
    return client, formatter
