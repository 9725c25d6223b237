"""Plugin configuration using pydantic-settings.

Configuration hierarchy:
- DriverConfig: Volume root directory and permissions
- ServerConfig: HTTP / unix socket binding
- LoggingConfig: Logging behavior
- PluginConfig: Main config aggregating all sub-configs

Environment variable prefix: LOCALVOL_
Example: LOCALVOL_DRIVER_ROOT_DIR=/var/lib/localvol
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DriverConfig(BaseSettings):
    """Volume driver configuration.

    Physical layout under root_dir:
      _volumes/<volume_id>  persistent data
      _mounts/<volume_id>   symlink, present only while mounted
    """

    model_config = SettingsConfigDict(env_prefix="LOCALVOL_DRIVER_")

    root_dir: str = Field(
        default="/var/vcap/data/localvol",
        description="Root directory holding _volumes and _mounts",
    )
    dir_mode: int = Field(
        default=0o777,
        description="Permission bits for created directories",
    )


class ServerConfig(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="LOCALVOL_SERVER_")

    host: str = Field(default="127.0.0.1", description="Server bind address")
    port: int = Field(default=9750, description="Server port")
    socket_path: str = Field(
        default="",
        description="Unix socket path (takes precedence over host/port)",
    )


class LoggingConfig(BaseSettings):
    """Logging configuration.

    Supports both text and JSON formats for different environments:
    - text: Human-readable for local development
    - json: Structured logging for production (log aggregation)
    """

    model_config = SettingsConfigDict(env_prefix="LOCALVOL_LOGGING_")

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="text", description="Log format (text, json)")
    service_name: str = Field(default="localvol", description="Service identifier in logs")
    rate_limit_seconds: float = Field(
        default=5.0, description="Window in which a repeated volume event is logged once"
    )


class PluginConfig(BaseSettings):
    """Main plugin configuration aggregating all sub-configs.

    Environment variable prefix: LOCALVOL_
    Sub-configs use their own prefixes (LOCALVOL_DRIVER_, LOCALVOL_SERVER_, etc.)
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCALVOL_",
        env_nested_delimiter="__",
    )

    driver: DriverConfig = Field(default_factory=DriverConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_config() -> PluginConfig:
    """Get cached plugin configuration singleton."""
    return PluginConfig()
