"""
Settings Management Module

Provides pydantic-based defaults for URL building with:
- YAML configuration file loading
- Environment variable overrides (PATHCAT_*)
- Conversion to the immutable PathCatConfig used by build_url
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .config import (
    DEFAULT_BUFFER_SIZE,
    ArrayFormat,
    BooleanFormat,
    IntrospectionMode,
    ObjectAccessorFormat,
    PathCatConfig,
    PropertyNameFormat,
)
from .exceptions import ConfigError, ConfigValidationError
from .log_config import configure_logging


CONFIG_FILE_ENV = "PATHCAT_CONFIG_FILE"


class PathCatSettings(BaseSettings):
    """
    Process-wide PathCat defaults.

    Configuration hierarchy (lowest to highest precedence):
    1. Field defaults
    2. YAML file (explicit path or ``PATHCAT_CONFIG_FILE``)
    3. Environment variables (``PATHCAT_*``)

    Examples:
        >>> settings = PathCatSettings(array_format="indexed")
        >>> settings.to_config().array_format
        <ArrayFormat.INDEXED: 'indexed'>
    """

    model_config = SettingsConfigDict(
        env_prefix="PATHCAT_",
        case_sensitive=False,
        extra="ignore",
    )

    boolean_format: BooleanFormat = BooleanFormat.DEFAULT
    array_format: ArrayFormat = ArrayFormat.REPEAT
    array_delimiter: str = Field(default=",", min_length=1, max_length=1)
    property_name_format: PropertyNameFormat = PropertyNameFormat.DEFAULT
    object_accessor_format: ObjectAccessorFormat = ObjectAccessorFormat.DOT_NOTATION
    introspection: IntrospectionMode = IntrospectionMode.ATTRIBUTES
    json_by_alias: bool = False
    buffer_size: int = Field(default=DEFAULT_BUFFER_SIZE, gt=0)

    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # environment overrides values passed in from the YAML file
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def load_from_yaml(cls, config_path: Path | None = None) -> "PathCatSettings":
        """
        Load settings from a YAML configuration file.

        Args:
            config_path: Path to config file (default: ``$PATHCAT_CONFIG_FILE``)

        Returns:
            PathCatSettings instance; defaults plus environment when no file is configured
        """
        if config_path is None:
            env_path = os.getenv(CONFIG_FILE_ENV)
            config_path = Path(env_path) if env_path else None

        config_data: dict[str, Any] = {}
        if config_path is not None:
            if not config_path.exists():
                raise ConfigError(
                    "Configuration file not found", context={"path": str(config_path)}
                )
            with open(config_path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ConfigError(
                    "Configuration file must contain a mapping",
                    context={"path": str(config_path)},
                )
            # allow both a top-level mapping and a "pathcat:" section
            config_data = loaded.get("pathcat", loaded)

        try:
            return cls(**config_data)
        except ValidationError as e:
            first = e.errors()[0]
            raise ConfigValidationError(
                "Invalid PathCat settings",
                config_key=".".join(str(p) for p in first["loc"]),
                config_value=first.get("input"),
            ) from e

    def apply_logging(self) -> None:
        """Configure structlog from ``log_level`` and ``log_json``."""
        configure_logging(self.log_level, json_output=self.log_json)

    def to_config(self) -> PathCatConfig:
        """Build the immutable configuration described by these settings."""
        return PathCatConfig(
            boolean_format=self.boolean_format,
            array_format=self.array_format,
            array_delimiter=self.array_delimiter,
            property_name_format=self.property_name_format,
            object_accessor_format=self.object_accessor_format,
            introspection=self.introspection,
            json_by_alias=self.json_by_alias,
            buffer_size=self.buffer_size,
        )


@lru_cache
def get_settings(config_path: Path | None = None) -> PathCatSettings:
    """
    Get cached settings instance.

    Args:
        config_path: Optional path to config file

    Returns:
        PathCatSettings instance
    """
    return PathCatSettings.load_from_yaml(config_path)


def reload_settings() -> PathCatSettings:
    """Reload settings by clearing cache."""
    get_settings.cache_clear()
    get_default_config.cache_clear()
    return get_settings()


@lru_cache
def get_default_config() -> PathCatConfig:
    """Configuration used when ``build_url`` is called without one."""
    return get_settings().to_config()


__all__ = [
    "CONFIG_FILE_ENV",
    "PathCatSettings",
    "get_default_config",
    "get_settings",
    "reload_settings",
]
