"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (REMOTEVALUE__CACHE__MAX_ENTRIES=500)
  2. remotevalue.yaml       (searched in cwd, then ~/.config/remotevalue/)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first remotevalue.yaml found, or None."""
    candidates = [
        Path("remotevalue.yaml"),
        Path.home() / ".config" / "remotevalue" / "remotevalue.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # None keeps every parsed document for the lifetime of the process
    max_entries: int | None = Field(default=None, ge=1)


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    """Top-level settings.

    Only ``cache`` is consumed by the library itself. ``logging`` is applied by
    the host application, which calls
    ``remotevalue.logging_config.configure_logging(settings.logging)`` once at
    startup; importing or using remotevalue never reconfigures structlog.
    """

    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: REMOTEVALUE__LOGGING__LEVEL=DEBUG
        env_prefix="REMOTEVALUE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    cache: CacheSettings = CacheSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
