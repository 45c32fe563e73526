"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (UNPKG_CATALOG__CDN__URL=https://unpkg.com)
  2. unpkg-catalog.yaml     (searched in cwd, then the platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_APP_NAME = "unpkg-catalog"
_DEFAULT_CACHE_DIR = platformdirs.user_cache_dir(_APP_NAME)
# Same file name the catalog has always used inside its cache folder
_DEFAULT_DB_PATH = str(Path(_DEFAULT_CACHE_DIR) / "cache.db")


def _find_config_file() -> str | None:
    """Return the path of the first unpkg-catalog.yaml found, or None."""
    candidates = [
        Path("unpkg-catalog.yaml"),
        Path(platformdirs.user_config_dir(_APP_NAME)) / "unpkg-catalog.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class CdnSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str = "http://unpkg.com"


class NpmSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    registry_url: str = "https://registry.npmjs.org"
    search_size: int = 25


class FetcherSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    request_timeout_seconds: float = 30.0
    user_agent: str = "unpkg-catalog"


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    db_path: str = _DEFAULT_DB_PATH
    ttl_hours: int = 24


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: UNPKG_CATALOG__CACHE__TTL_HOURS=1
        env_prefix="UNPKG_CATALOG__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    cdn: CdnSettings = CdnSettings()
    npm: NpmSettings = NpmSettings()
    fetcher: FetcherSettings = FetcherSettings()
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
