"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (APPLEDOCS__SERVER__TRANSPORT=http)
  2. appledocs.yaml         (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir("appledocs")

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
)


def _find_config_file() -> str | None:
    """Return the path of the first appledocs.yaml found, or None."""
    candidates = [
        Path("appledocs.yaml"),
        Path(_DEFAULT_CONFIG_DIR) / "appledocs.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080


class UpstreamSettings(BaseModel):
    base_url: str = "https://developer.apple.com/tutorials/data"
    timeout_seconds: float = Field(default=15.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    referer: str = "https://developer.apple.com/documentation"


class CacheSettings(BaseModel):
    ttl_minutes: float = Field(default=10.0, gt=0)
    purge_interval_minutes: float = Field(default=30.0, gt=0)


class SearchSettings(BaseModel):
    default_max_results: int = Field(default=20, ge=1)
    max_results_limit: int = Field(default=100, ge=1)
    global_framework_limit: int = Field(default=20, ge=1)
    suggestion_cutoff: int = Field(default=70, ge=0, le=100)
    max_suggestions: int = Field(default=5, ge=0)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: APPLEDOCS__SERVER__PORT=9090
        env_prefix="APPLEDOCS__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    upstream: UpstreamSettings = UpstreamSettings()
    cache: CacheSettings = CacheSettings()
    search: SearchSettings = SearchSettings()
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
