"""Configuration management with YAML and environment variable support"""

import os
from typing import Any, Dict, Optional, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


class BaseConfigSection(BaseSettings):
    """Base class for config sections: env vars > YAML values > defaults."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings source priority: env vars > init kwargs > defaults."""
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


class YouTubeApiConfig(BaseConfigSection):
    """YouTube Data API configuration"""

    api_key: str = ""
    application_name: str = "ytmetadata"
    max_attempts: int = 2
    quota_reset_margin: int = 60  # seconds added after UTC midnight

    model_config = SettingsConfigDict(env_prefix="YTMETA_YOUTUBE_")

    @field_validator("max_attempts")
    @classmethod
    def validate_attempts(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v

    @field_validator("quota_reset_margin")
    @classmethod
    def validate_margin(cls, v: int) -> int:
        if v < 0:
            raise ValueError("quota_reset_margin must not be negative")
        return v


class CacheConfig(BaseConfigSection):
    """Metadata cache configuration"""

    cache_root: str = "/app/cache"
    max_age_days: float = 2

    model_config = SettingsConfigDict(env_prefix="YTMETA_CACHE_")

    @field_validator("max_age_days")
    @classmethod
    def validate_max_age(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("max_age_days must be positive")
        return v


class LoggingConfig(BaseConfigSection):
    """Logging configuration"""

    level: str = "INFO"
    format: str = "json"

    model_config = SettingsConfigDict(env_prefix="YTMETA_LOGGING_")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("json", "console"):
            raise ValueError("format must be 'json' or 'console'")
        return v


class MonitoringConfig(BaseConfigSection):
    """Monitoring configuration"""

    metrics_enabled: bool = True

    model_config = SettingsConfigDict(env_prefix="YTMETA_MONITORING_")


class TestingConfig(BaseConfigSection):
    """Test mode configuration (serve demo records instead of calling the API)"""

    test_mode: bool = False

    model_config = SettingsConfigDict(env_prefix="YTMETA_TESTING_")


class Config(BaseSettings):
    """Main configuration"""

    youtube: YouTubeApiConfig = Field(default_factory=YouTubeApiConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)
    testing: TestingConfig = Field(default_factory=TestingConfig)

    model_config = SettingsConfigDict(env_prefix="YTMETA_")


class ConfigService:
    """Service for loading and managing configuration"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = config_path or "config.yaml"
        self._config: Optional[Config] = None

    def load(self) -> Config:
        """Load configuration from YAML file with environment variable overrides."""
        config_data: Dict[str, Any] = {}

        if os.path.exists(self.config_path):
            with open(self.config_path, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f)
                if yaml_data:
                    config_data = yaml_data

        self._config = Config(
            youtube=YouTubeApiConfig(**config_data.get("youtube", {})),
            cache=CacheConfig(**config_data.get("cache", {})),
            logging=LoggingConfig(**config_data.get("logging", {})),
            monitoring=MonitoringConfig(**config_data.get("monitoring", {})),
            testing=TestingConfig(**config_data.get("testing", {})),
        )

        return self._config

    def validate(self) -> bool:
        """Validate the loaded configuration"""
        if self._config is None:
            raise ValueError("Configuration not loaded. Call load() first.")

        if not self._config.youtube.api_key and not self._config.testing.test_mode:
            raise ValueError("A YouTube API key must be configured")

        return True

    @property
    def config(self) -> Config:
        """Get the loaded configuration"""
        if self._config is None:
            raise ValueError("Configuration not loaded. Call load() first.")
        return self._config
