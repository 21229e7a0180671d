"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="REPO_VIEWER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # --- Storage & inputs ---
    storage_root: Path = Path("repos")
    config_file: Path = Path("repos/config.yml")
    languages_file: Path = Path("languages.json")
    static_dir: Path = Path("static")

    # Host used to expand "owner/name" and bare "name" shorthands
    default_host: str = "github.com"

    # --- Synchronization ---
    refresh_interval: float = Field(default=3600.0, gt=0)  # seconds
    sync_workers: int = Field(default=4, ge=1)
    sync_timeout: float = Field(default=300.0, gt=0)  # seconds, per git command

    @field_validator("storage_root", "config_file", "languages_file", "static_dir")
    @classmethod
    def expand_home(cls, v: Path) -> Path:
        return Path(v).expanduser()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
