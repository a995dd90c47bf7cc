"""
Runtime configuration.

Each concern has its own BaseSettings group read from prefixed environment
variables (SHEET_, STORAGE_, ALERT_, LLM_, API_); top-level values and a
.env file are read by Settings itself.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SheetSettings(BaseSettings):
    """Remote spreadsheet source and write bridge."""

    model_config = SettingsConfigDict(env_prefix="SHEET_")

    source_url: str = ""
    bridge_url: str = ""
    timeout: float = 30.0

    # "." treats the first comma as a decimal point, "," treats periods as
    # thousands separators.
    decimal_separator: Literal[".", ","] = "."
    default_reorder_level: int = Field(default=5, ge=0)


class StorageSettings(BaseSettings):
    """Local cache backend."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    backend: Literal["sqlite", "memory"] = "sqlite"
    key_prefix: str = "stok_makmur_"

    data_dir: Path = Path("data")
    db_name: str = "stokmakmur.db"
    pool_size: int = Field(default=2, ge=1)
    busy_timeout: int = 30000  # ms

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class AlertSettings(BaseSettings):
    """Low-stock alert webhook."""

    model_config = SettingsConfigDict(env_prefix="ALERT_")

    enabled: bool = True
    webhook_url: str = ""  # empty: messages are only logged
    timeout: float = 10.0
    footer: str = "Stok Makmur stock notifications"


class LLMSettings(BaseSettings):
    """Text-generation provider used for inventory insights."""

    model_config = SettingsConfigDict(env_prefix="LLM_")

    provider: Literal["ollama"] = "ollama"
    host: str = "http://localhost:11434"
    model_name: str = "llama3.1:8b"
    timeout: int = 120
    max_tokens: int = 1024
    temperature: float = 0.7
    top_p: float = 0.9

    # Resilience
    max_retries: int = 3
    retry_delay: float = 1.0
    retry_multiplier: float = 2.0
    failure_threshold: int = 3
    cooldown_seconds: int = 60


class APISettings(BaseSettings):
    """HTTP server."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Stok Makmur"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    sheet: SheetSettings = Field(default_factory=SheetSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    alert: AlertSettings = Field(default_factory=AlertSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    api: APISettings = Field(default_factory=APISettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
