"""Application settings using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SETTINGS_LOGGER = logging.getLogger("eternalcurrencies.settings")

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "EternalCurrencies"
    app_env: str = "local"
    debug: bool = False
    log_level: str = "INFO"

    # Currency registry: a JSON file or a data directory
    registry_path: str | None = None

    # Ledger persistence and journal
    data_dir: str = "data/ledgers"
    journal_enabled: bool = True

    model_config = SettingsConfigDict(
        env_prefix="ETERNALCURRENCIES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("registry_path", mode="before")
    @classmethod
    def empty_registry_path(cls, v: Any) -> str | None:
        """Treat an empty string as unset."""
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> str:
        """Uppercase known level names; fall back to INFO with a warning."""
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raw = str(v)
            if len(raw) > 200:
                raw = raw[:200] + "..."
            _SETTINGS_LOGGER.warning("Unknown log_level, using INFO: %s", raw)
            return "INFO"
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get settings instance (cached)."""
    return Settings()
