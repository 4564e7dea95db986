"""Configuration settings for tollgate."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from tollgate.constants import PROJECT_DIR, RULES_FILE


class Settings(BaseSettings):
    """Settings loaded from TOLLGATE_* environment variables.

    Logging:
    - TOLLGATE_LOG_LEVEL: level of the tollgate loggers (default INFO)
    - TOLLGATE_LOG_DIR: directory for rotating log files; unset disables file logs
    - TOLLGATE_LOG_JSON: also write a structured JSON log

    Rules:
    - TOLLGATE_RULES_FILE: rule file name looked up in the project directory
    - TOLLGATE_PROJECT_DIR_NAME: per-project directory holding the rule file
    """

    model_config = SettingsConfigDict(
        env_prefix="TOLLGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    log_json: bool = False

    # Rules
    rules_file: str = RULES_FILE
    project_dir_name: str = PROJECT_DIR


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
