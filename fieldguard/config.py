"""Library configuration via environment variables."""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings loaded from FIELDGUARD_* environment variables."""

    # Logging
    DEBUG: bool = False
    LOG_LEVEL: str = "info"
    LOG_VALIDATION_SUMMARY: bool = False  # Log every validation pass at info level

    # Schema declarations
    SCHEMA_DIR: str = "./schemas"

    model_config = {"env_prefix": "FIELDGUARD_", "env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
