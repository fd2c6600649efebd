# app/config.py
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service settings, read from environment variables (or a .env file)."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", env_ignore_empty=True,
    )

    app_title: str = "Product API"
    host: str = "0.0.0.0"
    port: int = 3000
    api_key: str = "12345"
    log_level: str = "INFO"
    seed_sample_data: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
