# blomsterlan/config.py
"""
Environment-driven settings.

Every field can be overridden with a BLOMSTERLAN_-prefixed environment
variable, e.g. BLOMSTERLAN_DATABASE_URL=sqlite:///other.sqlite
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BLOMSTERLAN_")

    database_url: str = "sqlite:///db.sqlite"  # file in project root
    database_echo: bool = False  # True prints SQL in the terminal

    log_level: str = "INFO"

    api_title: str = "BlomsterLån API"
    api_version: str = "0.1.0"


@lru_cache
def get_settings() -> Settings:
    return Settings()
