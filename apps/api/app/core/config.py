"""Application configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    token_secret: str = Field(min_length=1)
    token_algorithm: Literal["HS256", "HS384", "HS512"] = "HS256"
    token_ttl_seconds: int = Field(default=3600, gt=0)
    cookie_secure: bool = False

    storage_backend: Literal["file", "mongo", "memory"] = "file"
    data_file: str = "movies.json"
    mongo_url: str = "mongodb://localhost:27017"
    mongo_database: str = "api"
    mongo_collection: str = "movies"
    mongo_timeout_ms: int = Field(default=5000, gt=0)
    store_lock_timeout_seconds: float = Field(default=5.0, gt=0)

    api_version: str = "1.0"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MOVIES_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
