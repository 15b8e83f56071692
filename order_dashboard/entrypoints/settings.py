from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    SHOPIFY_SHOP_NAME: str
    SHOPIFY_ACCESS_TOKEN: str
    SHOPIFY_API_VERSION: str = "2025-01"
    SHOPIFY_TIMEOUT_SECONDS: float = 10.0

    ORDERS_PAGE_SIZE: int = Field(default=5, ge=1)
    MAX_SESSIONS: int = Field(default=100, ge=1)

    LOG_LEVEL: str = "INFO"
    HOST: str = "127.0.0.1"
    PORT: int = 8000


@lru_cache
def get_config() -> Config:
    return Config()  # type: ignore[call-arg]
